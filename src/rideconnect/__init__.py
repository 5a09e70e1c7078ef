"""PU RideConnect package.

University transportation management: whitelist-gated accounts, bus
assignments and announcements. Organized by feature modules (profiles,
whitelist, buses, assignments, announcements, analytics) with thin Flask
controllers on top of service/repository layers.
"""
