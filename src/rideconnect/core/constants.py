"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_SESSION_DAYS = 7
ANNOUNCEMENT_FEED_LIMIT = 10
MIN_PASSWORD_LENGTH = 6
ANALYTICS_PAGE_LIMIT = 200
