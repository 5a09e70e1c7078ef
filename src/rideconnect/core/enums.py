from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Account roles used for page access."""

    STUDENT = "student"
    STAFF = "staff"
    ADMIN = "admin"


class AnalyticsAction(str, Enum):
    """Audit actions written to analytics_logs."""

    SIGN_IN = "sign_in"
    SIGN_OUT = "sign_out"
    SIGN_UP = "sign_up"
    BUS_CREATED = "bus_created"
    STUDENT_ASSIGNED = "student_assigned"
    ASSIGNMENT_REMOVED = "assignment_removed"
    ANNOUNCEMENT_CREATED = "announcement_created"
    USER_WHITELISTED = "user_whitelisted"
