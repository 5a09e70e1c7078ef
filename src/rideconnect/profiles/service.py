from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from werkzeug.security import check_password_hash

from ..common.filters import filter_rows
from ..common.validators import normalize_email
from ..core.enums import Role
from ..core.exceptions import AuthenticationError
from .model import Profile
from .repository import ProfileRepository

logger = logging.getLogger(__name__)

PROFILE_SEARCH_FIELDS = ("name", "email", "role")

_DASHBOARD_ENDPOINTS = {
    Role.STUDENT: "student_dashboard",
    Role.STAFF: "staff_dashboard",
    Role.ADMIN: "admin_dashboard",
}


def dashboard_endpoint_for(role: Role) -> str:
    """Flask endpoint of the landing dashboard for ``role``."""
    return _DASHBOARD_ENDPOINTS.get(role, "index")


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after sign in."""

    user_id: str
    name: str
    email: str
    role: Role


class AuthService:
    """Use case: sign in with email + password."""

    def __init__(self, profiles: ProfileRepository):
        self._profiles = profiles

    def authenticate(self, email: str, password: str) -> SessionUser:
        email = normalize_email(email)
        profile = self._profiles.get_by_email(email) if email else None
        if not profile:
            raise AuthenticationError("Invalid login credentials")

        try:
            ok = check_password_hash(profile.password_hash, password or "")
        except ValueError:
            # e.g. placeholder hashes or corrupted values
            ok = False

        if not ok:
            logger.info("Rejected sign in for %s", email)
            raise AuthenticationError("Invalid login credentials")

        return SessionUser(user_id=profile.id, name=profile.name, email=profile.email, role=profile.role)


class ProfileService:
    """Use case: browse users (admin and staff dashboards)."""

    def __init__(self, profiles: ProfileRepository):
        self._profiles = profiles

    def get(self, profile_id: str):
        return self._profiles.get_by_id(profile_id)

    def list_all(self, search: str = "") -> list[Profile]:
        return filter_rows(self._profiles.list_all(), search, PROFILE_SEARCH_FIELDS)

    def list_students(self, search: str = "") -> list[Profile]:
        return filter_rows(self._profiles.list_by_role(Role.STUDENT), search, ("name", "email"))

    def role_counts(self, profiles: Optional[Sequence[Profile]] = None) -> dict:
        if profiles is None:
            profiles = self._profiles.list_all()
        counts = {role.value: 0 for role in Role}
        for p in profiles:
            counts[p.role.value] += 1
        counts["total"] = len(profiles)
        return counts
