from __future__ import annotations

import logging
from typing import Optional

from werkzeug.security import generate_password_hash

from ..common.filters import filter_rows
from ..common.validators import normalize_email, require_email, require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError
from ..profiles.repository import ProfileRepository
from .model import RpcResult, WhitelistedUser
from .repository import WhitelistRepository

logger = logging.getLogger(__name__)


class WhitelistService:
    """Whitelist-gated account creation.

    ``add_whitelisted_user`` and ``register_whitelisted_user`` keep the argument
    names and result shape of the RPC functions the JSON API exposes. Failures
    are raised as domain errors; the API layer turns them into
    ``{"success": false, "error": ...}``.
    """

    def __init__(self, whitelist: WhitelistRepository, profiles: ProfileRepository):
        self._whitelist = whitelist
        self._profiles = profiles

    def add_whitelisted_user(
        self,
        *,
        current_role: Role,
        added_by: Optional[str],
        user_email: str,
        user_name: str,
        user_role: str = Role.STUDENT.value,
    ) -> RpcResult:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only admins can add users to the whitelist")

        if not (user_email or "").strip() or not (user_name or "").strip():
            raise ValidationError("Please fill in all user details")

        email = require_email(user_email)
        name = require_non_empty(user_name, "Name")
        try:
            role = Role(user_role or Role.STUDENT.value)
        except ValueError:
            raise ValidationError(f"Invalid role: {user_role}")

        if self._whitelist.get_by_email(email):
            raise ValidationError("User is already whitelisted")

        self._whitelist.create_entry(email=email, name=name, role=role, added_by=added_by)
        logger.info("Whitelisted %s as %s", email, role.value)
        return RpcResult(
            success=True,
            message=f"User {email} added to whitelist successfully",
            email=email,
            name=name,
            role=role,
        )

    def register_whitelisted_user(self, *, user_email: str, user_password: str) -> RpcResult:
        email = normalize_email(user_email)
        if not email:
            raise ValidationError("Email is required")

        entry = self._whitelist.get_by_email(email)
        if not entry or not entry.is_active:
            raise ValidationError("Email is not whitelisted. Please contact an administrator.")
        if entry.is_registered or self._profiles.get_by_email(email):
            raise ValidationError("This email is already registered. Please sign in instead.")

        require_min_length(user_password, "Password", MIN_PASSWORD_LENGTH)

        # claiming the row first stops two concurrent sign-ups for the same email
        if not self._whitelist.mark_registered(entry_id=entry.id):
            raise ValidationError("This email is already registered. Please sign in instead.")
        try:
            user_id = self._profiles.create_profile(
                name=entry.name,
                email=email,
                role=entry.role,
                password_hash=generate_password_hash(user_password),
            )
        except Exception:
            self._whitelist.clear_registered(entry_id=entry.id)
            raise

        logger.info("Registered whitelisted user %s (%s)", email, entry.role.value)
        return RpcResult(
            success=True,
            message="Account created successfully",
            user_id=user_id,
            email=email,
            name=entry.name,
            role=entry.role,
        )

    def list_entries(self, search: str = "") -> list[WhitelistedUser]:
        return filter_rows(self._whitelist.list_all(), search, ("name", "email", "role"))
