from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from .model import Profile


class ProfileRepository(Protocol):
    def get_by_id(self, profile_id: str) -> Optional[Profile]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Profile]:
        raise NotImplementedError

    def create_profile(self, *, name: str, email: str, role: Role, password_hash: str) -> str:
        """Insert a profile and return its id."""

        raise NotImplementedError

    def list_all(self) -> Sequence[Profile]:
        """All profiles, newest first."""

        raise NotImplementedError

    def list_by_role(self, role: Role) -> Sequence[Profile]:
        """Profiles with ``role``, ordered by name."""

        raise NotImplementedError
