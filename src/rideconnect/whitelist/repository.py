from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from .model import WhitelistedUser


class WhitelistRepository(Protocol):
    def get_by_email(self, email: str) -> Optional[WhitelistedUser]:
        raise NotImplementedError

    def create_entry(self, *, email: str, name: str, role: Role, added_by: Optional[str]) -> str:
        raise NotImplementedError

    def mark_registered(self, *, entry_id: str) -> bool:
        """Flag the row as registered. False if it was already registered."""

        raise NotImplementedError

    def clear_registered(self, *, entry_id: str) -> None:
        """Undo ``mark_registered`` when the profile insert fails."""

        raise NotImplementedError

    def list_all(self) -> Sequence[WhitelistedUser]:
        raise NotImplementedError
