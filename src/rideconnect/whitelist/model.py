from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class WhitelistedUser:
    """Pre-approval row: only whitelisted emails may sign up."""

    id: str
    email: str
    name: str
    role: Role
    added_by: Optional[str]
    added_at: Optional[datetime] = None
    is_active: bool = True
    is_registered: bool = False
    registered_at: Optional[datetime] = None


@dataclass(frozen=True)
class RpcResult:
    """Result shape shared by add_whitelisted_user / register_whitelisted_user."""

    success: bool
    message: Optional[str] = None
    error: Optional[str] = None
    user_id: Optional[str] = None
    email: Optional[str] = None
    name: Optional[str] = None
    role: Optional[Role] = None

    @classmethod
    def failure(cls, error: str) -> "RpcResult":
        return cls(success=False, error=error)

    def to_dict(self) -> dict:
        out = {k: v for k, v in asdict(self).items() if v is not None}
        if self.role is not None:
            out["role"] = self.role.value
        return out
