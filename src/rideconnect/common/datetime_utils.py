from __future__ import annotations

from datetime import datetime
from typing import Optional


def format_date(value: Optional[datetime]) -> str:
    """Jinja ``date`` filter: dd/mm/YYYY, or a dash when unset."""
    if value is None:
        return "-"
    return value.strftime("%d/%m/%Y")
