from __future__ import annotations

from enum import Enum
from typing import Any, Iterable, Mapping, Sequence, TypeVar

Row = TypeVar("Row")


def _field_value(row: Any, field: str) -> Any:
    if isinstance(row, Mapping):
        value = row.get(field)
    else:
        value = getattr(row, field, None)
    if isinstance(value, Enum):
        return value.value
    return value


def matches_search(row: Any, term: str, fields: Sequence[str]) -> bool:
    """Case-insensitive substring match of ``term`` against any of ``fields``."""
    needle = (term or "").strip().lower()
    if not needle:
        return True
    for field in fields:
        value = _field_value(row, field)
        if value is None:
            continue
        if needle in str(value).lower():
            return True
    return False


def filter_rows(rows: Iterable[Row], term: str, fields: Sequence[str]) -> list[Row]:
    return [r for r in rows if matches_search(r, term, fields)]
