from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Bus


class BusRepository(Protocol):
    def get_by_id(self, bus_id: str) -> Optional[Bus]:
        raise NotImplementedError

    def get_by_number(self, bus_number: str) -> Optional[Bus]:
        raise NotImplementedError

    def create_bus(self, *, bus_number: str, route_name: str, capacity: Optional[int]) -> str:
        raise NotImplementedError

    def list_all(self, *, order_by: str = "bus_number") -> Sequence[Bus]:
        """``order_by`` is ``bus_number`` (ascending) or ``created_at`` (newest first)."""

        raise NotImplementedError
