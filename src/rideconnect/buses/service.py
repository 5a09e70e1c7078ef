from __future__ import annotations

import logging

from ..common.filters import filter_rows
from ..common.validators import require_positive_int
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError
from .model import Bus
from .repository import BusRepository

logger = logging.getLogger(__name__)

BUS_SEARCH_FIELDS = ("bus_number", "route_name")


class BusService:
    """Use case: register and browse buses."""

    def __init__(self, buses: BusRepository):
        self._buses = buses

    def create_bus(self, *, current_role: Role, bus_number: str, route_name: str, capacity) -> str:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only admins can add buses")

        bus_number = (bus_number or "").strip()
        route_name = (route_name or "").strip()
        if not bus_number or not route_name or not str(capacity or "").strip():
            raise ValidationError("Please fill in all bus details")

        seats = require_positive_int(capacity, "Capacity")

        if self._buses.get_by_number(bus_number):
            raise ValidationError(f"Bus {bus_number} already exists")

        bus_id = self._buses.create_bus(bus_number=bus_number, route_name=route_name, capacity=seats)
        logger.info("Created bus %s (%s, capacity=%s)", bus_number, route_name, seats)
        return bus_id

    def get(self, bus_id: str):
        return self._buses.get_by_id(bus_id)

    def list_buses(self, *, order_by: str = "bus_number", search: str = "") -> list[Bus]:
        return filter_rows(self._buses.list_all(order_by=order_by), search, BUS_SEARCH_FIELDS)
