from __future__ import annotations

import pytest

from rideconnect.core.enums import Role
from rideconnect.core.exceptions import AuthorizationError, ValidationError


def test_admin_creates_bus(container, store):
    bus_id = container.bus_service.create_bus(
        current_role=Role.ADMIN, bus_number=" 101 ", route_name="Route A - Main Campus", capacity="40"
    )

    bus = store.buses.get_by_id(bus_id)
    assert bus.bus_number == "101"
    assert bus.capacity == 40


@pytest.mark.parametrize(
    "bus_number, route_name, capacity",
    [("", "Route A", "40"), ("101", " ", "40"), ("101", "Route A", ""), ("101", "Route A", None)],
)
def test_missing_fields_issue_no_insert(container, store, bus_number, route_name, capacity):
    with pytest.raises(ValidationError, match="Please fill in all bus details"):
        container.bus_service.create_bus(
            current_role=Role.ADMIN, bus_number=bus_number, route_name=route_name, capacity=capacity
        )
    assert store.buses.rows == {}


@pytest.mark.parametrize("capacity", ["forty", "0", "-5"])
def test_capacity_must_be_positive_integer(container, store, capacity):
    with pytest.raises(ValidationError, match="Capacity"):
        container.bus_service.create_bus(current_role=Role.ADMIN, bus_number="101", route_name="A", capacity=capacity)
    assert store.buses.rows == {}


def test_duplicate_bus_number(container, store):
    store.buses.add("101", "Route A")
    with pytest.raises(ValidationError, match="Bus 101 already exists"):
        container.bus_service.create_bus(current_role=Role.ADMIN, bus_number="101", route_name="B", capacity=30)


@pytest.mark.parametrize("role", [Role.STAFF, Role.STUDENT])
def test_only_admins_create_buses(container, role):
    with pytest.raises(AuthorizationError):
        container.bus_service.create_bus(current_role=role, bus_number="101", route_name="A", capacity=30)


def test_list_buses_orderings_and_search(container, store):
    store.buses.add("101", "Route A - Main Campus")
    store.buses.add("202", "Route B - North Gate")

    assert [b.bus_number for b in container.bus_service.list_buses()] == ["101", "202"]
    assert [b.bus_number for b in container.bus_service.list_buses(order_by="created_at")] == ["202", "101"]
    assert [b.bus_number for b in container.bus_service.list_buses(search="north")] == ["202"]
