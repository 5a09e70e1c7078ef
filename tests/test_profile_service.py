from __future__ import annotations

import pytest

from rideconnect.core.enums import Role
from rideconnect.core.exceptions import AuthenticationError
from rideconnect.profiles.model import Profile
from rideconnect.profiles.service import dashboard_endpoint_for


def test_authenticate_success_with_normalized_email(container, store):
    profile = store.profiles.add("Alice", "alice@pu.edu", Role.STUDENT, password="student123")

    user = container.auth_service.authenticate("  ALICE@pu.edu ", "student123")

    assert user.user_id == profile.id
    assert user.name == "Alice"
    assert user.role == Role.STUDENT


def test_authenticate_wrong_password(container, store):
    store.profiles.add("Alice", "alice@pu.edu", password="student123")
    with pytest.raises(AuthenticationError, match="Invalid login credentials"):
        container.auth_service.authenticate("alice@pu.edu", "wrong")


def test_authenticate_unknown_email(container):
    with pytest.raises(AuthenticationError):
        container.auth_service.authenticate("nobody@pu.edu", "student123")


def test_authenticate_with_unusable_hash(container, store):
    store.profiles.rows["x"] = Profile(
        id="x", name="Broken", email="broken@pu.edu", role=Role.STAFF, password_hash="not-a-hash"
    )
    with pytest.raises(AuthenticationError):
        container.auth_service.authenticate("broken@pu.edu", "whatever")


@pytest.mark.parametrize(
    "role, endpoint",
    [(Role.STUDENT, "student_dashboard"), (Role.STAFF, "staff_dashboard"), (Role.ADMIN, "admin_dashboard")],
)
def test_dashboard_endpoint_for(role, endpoint):
    assert dashboard_endpoint_for(role) == endpoint


def test_list_all_newest_first_and_filtered(container, store):
    store.profiles.add("Alice", "alice@pu.edu")
    store.profiles.add("Bob", "bob@pu.edu", Role.STAFF)
    store.profiles.add("Root", "root@pu.edu", Role.ADMIN)

    assert [p.name for p in container.profile_service.list_all()] == ["Root", "Bob", "Alice"]
    assert [p.name for p in container.profile_service.list_all("admin")] == ["Root"]
    assert [p.name for p in container.profile_service.list_all("BOB@")] == ["Bob"]


def test_list_students_only_students_by_name(container, store):
    store.profiles.add("Zed", "zed@pu.edu")
    store.profiles.add("Amy", "amy@pu.edu")
    store.profiles.add("Bob", "bob@pu.edu", Role.STAFF)

    assert [p.name for p in container.profile_service.list_students()] == ["Amy", "Zed"]
    assert [p.name for p in container.profile_service.list_students("zed")] == ["Zed"]


def test_role_counts(container, store):
    store.profiles.add("Amy", "amy@pu.edu")
    store.profiles.add("Zed", "zed@pu.edu")
    store.profiles.add("Bob", "bob@pu.edu", Role.STAFF)

    assert container.profile_service.role_counts() == {"student": 2, "staff": 1, "admin": 0, "total": 3}
