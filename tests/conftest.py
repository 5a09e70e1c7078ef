from __future__ import annotations

import pytest

from fakes import Store
from rideconnect.core.enums import Role
from rideconnect.main import create_app


@pytest.fixture
def store() -> Store:
    return Store()


@pytest.fixture
def container(store):
    return store.container()


@pytest.fixture
def app(container):
    app = create_app(container=container, settings_module="rideconnect.config.testing")
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login(client, store):
    """Create a profile with ``role`` and put it in the client's session."""

    def _login(role: Role = Role.STUDENT, name: str = "Test User", email: str = ""):
        profile = store.profiles.add(name, email or f"{role.value}@pu.edu", role)
        with client.session_transaction() as sess:
            sess["user_id"] = profile.id
            sess["name"] = profile.name
            sess["email"] = profile.email
            sess["role"] = profile.role.value
        return profile

    return _login
