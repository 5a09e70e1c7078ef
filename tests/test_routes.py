from __future__ import annotations

import pytest

from rideconnect.core.enums import Role


def test_index_renders_for_anonymous(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert b"RideConnect" in resp.data


@pytest.mark.parametrize("path", ["/student", "/staff", "/admin", "/admin/analytics", "/dashboard"])
def test_protected_pages_redirect_anonymous_to_auth(client, path):
    resp = client.get(path)
    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/auth")


@pytest.mark.parametrize(
    "role, path",
    [
        (Role.STAFF, "/student"),
        (Role.ADMIN, "/student"),
        (Role.STUDENT, "/staff"),
        (Role.STUDENT, "/admin"),
        (Role.STAFF, "/admin"),
        (Role.STAFF, "/admin/analytics.csv"),
    ],
)
def test_wrong_role_gets_403(client, login, role, path):
    login(role)
    resp = client.get(path)
    assert resp.status_code == 403
    assert b"Access Denied" in resp.data


@pytest.mark.parametrize(
    "role, path",
    [(Role.STUDENT, "/student"), (Role.STAFF, "/staff"), (Role.ADMIN, "/staff"), (Role.ADMIN, "/admin")],
)
def test_allowed_roles_see_their_pages(client, login, role, path):
    login(role)
    assert client.get(path).status_code == 200


@pytest.mark.parametrize(
    "role, target",
    [(Role.STUDENT, "/student"), (Role.STAFF, "/staff"), (Role.ADMIN, "/admin")],
)
def test_signed_in_user_is_sent_to_dashboard(client, login, role, target):
    login(role)
    resp = client.get("/")
    assert resp.status_code == 302
    assert resp.headers["Location"].endswith(target)


def test_sign_in_sets_session_and_records_analytics(client, store):
    store.profiles.add("Sam Staff", "sam@pu.edu", Role.STAFF, password="staff123")

    resp = client.post("/auth", data={"email": "SAM@pu.edu", "password": "staff123"})

    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/staff")
    with client.session_transaction() as sess:
        assert sess["role"] == "staff"
        assert sess["email"] == "sam@pu.edu"
    assert [log.action for log in store.analytics.rows] == ["sign_in"]


def test_sign_in_failure_rerenders_form(client, store):
    store.profiles.add("Sam Staff", "sam@pu.edu", Role.STAFF, password="staff123")

    resp = client.post("/auth", data={"email": "sam@pu.edu", "password": "nope"})

    assert resp.status_code == 200
    assert b"Invalid login credentials" in resp.data
    with client.session_transaction() as sess:
        assert "user_id" not in sess


def test_signup_not_whitelisted_creates_no_profile(client, store):
    resp = client.post("/auth/signup", data={"email": "ghost@pu.edu", "password": "secret123"})

    assert resp.status_code == 400
    assert b"not whitelisted" in resp.data
    assert store.profiles.rows == {}


def test_signup_then_sign_in(client, store):
    store.whitelist.add("new@pu.edu", "New Student")

    resp = client.post("/auth/signup", data={"email": "new@pu.edu", "password": "secret123"})
    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/auth")

    resp = client.post("/auth", data={"email": "new@pu.edu", "password": "secret123"})
    assert resp.headers["Location"].endswith("/student")


def test_logout_clears_session(client, login, store):
    login(Role.STUDENT)

    resp = client.get("/logout")

    assert resp.headers["Location"].endswith("/")
    with client.session_transaction() as sess:
        assert "user_id" not in sess
    assert [log.action for log in store.analytics.rows] == ["sign_out"]


def test_student_dashboard_shows_assignment_and_announcements(client, login, store):
    student = login(Role.STUDENT, name="Alice")
    staff = store.profiles.add("Sam Staff", "sam@pu.edu", Role.STAFF)
    bus = store.buses.add("101", "Route A - Main Campus", 40)
    store.assignments.create_assignment(student_id=student.id, bus_id=bus.id, assigned_by=staff.id)
    store.announcements.create(title="Schedule update", message="Leaves at 7:30", created_by=staff.id)

    resp = client.get("/student")

    assert b"Bus 101" in resp.data
    assert b"Route A - Main Campus" in resp.data
    assert b"Schedule update" in resp.data


def test_empty_capacity_flashes_and_inserts_nothing(client, login, store):
    login(Role.ADMIN)

    resp = client.post(
        "/admin/buses", data={"bus_number": "101", "route_name": "Route A", "capacity": ""}, follow_redirects=True
    )

    assert b"Please fill in all bus details" in resp.data
    assert store.buses.rows == {}


def test_admin_creates_bus_and_whitelists_user(client, login, store):
    login(Role.ADMIN)

    resp = client.post(
        "/admin/buses", data={"bus_number": "101", "route_name": "Route A", "capacity": "40"}, follow_redirects=True
    )
    assert b"Bus created successfully" in resp.data

    resp = client.post(
        "/admin/whitelist", data={"email": "New@pu.edu", "name": "New", "role": "staff"}, follow_redirects=True
    )
    assert b"User new@pu.edu added to whitelist successfully" in resp.data
    assert store.whitelist.get_by_email("new@pu.edu").role == Role.STAFF
    assert [log.action for log in store.analytics.rows] == ["bus_created", "user_whitelisted"]


def test_staff_assigns_and_unassigns(client, login, store):
    login(Role.STAFF)
    student = store.profiles.add("Alice", "alice@pu.edu")
    bus = store.buses.add("101", "Route A", 40)

    resp = client.post(
        "/staff/assignments", data={"student_id": student.id, "bus_id": bus.id}, follow_redirects=True
    )
    assert b"Student assigned to bus successfully" in resp.data

    resp = client.post(
        "/staff/assignments", data={"student_id": student.id, "bus_id": bus.id}, follow_redirects=True
    )
    assert b"Alice is already assigned to a bus" in resp.data

    [assignment_id] = list(store.assignments.rows)
    resp = client.post(f"/staff/assignments/{assignment_id}/delete", follow_redirects=True)
    assert b"Assignment removed." in resp.data
    assert store.assignments.rows == {}


def test_staff_posts_announcement(client, login, store):
    login(Role.STAFF)

    resp = client.post(
        "/staff/announcements", data={"title": "Heads up", "message": "No service Friday"}, follow_redirects=True
    )

    assert b"Announcement created successfully" in resp.data
    assert store.announcements.rows[0].title == "Heads up"


def test_staff_search_filters_assignments(client, login, store):
    login(Role.STAFF)
    alice = store.profiles.add("Alice", "alice@pu.edu")
    bob = store.profiles.add("Bob", "bob@pu.edu")
    bus = store.buses.add("101", "Route A")
    store.assignments.create_assignment(student_id=alice.id, bus_id=bus.id, assigned_by=None)
    store.assignments.create_assignment(student_id=bob.id, bus_id=bus.id, assigned_by=None)

    resp = client.get("/staff?q=ali")

    assert b"<strong>Alice</strong>" in resp.data
    assert b"<strong>Bob</strong>" not in resp.data


def test_admin_analytics_csv_download(client, login, store):
    admin = login(Role.ADMIN)
    store.analytics.create(user_id=admin.id, action="sign_in", details_json=None)

    resp = client.get("/admin/analytics.csv")

    assert resp.status_code == 200
    assert resp.mimetype == "text/csv"
    assert "analytics_logs.csv" in resp.headers["Content-Disposition"]
    assert b"sign_in" in resp.data


def test_admin_dashboard_reads_each_table_once(client, login, store, monkeypatch):
    login(Role.ADMIN, name="Root")
    store.profiles.add("Alice", "alice@pu.edu")
    store.buses.add("101", "Route A - Main Campus")
    store.buses.add("202", "Route B - North Gate")
    calls = {"profiles": 0, "buses": 0}

    def counted(name, fn):
        def wrapper(*args, **kwargs):
            calls[name] += 1
            return fn(*args, **kwargs)

        return wrapper

    monkeypatch.setattr(store.profiles, "list_all", counted("profiles", store.profiles.list_all))
    monkeypatch.setattr(store.buses, "list_all", counted("buses", store.buses.list_all))

    resp = client.get("/admin?q=north")

    assert resp.status_code == 200
    assert calls == {"profiles": 1, "buses": 1}
    assert b"<strong>Bus 202</strong>" in resp.data
    assert b"<strong>Bus 101</strong>" not in resp.data
