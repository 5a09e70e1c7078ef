from __future__ import annotations

import pytest

from rideconnect.core.enums import Role
from rideconnect.core.exceptions import AuthorizationError, ValidationError


def test_staff_posts_announcement(container, store):
    staff = store.profiles.add("Sam Staff", "sam@pu.edu", Role.STAFF)

    container.announcement_service.create(
        current_role=Role.STAFF, author_id=staff.id, title=" Route change ", message="Bus 101 leaves at 7:30"
    )

    [item] = container.announcement_service.list_recent()
    assert item.title == "Route change"
    assert item.author_name == "Sam Staff"
    assert item.author_role == Role.STAFF


@pytest.mark.parametrize("title, message", [("", "body"), ("title", "   ")])
def test_title_and_message_required(container, store, title, message):
    staff = store.profiles.add("Sam Staff", "sam@pu.edu", Role.STAFF)
    with pytest.raises(ValidationError, match="Please fill in both title and message"):
        container.announcement_service.create(
            current_role=Role.STAFF, author_id=staff.id, title=title, message=message
        )
    assert store.announcements.rows == []


def test_students_cannot_post(container, store):
    student = store.profiles.add("Alice", "alice@pu.edu")
    with pytest.raises(AuthorizationError):
        container.announcement_service.create(current_role=Role.STUDENT, author_id=student.id, title="t", message="m")


def test_feed_is_newest_first_and_capped_at_ten(container, store):
    admin = store.profiles.add("Root", "root@pu.edu", Role.ADMIN)
    for i in range(12):
        container.announcement_service.create(current_role=Role.ADMIN, author_id=admin.id, title=f"#{i}", message="m")

    feed = container.announcement_service.list_recent()
    assert len(feed) == 10
    assert feed[0].title == "#11"
    assert feed[-1].title == "#2"
