from __future__ import annotations

import logging

from flask import Flask, flash, render_template, session

from ..common.auth import roles_required
from ..container import Container
from ..core.enums import Role

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/student", endpoint="student_dashboard")
    @roles_required(Role.STUDENT)
    def student_dashboard():
        user_id = session["user_id"]
        profile = None
        assignment = None
        announcements = []
        try:
            profile = container.profile_service.get(user_id)
            assignment = container.assignment_service.get_for_student(user_id)
            announcements = container.announcement_service.list_recent()
        except Exception:
            logger.exception("Failed to load student dashboard for %s", user_id)
            flash("Failed to load dashboard data", "danger")

        return render_template(
            "student/dashboard.html",
            profile=profile,
            assignment=assignment,
            announcements=announcements,
        )
