from __future__ import annotations

import logging

from flask import Flask, flash, redirect, render_template, request, session, url_for

from ..common.auth import current_role, roles_required
from ..container import Container
from ..core.enums import AnalyticsAction, Role
from ..core.exceptions import AuthorizationError, ValidationError

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    manager_required = roles_required(Role.STAFF, Role.ADMIN)

    @app.route("/staff", endpoint="staff_dashboard")
    @manager_required
    def staff_dashboard():
        search = request.args.get("q", "")
        students, buses, assignments = [], [], []
        try:
            students = container.profile_service.list_students()
            buses = container.bus_service.list_buses(order_by="bus_number")
            assignments = container.assignment_service.list_all(search)
        except Exception:
            logger.exception("Failed to load staff dashboard")
            flash("Failed to load dashboard data", "danger")

        return render_template(
            "staff/dashboard.html",
            students=students,
            buses=buses,
            assignments=assignments,
            search=search,
        )

    @app.route("/staff/assignments", methods=["POST"], endpoint="staff_assign")
    @manager_required
    def staff_assign():
        student_id = request.form.get("student_id", "")
        bus_id = request.form.get("bus_id", "")
        try:
            assignment_id = container.assignment_service.assign(
                current_role=current_role(),
                assigner_id=session["user_id"],
                student_id=student_id,
                bus_id=bus_id,
            )
            container.analytics_service.record(
                user_id=session["user_id"],
                action=AnalyticsAction.STUDENT_ASSIGNED,
                details={"assignment_id": assignment_id, "student_id": student_id, "bus_id": bus_id},
            )
            flash("Student assigned to bus successfully", "success")
        except (ValidationError, AuthorizationError) as e:
            flash(str(e), "danger")
        except Exception:
            logger.exception("Failed to assign student %s to bus %s", student_id, bus_id)
            flash("System error while assigning student", "danger")

        return redirect(url_for("staff_dashboard"))

    @app.route("/staff/assignments/<assignment_id>/delete", methods=["POST"], endpoint="staff_unassign")
    @manager_required
    def staff_unassign(assignment_id: str):
        try:
            container.assignment_service.unassign(current_role=current_role(), assignment_id=assignment_id)
            container.analytics_service.record(
                user_id=session["user_id"],
                action=AnalyticsAction.ASSIGNMENT_REMOVED,
                details={"assignment_id": assignment_id},
            )
            flash("Assignment removed.", "success")
        except (ValidationError, AuthorizationError) as e:
            flash(str(e), "danger")
        except Exception:
            logger.exception("Failed to remove assignment %s", assignment_id)
            flash("System error while removing assignment", "danger")

        return redirect(url_for("staff_dashboard"))

    @app.route("/staff/announcements", methods=["POST"], endpoint="staff_announce")
    @manager_required
    def staff_announce():
        title = request.form.get("title", "")
        message = request.form.get("message", "")
        try:
            announcement_id = container.announcement_service.create(
                current_role=current_role(),
                author_id=session["user_id"],
                title=title,
                message=message,
            )
            container.analytics_service.record(
                user_id=session["user_id"],
                action=AnalyticsAction.ANNOUNCEMENT_CREATED,
                details={"announcement_id": announcement_id, "title": title.strip()},
            )
            flash("Announcement created successfully", "success")
        except (ValidationError, AuthorizationError) as e:
            flash(str(e), "danger")
        except Exception:
            logger.exception("Failed to create announcement")
            flash("System error while creating announcement", "danger")

        return redirect(url_for("staff_dashboard"))
