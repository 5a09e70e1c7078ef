from __future__ import annotations

import logging

from flask import Flask, Response, flash, redirect, render_template, request, session, url_for

from ..analytics.service import action_choices
from ..buses.service import BUS_SEARCH_FIELDS
from ..common.auth import current_role, roles_required
from ..common.filters import filter_rows
from ..container import Container
from ..core.enums import AnalyticsAction, Role
from ..core.exceptions import AuthorizationError, ValidationError
from ..profiles.service import PROFILE_SEARCH_FIELDS

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    admin_required = roles_required(Role.ADMIN)

    @app.route("/admin", endpoint="admin_dashboard")
    @admin_required
    def admin_dashboard():
        search = request.args.get("q", "")
        users, buses, whitelist = [], [], []
        counts = {"student": 0, "staff": 0, "admin": 0, "total": 0}
        bus_count = 0
        try:
            all_users = container.profile_service.list_all()
            counts = container.profile_service.role_counts(all_users)
            users = filter_rows(all_users, search, PROFILE_SEARCH_FIELDS)
            all_buses = container.bus_service.list_buses(order_by="created_at")
            bus_count = len(all_buses)
            buses = filter_rows(all_buses, search, BUS_SEARCH_FIELDS)
            whitelist = container.whitelist_service.list_entries(search)
        except Exception:
            logger.exception("Failed to load admin dashboard")
            flash("Failed to load dashboard data", "danger")

        return render_template(
            "admin/dashboard.html",
            users=users,
            buses=buses,
            whitelist=whitelist,
            counts=counts,
            bus_count=bus_count,
            roles=[r.value for r in Role],
            search=search,
        )

    @app.route("/admin/buses", methods=["POST"], endpoint="admin_create_bus")
    @admin_required
    def admin_create_bus():
        bus_number = request.form.get("bus_number", "")
        route_name = request.form.get("route_name", "")
        capacity = request.form.get("capacity", "")
        try:
            bus_id = container.bus_service.create_bus(
                current_role=current_role(),
                bus_number=bus_number,
                route_name=route_name,
                capacity=capacity,
            )
            container.analytics_service.record(
                user_id=session["user_id"],
                action=AnalyticsAction.BUS_CREATED,
                details={"bus_id": bus_id, "bus_number": bus_number.strip()},
            )
            flash("Bus created successfully", "success")
        except (ValidationError, AuthorizationError) as e:
            flash(str(e), "danger")
        except Exception:
            logger.exception("Failed to create bus %s", bus_number)
            flash("System error while creating bus", "danger")

        return redirect(url_for("admin_dashboard"))

    @app.route("/admin/whitelist", methods=["POST"], endpoint="admin_whitelist_user")
    @admin_required
    def admin_whitelist_user():
        try:
            result = container.whitelist_service.add_whitelisted_user(
                current_role=current_role(),
                added_by=session["user_id"],
                user_email=request.form.get("email", ""),
                user_name=request.form.get("name", ""),
                user_role=request.form.get("role", Role.STUDENT.value),
            )
            container.analytics_service.record(
                user_id=session["user_id"],
                action=AnalyticsAction.USER_WHITELISTED,
                details={"email": result.email, "role": result.role.value},
            )
            flash(result.message, "success")
        except (ValidationError, AuthorizationError) as e:
            flash(str(e), "danger")
        except Exception:
            logger.exception("Failed to add user to whitelist")
            flash("Failed to add user", "danger")

        return redirect(url_for("admin_dashboard"))

    @app.route("/admin/analytics", endpoint="admin_analytics")
    @admin_required
    def admin_analytics():
        action = request.args.get("action", "")
        logs = container.analytics_service.list_recent(action=action)
        return render_template("admin/analytics.html", logs=logs, action=action, actions=action_choices())

    @app.route("/admin/analytics.csv", endpoint="admin_analytics_csv")
    @admin_required
    def admin_analytics_csv():
        action = request.args.get("action", "")
        logs = container.analytics_service.list_recent(action=action)
        return Response(
            container.analytics_service.to_csv(logs),
            mimetype="text/csv",
            headers={"Content-Disposition": "attachment; filename=analytics_logs.csv"},
        )
