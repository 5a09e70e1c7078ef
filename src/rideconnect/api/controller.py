from __future__ import annotations

import logging
from functools import wraps

from flask import Flask, jsonify, request, session

from ..container import Container
from ..core.enums import AnalyticsAction, Role
from ..core.exceptions import AuthorizationError, DomainError, ValidationError
from ..whitelist.model import RpcResult

logger = logging.getLogger(__name__)


def _iso(value):
    return value.isoformat() if value is not None else None


def _json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _text_field(data: dict, key: str, default: str = "") -> str:
    """String value of a JSON body field; missing or null gives ``default``."""
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, str):
        raise ValidationError(f"{key} must be a string")
    return value


def register(app: Flask, container: Container) -> None:
    def api_login_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return jsonify({"success": False, "error": "Not signed in"}), 401
            return view(*args, **kwargs)

        return wrapper

    def _rpc_call(fn):
        """Run a whitelist RPC and map errors onto the {success, error} result shape."""
        try:
            return jsonify(fn().to_dict())
        except AuthorizationError as e:
            return jsonify(RpcResult.failure(str(e)).to_dict()), 403
        except DomainError as e:
            return jsonify(RpcResult.failure(str(e)).to_dict()), 400
        except Exception:
            logger.exception("RPC call failed")
            return jsonify(RpcResult.failure("Internal server error").to_dict()), 500

    @app.route("/api/rpc/add_whitelisted_user", methods=["POST"], endpoint="api_add_whitelisted_user")
    @api_login_required
    def api_add_whitelisted_user():
        data = _json_body()

        def call():
            result = container.whitelist_service.add_whitelisted_user(
                current_role=Role(session.get("role")),
                added_by=session.get("user_id"),
                user_email=_text_field(data, "user_email"),
                user_name=_text_field(data, "user_name"),
                user_role=_text_field(data, "user_role") or Role.STUDENT.value,
            )
            container.analytics_service.record(
                user_id=session.get("user_id"),
                action=AnalyticsAction.USER_WHITELISTED,
                details={"email": result.email, "role": result.role.value},
            )
            return result

        return _rpc_call(call)

    @app.route("/api/rpc/register_whitelisted_user", methods=["POST"], endpoint="api_register_whitelisted_user")
    def api_register_whitelisted_user():
        data = _json_body()

        def call():
            result = container.whitelist_service.register_whitelisted_user(
                user_email=_text_field(data, "user_email"),
                user_password=_text_field(data, "user_password"),
            )
            container.analytics_service.record(
                user_id=result.user_id,
                action=AnalyticsAction.SIGN_UP,
                details={"role": result.role.value},
            )
            return result

        return _rpc_call(call)

    @app.route("/api/announcements", endpoint="api_announcements")
    @api_login_required
    def api_announcements():
        items = container.announcement_service.list_recent()
        return jsonify(
            {
                "success": True,
                "announcements": [
                    {
                        "id": a.id,
                        "title": a.title,
                        "message": a.message,
                        "created_at": _iso(a.created_at),
                        "profiles": {"name": a.author_name, "role": a.author_role.value},
                    }
                    for a in items
                ],
            }
        )

    @app.route("/api/me/assignment", endpoint="api_my_assignment")
    @api_login_required
    def api_my_assignment():
        row = container.assignment_service.get_for_student(session["user_id"])
        if row is None:
            return jsonify({"success": True, "assignment": None})
        return jsonify(
            {
                "success": True,
                "assignment": {
                    "id": row.id,
                    "assigned_at": _iso(row.assigned_at),
                    "buses": {
                        "bus_number": row.bus_number,
                        "route_name": row.route_name,
                        "capacity": row.capacity,
                    },
                },
            }
        )
