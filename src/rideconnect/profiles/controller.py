from __future__ import annotations

import logging

from flask import Flask, flash, redirect, render_template, request, session, url_for

from ..common.auth import login_required, render_unauthorized
from ..container import Container
from ..core.enums import AnalyticsAction, Role
from ..core.exceptions import AuthenticationError, ValidationError
from .service import dashboard_endpoint_for

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def _redirect_to_dashboard():
        return redirect(url_for(dashboard_endpoint_for(Role(session["role"]))))

    @app.route("/", endpoint="index")
    def index():
        if "user_id" in session:
            return _redirect_to_dashboard()
        return render_template("index.html")

    @app.route("/auth", methods=["GET", "POST"], endpoint="auth")
    def auth():
        if "user_id" in session:
            return _redirect_to_dashboard()

        error = None
        email = ""
        if request.method == "POST":
            email = request.form.get("email", "")
            password = request.form.get("password", "")

            try:
                s_user = container.auth_service.authenticate(email, password)

                session.clear()
                session.permanent = True
                session["user_id"] = s_user.user_id
                session["name"] = s_user.name
                session["email"] = s_user.email
                session["role"] = s_user.role.value

                container.analytics_service.record(user_id=s_user.user_id, action=AnalyticsAction.SIGN_IN)
                logger.info("Signed in %s (%s)", s_user.email, s_user.role.value)
                flash("Welcome back! You have been signed in successfully.", "success")
                return _redirect_to_dashboard()
            except AuthenticationError as e:
                error = str(e)
                flash(f"Sign in failed: {e}", "danger")
            except Exception:
                logger.exception("Sign in failed for %s", email)
                error = "System error while signing in"
                flash(error, "danger")

        return render_template("auth.html", error=error, email=email, active_tab="signin")

    @app.route("/auth/signup", methods=["POST"], endpoint="signup")
    def signup():
        if "user_id" in session:
            return _redirect_to_dashboard()

        email = request.form.get("email", "")
        password = request.form.get("password", "")
        error = None
        try:
            result = container.whitelist_service.register_whitelisted_user(user_email=email, user_password=password)
            container.analytics_service.record(
                user_id=result.user_id,
                action=AnalyticsAction.SIGN_UP,
                details={"role": result.role.value},
            )
            flash("Account created! Your account has been created successfully. You can now sign in.", "success")
            return redirect(url_for("auth"))
        except ValidationError as e:
            error = str(e)
            flash(f"Sign up failed: {e}", "danger")
        except Exception:
            logger.exception("Sign up failed for %s", email)
            error = "System error while creating the account"
            flash(error, "danger")

        return render_template("auth.html", error=error, email=email, active_tab="signup"), 400

    @app.route("/logout", endpoint="logout")
    def logout():
        user_id = session.get("user_id")
        if user_id:
            container.analytics_service.record(user_id=user_id, action=AnalyticsAction.SIGN_OUT)
        session.clear()
        flash("Signed out. You have been signed out successfully.", "info")
        return redirect(url_for("index"))

    @app.route("/dashboard", endpoint="dashboard")
    @login_required
    def dashboard():
        return _redirect_to_dashboard()

    @app.route("/unauthorized", endpoint="unauthorized")
    def unauthorized():
        return render_unauthorized()
