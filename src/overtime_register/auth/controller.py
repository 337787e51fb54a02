from __future__ import annotations

from flask import Flask, flash, redirect, render_template, request, url_for
from loguru import logger

from ..container import Container
from ..core.enums import Role
from ..core.exceptions import DomainError, ValidationError
from .access import ADMIN_ONLY
from .web import current_role, current_user_id, guarded, is_authenticated, sign_in, sign_out


def register(app: Flask, container: Container) -> None:
    @app.route("/auth", methods=["GET", "POST"], endpoint="auth")
    def auth():
        if is_authenticated():
            return redirect(url_for("overtime_input"))

        mode = request.values.get("mode", "signin")
        errors: dict = {}
        if request.method == "POST":
            email = request.form.get("email", "")
            password = request.form.get("password", "")
            try:
                if mode == "signup":
                    user = container.auth_service.sign_up(
                        email=email,
                        password=password,
                        display_name=request.form.get("display_name", ""),
                    )
                    flash("Account created. Welcome!", "success")
                else:
                    user = container.auth_service.authenticate(email, password)
                    flash("Signed in successfully", "success")
                sign_in(user)
                return redirect(url_for("overtime_input"))
            except ValidationError as e:
                errors = e.errors
                flash(str(e), "danger")
            except DomainError as e:
                flash(str(e), "danger")
            except Exception:
                logger.exception("Sign-in failed")
                flash("System error while signing in", "danger")

        return render_template("auth/login.html", mode=mode, form=request.form, errors=errors)

    @app.route("/logout", methods=["GET", "POST"], endpoint="logout")
    def logout():
        sign_out()
        flash("Signed out", "info")
        return redirect(url_for("auth"))

    @app.route("/admin/users", endpoint="admin_users")
    @guarded(ADMIN_ONLY)
    def admin_users():
        profiles = container.profile_service.list_profiles(current_role=current_role())
        return render_template(
            "admin/users.html",
            profiles=profiles,
            roles=[r.value for r in Role],
            me=current_user_id(),
            active_page="admin_users",
        )

    @app.route("/admin/users/create", methods=["POST"], endpoint="admin_users_create")
    @guarded(ADMIN_ONLY)
    def admin_users_create():
        try:
            container.profile_service.create_profile(
                current_role=current_role(),
                email=request.form.get("email", ""),
                password=request.form.get("password", ""),
                display_name=request.form.get("display_name", ""),
                role=request.form.get("role", Role.USER.value),
            )
            flash("User created", "success")
        except DomainError as e:
            flash(str(e), "danger")
        except Exception:
            logger.exception("Creating user failed")
            flash("System error while creating user", "danger")
        return redirect(url_for("admin_users"))

    @app.route("/admin/users/<user_id>/update", methods=["POST"], endpoint="admin_users_update")
    @guarded(ADMIN_ONLY)
    def admin_users_update(user_id: str):
        try:
            container.profile_service.update_profile(
                current_role=current_role(),
                user_id=user_id,
                email=request.form.get("email", ""),
                display_name=request.form.get("display_name", ""),
            )
            flash("User updated", "success")
        except DomainError as e:
            flash(str(e), "danger")
        except Exception:
            logger.exception("Updating user {} failed", user_id)
            flash("System error while updating user", "danger")
        return redirect(url_for("admin_users"))

    @app.route("/admin/users/<user_id>/role", methods=["POST"], endpoint="admin_users_role")
    @guarded(ADMIN_ONLY)
    def admin_users_role(user_id: str):
        try:
            container.profile_service.change_role(
                current_role=current_role(),
                user_id=user_id,
                role=request.form.get("role", ""),
            )
            flash("Role updated", "success")
        except DomainError as e:
            flash(str(e), "danger")
        except Exception:
            logger.exception("Changing role of {} failed", user_id)
            flash("System error while changing role", "danger")
        return redirect(url_for("admin_users"))

    @app.route("/admin/users/<user_id>/delete", methods=["POST"], endpoint="admin_users_delete")
    @guarded(ADMIN_ONLY)
    def admin_users_delete(user_id: str):
        try:
            container.profile_service.delete_profile(
                current_role=current_role(),
                current_user_id=current_user_id(),
                user_id=user_id,
            )
            flash("User deleted", "success")
        except DomainError as e:
            flash(str(e), "danger")
        except Exception:
            logger.exception("Deleting user {} failed", user_id)
            flash("System error while deleting user", "danger")
        return redirect(url_for("admin_users"))
