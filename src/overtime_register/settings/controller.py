from __future__ import annotations

from flask import Flask, flash, redirect, render_template, request, url_for
from loguru import logger

from ..auth.access import ADMIN_ONLY
from ..auth.web import current_role, current_user_id, guarded
from ..container import Container
from ..core.exceptions import DomainError, ValidationError
from .model import AdminSettings


def register(app: Flask, container: Container) -> None:
    def _render(*, settings=None, errors=None, status: int = 200):
        if settings is None:
            settings = container.settings_service.get_settings(
                current_role=current_role(),
                user_id=current_user_id(),
            )
        return (
            render_template("settings/index.html", settings=settings, errors=errors or {}, active_page="settings"),
            status,
        )

    @app.route("/settings", methods=["GET"], endpoint="settings")
    @guarded(ADMIN_ONLY)
    def settings():
        return _render()

    @app.route("/settings/password", methods=["POST"], endpoint="settings_password")
    @guarded(ADMIN_ONLY)
    def settings_password():
        try:
            container.auth_service.change_password(
                user_id=current_user_id(),
                new_password=request.form.get("new_password", ""),
                confirm_password=request.form.get("confirm_password", ""),
            )
            flash("Password updated successfully", "success")
            return redirect(url_for("settings"))
        except ValidationError as e:
            flash(str(e), "danger")
            return _render(errors=e.errors)
        except DomainError as e:
            flash(str(e), "danger")
        except Exception:
            logger.exception("Password change failed")
            flash("System error while changing password", "danger")
        return redirect(url_for("settings"))

    @app.route("/settings/integration", methods=["POST"], endpoint="settings_integration")
    @guarded(ADMIN_ONLY)
    def settings_integration():
        try:
            container.settings_service.save_settings(
                current_role=current_role(),
                user_id=current_user_id(),
                ms_graph_enabled=request.form.get("ms_graph_enabled") in {"1", "on", "true", "yes"},
                tenant_id=request.form.get("ms_graph_tenant_id", ""),
                client_id=request.form.get("ms_graph_client_id", ""),
            )
            flash("Settings saved successfully", "success")
            return redirect(url_for("settings"))
        except ValidationError as e:
            flash(str(e), "danger")
            entered = AdminSettings(
                user_id=current_user_id(),
                ms_graph_enabled=True,
                ms_graph_tenant_id=request.form.get("ms_graph_tenant_id", ""),
                ms_graph_client_id=request.form.get("ms_graph_client_id", ""),
            )
            return _render(settings=entered, errors=e.errors)
        except DomainError as e:
            flash(str(e), "danger")
        except Exception:
            logger.exception("Saving settings failed")
            flash("System error while saving settings", "danger")
        return redirect(url_for("settings"))
