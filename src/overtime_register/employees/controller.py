from __future__ import annotations

from flask import Flask, flash, redirect, render_template, request, url_for
from loguru import logger

from ..auth.access import ADMIN_ONLY, PUBLIC
from ..auth.web import current_role, guarded
from ..container import Container
from ..core.exceptions import DomainError, ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/employee-registration", methods=["GET", "POST"], endpoint="employee_registration")
    @guarded(PUBLIC)
    def employee_registration():
        errors: dict = {}
        form = request.form if request.method == "POST" else {}
        if request.method == "POST":
            try:
                employee = container.employee_service.register(
                    employee_id=request.form.get("employee_id", ""),
                    name=request.form.get("name", ""),
                    email=request.form.get("email", ""),
                    section=request.form.get("section", ""),
                )
                flash(f"Employee {employee.employee_id} registered", "success")
                return redirect(url_for("employee_registration"))
            except ValidationError as e:
                errors = e.errors
                flash(str(e), "danger")
            except DomainError as e:
                flash(str(e), "danger")
            except Exception:
                logger.exception("Registering employee failed")
                flash("System error while registering employee", "danger")

        return render_template(
            "employees/register.html",
            form=form,
            errors=errors,
            active_page="employee_registration",
        )

    @app.route("/admin/employees", endpoint="admin_employees")
    @guarded(ADMIN_ONLY)
    def admin_employees():
        employees = container.employee_service.list_employees(current_role=current_role())
        return render_template("employees/list.html", employees=employees, active_page="admin_employees")

    @app.route("/admin/employees/<employee_id>/update", methods=["POST"], endpoint="admin_employees_update")
    @guarded(ADMIN_ONLY)
    def admin_employees_update(employee_id: str):
        try:
            container.employee_service.update(
                current_role=current_role(),
                employee_id=employee_id,
                name=request.form.get("name", ""),
                email=request.form.get("email", ""),
                section=request.form.get("section", ""),
            )
            flash("Employee updated", "success")
        except DomainError as e:
            flash(str(e), "danger")
        except Exception:
            logger.exception("Updating employee {} failed", employee_id)
            flash("System error while updating employee", "danger")
        return redirect(url_for("admin_employees"))

    @app.route("/admin/employees/<employee_id>/delete", methods=["POST"], endpoint="admin_employees_delete")
    @guarded(ADMIN_ONLY)
    def admin_employees_delete(employee_id: str):
        try:
            container.employee_service.delete(current_role=current_role(), employee_id=employee_id)
            flash("Employee deleted", "success")
        except DomainError as e:
            flash(str(e), "danger")
        except Exception:
            logger.exception("Deleting employee {} failed", employee_id)
            flash("System error while deleting employee", "danger")
        return redirect(url_for("admin_employees"))
