from __future__ import annotations

from dataclasses import asdict

from flask import Flask, flash, jsonify, redirect, render_template, request, url_for
from loguru import logger

from ..auth.access import PUBLIC
from ..auth.web import guarded
from ..common.datetime_utils import format_display_date, format_hhmm
from ..container import Container
from ..core.exceptions import DomainError, ValidationError
from .model import OvertimeForm


def register(app: Flask, container: Container) -> None:
    @app.route("/", methods=["GET", "POST"], endpoint="overtime_input")
    @guarded(PUBLIC)
    def overtime_input():
        form = OvertimeForm()
        errors: dict = {}
        derived = None
        if request.method == "POST":
            form = OvertimeForm.from_mapping(request.form)
            try:
                record_id = container.overtime_service.submit(form)
                flash(f"Overtime entry #{record_id} submitted", "success")
                return redirect(url_for("overtime_input"))
            except ValidationError as e:
                errors = e.errors
                flash(str(e), "danger")
            except DomainError as e:
                flash(str(e), "danger")
            except Exception:
                logger.exception("Submitting overtime failed")
                flash("System error while submitting overtime", "danger")

            try:
                derived = container.overtime_service.preview(form)
            except ValidationError:
                derived = None

        return render_template(
            "overtime/input.html",
            form=asdict(form),
            errors=errors,
            derived=derived,
            active_page="overtime_input",
        )

    @app.route("/overtime/preview", methods=["POST"], endpoint="overtime_preview")
    @guarded(PUBLIC)
    def overtime_preview():
        data = request.get_json(silent=True) or request.form
        form = OvertimeForm.from_mapping(data)
        try:
            derived = container.overtime_service.preview(form)
        except ValidationError as e:
            return jsonify({"success": False, "errors": e.errors}), 400

        return jsonify(
            {
                "success": True,
                "date_in": format_display_date(derived.date_in),
                "date_out": format_display_date(derived.date_out),
                "to_time": format_hhmm(derived.to_time),
            }
        )
