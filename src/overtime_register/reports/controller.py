from __future__ import annotations

from dataclasses import asdict

from flask import Flask, flash, redirect, render_template, request, url_for
from loguru import logger

from ..auth.access import ADMIN_ONLY
from ..auth.web import current_role, guarded
from ..common.datetime_utils import parse_optional_iso_date
from ..container import Container
from ..core.exceptions import DomainError, NotFoundError, ValidationError
from ..overtime.model import OvertimeForm
from ..overtime.service import record_to_form
from .filters import ReportFilter


def register(app: Flask, container: Container) -> None:
    def _filter_from_args() -> ReportFilter:
        try:
            return ReportFilter(
                search_text=request.args.get("search", ""),
                start_date=parse_optional_iso_date(request.args.get("start")),
                end_date=parse_optional_iso_date(request.args.get("end")),
            )
        except ValueError:
            raise ValidationError("Dates must be in format YYYY-MM-DD")

    def _csv_response(export):
        return app.response_class(
            export.content.encode("utf-8-sig"),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={export.filename}"},
        )

    @app.route("/reports", methods=["GET"], endpoint="reports")
    @guarded(ADMIN_ONLY)
    def reports():
        data = None
        try:
            data = container.report_service.build_report(_filter_from_args())
        except DomainError as e:
            flash(str(e), "danger")
        except Exception:
            logger.exception("Loading reports failed")
            flash("System error while loading reports", "danger")

        return render_template(
            "reports/index.html",
            search=request.args.get("search", ""),
            start=request.args.get("start", ""),
            end=request.args.get("end", ""),
            rows=data.rows if data else [],
            summary=data.summary if data else None,
            active_page="reports",
        )

    @app.route("/reports.csv", methods=["GET"], endpoint="reports_csv")
    @guarded(ADMIN_ONLY)
    def reports_csv():
        try:
            return _csv_response(container.report_service.export_csv(_filter_from_args()))
        except DomainError as e:
            flash(str(e), "danger")
        except Exception:
            logger.exception("CSV export failed")
            flash("System error while exporting CSV", "danger")
        return redirect(url_for("reports"))

    @app.route("/reports/<int:record_id>/edit", methods=["GET", "POST"], endpoint="reports_edit")
    @guarded(ADMIN_ONLY)
    def reports_edit(record_id: int):
        errors: dict = {}
        try:
            form = record_to_form(container.overtime_service.get_record(record_id))
        except NotFoundError as e:
            flash(str(e), "danger")
            return redirect(url_for("reports"))

        if request.method == "POST":
            form = OvertimeForm.from_mapping(request.form)
            try:
                container.overtime_service.update_record(
                    current_role=current_role(),
                    record_id=record_id,
                    form=form,
                )
                flash("Overtime record updated", "success")
                return redirect(url_for("reports"))
            except ValidationError as e:
                errors = e.errors
                flash(str(e), "danger")
            except DomainError as e:
                flash(str(e), "danger")
            except Exception:
                logger.exception("Updating overtime {} failed", record_id)
                flash("System error while updating record", "danger")

        return render_template(
            "reports/edit.html",
            record_id=record_id,
            form=asdict(form),
            errors=errors,
            active_page="reports",
        )

    @app.route("/export", methods=["GET"], endpoint="export")
    @guarded(ADMIN_ONLY)
    def export():
        return render_template("reports/export.html", form={}, errors={}, active_page="export")

    @app.route("/export.csv", methods=["GET"], endpoint="export_csv")
    @guarded(ADMIN_ONLY)
    def export_csv():
        try:
            export = container.report_service.export_csv(_filter_from_args())
            return _csv_response(export)
        except DomainError as e:
            flash(str(e), "danger")
        except Exception:
            logger.exception("CSV export failed")
            flash("System error while exporting CSV", "danger")
        return redirect(url_for("export"))

    @app.route("/export/email", methods=["POST"], endpoint="export_email")
    @guarded(ADMIN_ONLY)
    def export_email():
        errors: dict = {}
        try:
            container.email_report_service.send_report(
                to_email=request.form.get("to_email", ""),
                subject=request.form.get("subject", ""),
                message=request.form.get("message", ""),
            )
            flash("Email sent", "success")
        except ValidationError as e:
            errors = e.errors
            flash(str(e), "danger")
        except DomainError as e:
            flash(str(e), "danger")
        except Exception:
            logger.exception("Sending report email failed")
            flash("System error while sending email", "danger")

        return render_template("reports/export.html", form=request.form, errors=errors, active_page="export")
