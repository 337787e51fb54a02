from __future__ import annotations

from datetime import date, time

from overtime_register.overtime.model import OvertimeRecord
from overtime_register.reports.csv_export import export_filename, render_csv, to_csv_row

HEADER = (
    "EmployeeID;OvertimeDate(dd.MM.yyyy);CalculationBasedOnTime;PlanOvertimeHour;DateIn(dd.MM.yyyy);"
    "FromTime;DateOut(dd.MM.yyyy);ToTime;BreakFromTime;BreakToTime;Reason"
)


def _rec(**overrides) -> OvertimeRecord:
    values = dict(
        id=1,
        employee_id="MTI240264",
        overtime_date=date(2025, 8, 19),
        calculation_based_on_time=False,
        plan_overtime_hour=3.0,
        date_in=date(2025, 8, 19),
        from_time=time(15, 0),
        date_out=date(2025, 8, 19),
        to_time=time(18, 0),
        reason="Pemotongan sisa kabel proyek di pyrite server",
    )
    values.update(overrides)
    return OvertimeRecord(**values)


def test_flag_is_rendered_as_y_or_n():
    assert to_csv_row(_rec(calculation_based_on_time=True))[2] == "Y"
    assert to_csv_row(_rec(calculation_based_on_time=False))[2] == "N"


def test_row_layout():
    row = to_csv_row(_rec(plan_overtime_hour=2.5, break_from_time=time(16, 0), break_to_time=time(16, 15)))
    assert row == [
        "MTI240264",
        "19.08.2025",
        "N",
        "2.5",
        "19.08.2025",
        "15:00",
        "19.08.2025",
        "18:00",
        "16:00",
        "16:15",
        "Pemotongan sisa kabel proyek di pyrite server",
    ]


def test_render_csv_header_and_rows():
    content = render_csv([_rec()])
    lines = content.split("\n")
    assert lines[0] == HEADER
    assert lines[1] == "MTI240264;19.08.2025;N;3;19.08.2025;15:00;19.08.2025;18:00;;;Pemotongan sisa kabel proyek di pyrite server"
    assert len(lines) == 2


def test_free_text_is_not_escaped():
    content = render_csv([_rec(reason="fix; then test")])
    assert content.split("\n")[1].endswith(";fix; then test")


def test_empty_export_is_header_only():
    assert render_csv([]) == HEADER


def test_filename_uses_iso_date():
    assert export_filename(date(2025, 8, 21)) == "overtime_report_2025-08-21.csv"
