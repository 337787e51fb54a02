"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DISPLAY_DATE_FORMAT = "%d.%m.%Y"
ISO_DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M"

MIN_OVERTIME_HOURS = 0.5
MAX_OVERTIME_HOURS = 24.0

CSV_DELIMITER = ";"
CSV_HEADER = (
    "EmployeeID",
    "OvertimeDate(dd.MM.yyyy)",
    "CalculationBasedOnTime",
    "PlanOvertimeHour",
    "DateIn(dd.MM.yyyy)",
    "FromTime",
    "DateOut(dd.MM.yyyy)",
    "ToTime",
    "BreakFromTime",
    "BreakToTime",
    "Reason",
)

DEFAULT_INACTIVITY_MINUTES = 15
