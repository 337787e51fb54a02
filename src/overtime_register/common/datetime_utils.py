from __future__ import annotations

from datetime import date, datetime, time
from typing import Optional

from ..core.constants import DISPLAY_DATE_FORMAT, ISO_DATE_FORMAT, TIME_FORMAT


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, ISO_DATE_FORMAT).date()


def parse_optional_iso_date(value: Optional[str]) -> Optional[date]:
    v = (value or "").strip()
    return parse_iso_date(v) if v else None


def parse_display_date(value: str) -> date:
    """Parse DD.MM.YYYY string into date."""
    return datetime.strptime(value, DISPLAY_DATE_FORMAT).date()


def format_display_date(value: Optional[date]) -> str:
    return value.strftime(DISPLAY_DATE_FORMAT) if value else ""


def iso_to_display(value: Optional[str]) -> str:
    """Convert the browser's YYYY-MM-DD date input into DD.MM.YYYY."""
    v = (value or "").strip()
    if not v:
        return ""
    try:
        return format_display_date(parse_iso_date(v))
    except ValueError:
        return v


def parse_hhmm(value: str) -> time:
    return datetime.strptime(value, TIME_FORMAT).time()


def format_hhmm(value: Optional[time]) -> str:
    return value.strftime(TIME_FORMAT) if value else ""


def format_hours(value: float) -> str:
    """3.0 -> '3', 2.5 -> '2.5'."""
    return f"{float(value):g}"


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()
