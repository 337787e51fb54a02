from __future__ import annotations

from datetime import date, datetime, time, timedelta

from .model import DerivedTimes


def derive_times(overtime_date: date, from_time: time, plan_overtime_hour: float) -> DerivedTimes:
    """dateIn is the overtime date; dateOut/toTime are dateIn@fromTime + hours.

    Hours are rounded to the nearest whole minute and overflow past midnight
    rolls into the following day(s).
    """
    start = datetime.combine(overtime_date, from_time.replace(second=0, microsecond=0))
    end = start + timedelta(minutes=round(float(plan_overtime_hour) * 60))
    return DerivedTimes(date_in=overtime_date, date_out=end.date(), to_time=end.time())
