"""Attendance aggregates shown on the dashboard overview card."""
from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Any

from hr_console.app.reports.common import NOT_AVAILABLE, format_percent, parse_date, parse_datetime
from hr_console.app.ui.listing_view import read_field

LATE_AFTER = time(9, 0)
VIEW_DAYS = {"weekly": 7, "monthly": 30}


@dataclass(frozen=True)
class DailyAttendance:
    day: date
    label: str
    present: int
    late: int
    absent: int


@dataclass(frozen=True)
class AttendanceSummary:
    avg_check_in: str
    avg_check_out: str
    avg_working_hours: str
    punctuality_rate: str


def check_in_of(record: Any) -> datetime | None:
    return parse_datetime(read_field(record, "check_in_time"))


def check_out_of(record: Any) -> datetime | None:
    return parse_datetime(read_field(record, "check_out_time"))


def is_present(record: Any) -> bool:
    return read_field(record, "status") == "present"


def is_late(record: Any) -> bool:
    check_in = check_in_of(record)
    return is_present(record) and check_in is not None and check_in.time() > LATE_AFTER


def date_window(view: str, today: date) -> list[date]:
    if view not in VIEW_DAYS:
        raise ValueError(f"Unknown attendance view: {view}")
    days = VIEW_DAYS[view]
    start = today - timedelta(days=days - 1)
    return [start + timedelta(days=offset) for offset in range(days)]


def build_daily_chart(records: Iterable[Any], view: str = "weekly", today: date | None = None) -> list[DailyAttendance]:
    by_day: dict[date, list[Any]] = {}
    for record in records:
        day = parse_date(read_field(record, "date"))
        if day is not None:
            by_day.setdefault(day, []).append(record)

    chart: list[DailyAttendance] = []
    for day in date_window(view, today or date.today()):
        day_records = by_day.get(day, [])
        chart.append(
            DailyAttendance(
                day=day,
                label=day.strftime("%a") if view == "weekly" else day.strftime("%m/%d"),
                present=sum(1 for record in day_records if is_present(record)),
                late=sum(1 for record in day_records if is_late(record)),
                absent=sum(1 for record in day_records if read_field(record, "status") == "absent"),
            )
        )
    return chart


def average_clock_time(moments: Iterable[datetime]) -> time | None:
    seconds = [moment.hour * 3600 + moment.minute * 60 + moment.second for moment in moments]
    if not seconds:
        return None
    total_minutes = int(sum(seconds) / len(seconds) // 60) % (24 * 60)
    return time(total_minutes // 60, total_minutes % 60)


def format_time_of_day(value: time | None) -> str:
    if value is None:
        return NOT_AVAILABLE
    return value.strftime("%I:%M %p")


def average_time_of_day(moments: Iterable[datetime]) -> str:
    return format_time_of_day(average_clock_time(moments))


def average_working_hours(records: Iterable[Any]) -> str:
    durations = []
    for record in records:
        check_in, check_out = check_in_of(record), check_out_of(record)
        if check_in is not None and check_out is not None:
            durations.append((check_out - check_in).total_seconds())
    if not durations:
        return NOT_AVAILABLE
    average = sum(durations) / len(durations)
    hours = int(average // 3600)
    minutes = int((average % 3600) // 60)
    return f"{hours}h {minutes}m"


def punctuality_rate(records: Iterable[Any]) -> str:
    checked_in = [record for record in records if is_present(record) and check_in_of(record) is not None]
    if not checked_in:
        return NOT_AVAILABLE
    punctual = [record for record in checked_in if not is_late(record)]
    return format_percent(len(punctual), len(checked_in))


def summarize_attendance(records: Iterable[Any]) -> AttendanceSummary:
    rows = list(records)
    return AttendanceSummary(
        avg_check_in=average_time_of_day(moment for moment in map(check_in_of, rows) if moment is not None),
        avg_check_out=average_time_of_day(moment for moment in map(check_out_of, rows) if moment is not None),
        avg_working_hours=average_working_hours(rows),
        punctuality_rate=punctuality_rate(rows),
    )
