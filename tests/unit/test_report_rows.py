from datetime import date

import pytest

from hr_console.app.reports.report_rows import (
    ATTENDANCE_EXPORT_HEADERS,
    LEAVE_EXPORT_HEADERS,
    attendance_rate,
    attendance_trend,
    export_table,
    leave_days,
    leave_distribution,
    report_filename,
    total_leave_days,
)

DEPARTMENTS = [{"id": 1, "name": "Engineering"}]


def _attendance_entry() -> dict:
    return {
        "user": {"first_name": "Ann", "last_name": "Lee", "department_id": 1},
        "records": [
            {"date": "2024-01-02", "status": "present", "check_in_time": "2024-01-02T08:50:00"},
            {"date": "2024-01-03", "status": "present", "check_in_time": "2024-01-03T09:10:00"},
            {"date": "2024-01-04", "status": "absent"},
        ],
    }


def _leave_entry() -> dict:
    return {
        "user": {"first_name": "Bob", "last_name": "Ray", "department_id": 99},
        "leave_requests": [
            {"type": "annual", "status": "approved", "start_date": "2024-01-08", "end_date": "2024-01-10"},
            {"type": "sick", "status": "approved", "start_date": "2024-01-15", "end_date": "2024-01-15"},
            {"type": "sick", "status": "rejected", "start_date": "2024-01-20", "end_date": "2024-01-22"},
            {"type": "sabbatical", "status": "approved", "start_date": "2024-01-25", "end_date": "2024-01-26"},
        ],
    }


def test_leave_days_are_inclusive() -> None:
    assert leave_days({"start_date": "2024-01-08", "end_date": "2024-01-10"}) == 3
    assert leave_days({"start_date": None, "end_date": "2024-01-10"}) == 0


def test_total_leave_days_counts_only_approved() -> None:
    assert total_leave_days(_leave_entry()) == 6


def test_attendance_rate() -> None:
    assert attendance_rate(_attendance_entry()) == "66.7%"
    assert attendance_rate({"records": []}) == "0%"


def test_export_table_for_attendance() -> None:
    headers, rows = export_table("attendance", [_attendance_entry()], DEPARTMENTS)

    assert headers == ATTENDANCE_EXPORT_HEADERS
    assert rows == [["Ann Lee", "Engineering", 2, 3, "66.7%"]]


def test_export_table_for_leave_uses_unassigned_for_unknown_department() -> None:
    headers, rows = export_table("leave", [_leave_entry()], DEPARTMENTS)

    assert headers == LEAVE_EXPORT_HEADERS
    assert rows == [["Bob Ray", "Unassigned", 1, 1, 0, 6]]


def test_export_table_rejects_unknown_kind() -> None:
    with pytest.raises(ValueError):
        export_table("payroll", [], DEPARTMENTS)


def test_leave_distribution_counts_unknown_types_as_other() -> None:
    distribution = {item["name"]: item["value"] for item in leave_distribution([_leave_entry()])}

    assert distribution == {"Annual": 1, "Sick": 1, "Personal": 0, "Unpaid": 0, "Other": 1}


def test_attendance_trend_per_day() -> None:
    trend = attendance_trend([_attendance_entry()], today=date(2024, 1, 4), days=3)

    assert trend == [
        {"date": "01/02", "present": 1, "absent": 0, "late": 0},
        {"date": "01/03", "present": 1, "absent": 0, "late": 1},
        {"date": "01/04", "present": 0, "absent": 1, "late": 0},
    ]


def test_report_filename() -> None:
    assert report_filename("leave", date(2024, 1, 1), date(2024, 1, 31), "pdf") == "leave_report_2024-01-01_to_2024-01-31.pdf"
