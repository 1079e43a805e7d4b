from datetime import date

from hr_console.app.listing_cache import ListingCache
from hr_console.app.records_source import HrClients, RecordsSource


class _StubEmployeesClient:
    def __init__(self) -> None:
        self.list_calls = 0
        self.deleted: list[int] = []
        self.permission_updates: list[tuple] = []

    def list_employees(self, access_token: str | None = None) -> list[dict]:
        self.list_calls += 1
        return [{"id": 1, "first_name": "Ann", "department_id": 3}]

    def delete_employee(self, employee_id: int, access_token: str | None = None) -> None:
        self.deleted.append(employee_id)

    def update_permissions(self, user_id: int, role: str, custom_permissions: list[str], access_token: str | None = None) -> dict:
        self.permission_updates.append((user_id, role, custom_permissions, access_token))
        return {"id": user_id, "role": role}


class _StubDepartmentsClient:
    def __init__(self) -> None:
        self.list_calls = 0

    def list_departments(self, access_token: str | None = None) -> list[dict]:
        self.list_calls += 1
        return [{"id": 3, "name": "Sales"}]

    def create_department(self, payload: dict, access_token: str | None = None) -> dict:
        return {"id": 4, **payload}

    def update_department(self, department_id: int, payload: dict, access_token: str | None = None) -> dict:
        return {"id": department_id, **payload}

    def delete_department(self, department_id: int, access_token: str | None = None) -> None:
        return None


class _StubReportsClient:
    def __init__(self) -> None:
        self.calls: list[tuple] = []

    def attendance_report(self, start_date, end_date, department_id=None, access_token=None) -> list[dict]:
        self.calls.append(("attendance", start_date, end_date, department_id))
        return [{"user": {"first_name": "Ann"}, "records": []}]

    def leave_report(self, start_date, end_date, department_id=None, access_token=None) -> list[dict]:
        self.calls.append(("leave", start_date, end_date, department_id))
        return []


def _source(cache: ListingCache | None = None) -> RecordsSource:
    clients = HrClients(
        employees=_StubEmployeesClient(),
        departments=_StubDepartmentsClient(),
        leave=None,
        attendance=None,
        reports=_StubReportsClient(),
    )
    return RecordsSource(clients, cache=cache, access_token="token-1")


def test_listing_cache_respects_ttl_and_expiration() -> None:
    current = [100.0]
    cache = ListingCache(ttl_seconds=15, now=lambda: current[0])

    cache.set("/api/employees?", [{"id": 1}])
    assert cache.get("/api/employees?") == [{"id": 1}]

    current[0] = 116.0
    assert cache.get("/api/employees?") is None


def test_cache_key_skips_empty_params_and_sorts_names() -> None:
    key = ListingCache.key_for("/api/reports/leave", {"startDate": "2024-01-01", "departmentId": None, "endDate": "2024-01-31"})

    assert key == "/api/reports/leave?endDate=2024-01-31&startDate=2024-01-01"


def test_cached_rows_are_returned_as_copies() -> None:
    cache = ListingCache()
    cache.set("k", [{"id": 1}])

    rows = cache.get("k")
    rows.append({"id": 2})

    assert cache.get("k") == [{"id": 1}]


def test_invalidate_drops_every_param_variant_of_an_endpoint() -> None:
    cache = ListingCache()
    cache.set(ListingCache.key_for("/api/attendance", {"startDate": "2024-01-01"}), [])
    cache.set(ListingCache.key_for("/api/attendance", {"startDate": "2024-02-01"}), [])
    cache.set(ListingCache.key_for("/api/attendance-extra"), [])

    assert cache.invalidate("/api/attendance") == 2
    assert cache.get("/api/attendance-extra?") == []


def test_reads_are_cached_until_force_refresh() -> None:
    source = _source()

    source.employees()
    source.employees()
    assert source.clients.employees.list_calls == 1

    source.employees(force_refresh=True)
    assert source.clients.employees.list_calls == 2


def test_mutations_invalidate_affected_listings() -> None:
    source = _source()
    source.employees()
    source.departments()

    source.delete_employee(1)
    source.employees()
    source.departments()
    assert source.clients.employees.list_calls == 2
    assert source.clients.departments.list_calls == 1

    source.delete_department(3)
    source.employees()
    source.departments()
    assert source.clients.employees.list_calls == 3
    assert source.clients.departments.list_calls == 2


def test_update_permissions_passes_token_and_invalidates_employees() -> None:
    source = _source()
    source.employees()

    updated = source.update_permissions(1, "manager", ["reports.export"])
    source.employees()

    assert updated == {"id": 1, "role": "manager"}
    assert source.clients.employees.permission_updates == [(1, "manager", ["reports.export"], "token-1")]
    assert source.clients.employees.list_calls == 2


def test_department_create_and_update_invalidate_departments() -> None:
    source = _source()
    source.departments()

    source.create_department({"name": "Ops"})
    source.departments()
    source.update_department(4, {"name": "Operations"})
    source.departments()

    assert source.clients.departments.list_calls == 3


def test_report_cache_is_keyed_by_period_and_department() -> None:
    source = _source()
    start, end = date(2024, 1, 1), date(2024, 1, 31)

    source.attendance_report(start, end)
    source.attendance_report(start, end)
    source.attendance_report(start, end, department_id=2)

    assert source.clients.reports.calls == [
        ("attendance", start, end, None),
        ("attendance", start, end, 2),
    ]
