from hr_console.clients.hr_client_sdk.normalizers import normalize_record, normalize_records, to_snake_case


def test_to_snake_case() -> None:
    assert to_snake_case("firstName") == "first_name"
    assert to_snake_case("checkInTime") == "check_in_time"
    assert to_snake_case("user_id") == "user_id"


def test_normalize_records_accepts_common_envelopes() -> None:
    row = {"id": 1, "departmentId": 2}

    assert normalize_records([row]) == [{"id": 1, "department_id": 2}]
    assert normalize_records({"data": [row]}) == [{"id": 1, "department_id": 2}]
    assert normalize_records({"items": [row, "junk"]}) == [{"id": 1, "department_id": 2}]
    assert normalize_records({"message": "ok"}) == []


def test_normalize_record_converts_nested_keys() -> None:
    payload = {"user": {"firstName": "Ann"}, "records": [{"checkOutTime": None}]}

    assert normalize_record(payload) == {"user": {"first_name": "Ann"}, "records": [{"check_out_time": None}]}
    assert normalize_record(None) == {}
