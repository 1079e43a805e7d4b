from hr_console.app.error_presenter import build_notice, is_retryable, show_error
from hr_console.app.export.errors import ExportError
from hr_console.app.infrastructure.errors.error_mapper import ErrorMapper
from hr_console.clients.hr_client_sdk.errors import ApiError


def test_status_hints_override_backend_codes() -> None:
    payload = ErrorMapper.to_payload(ApiError(code="HTTP_ERROR", message="nope", status_code=403, trace_id="t-1"))

    assert payload["code"] == "PERMISSION_DENIED"
    assert payload["trace_id"] == "t-1"


def test_server_errors_map_to_internal_error() -> None:
    payload = ErrorMapper.to_payload(ApiError(code="HTTP_ERROR", message="boom", status_code=503))

    assert payload["code"] == "INTERNAL_ERROR"


def test_network_error_uses_known_code() -> None:
    payload = ErrorMapper.to_payload(ApiError(code="NETWORK_ERROR", message="offline"))

    assert payload["message"] == "The HR API is unreachable."


def test_export_error_notice() -> None:
    notice = build_notice("Exporting leave report (pdf)", ExportError("No data available for the selected period"))

    assert notice.code == "EXPORT_ERROR"
    assert not notice.retryable
    assert notice.render() == (
        "[error] Exporting leave report (pdf): [EXPORT_ERROR] No data available for the selected period "
        "Next: Adjust the period or filters and export again."
    )


def test_only_transient_api_errors_are_retryable() -> None:
    assert is_retryable(ApiError(code="NETWORK_ERROR", message="offline"))
    assert is_retryable(ApiError(code="HTTP_ERROR", message="busy", status_code=503))
    assert not is_retryable(ApiError(code="CONFLICT", message="stale", status_code=409))
    assert not is_retryable(ApiError(code="HTTP_ERROR", message="nope", status_code=403))
    assert not is_retryable(ApiError(code="VALIDATION_ERROR", message="bad", status_code=422))
    assert not is_retryable(RuntimeError("kaboom"))


def test_show_error_prints_trace_id_when_known(capsys) -> None:
    notice = show_error("Loading employees", ApiError(code="NOT_FOUND", message="gone", status_code=404, trace_id="abc"))

    output = capsys.readouterr().out
    assert notice.code == "NOT_FOUND"
    assert output.strip() == (
        "[error] Loading employees: [NOT_FOUND] The record no longer exists. Next: Refresh the listing. (trace_id=abc)"
    )


def test_unexpected_errors_get_internal_notice() -> None:
    notice = build_notice("Saving department", RuntimeError("kaboom"))

    assert (notice.code, notice.message, notice.trace_id) == ("INTERNAL_ERROR", "kaboom", None)
