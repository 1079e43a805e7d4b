import httpx
import pytest

from hr_console.clients.hr_client_sdk.config import SDKConfig
from hr_console.clients.hr_client_sdk.errors import ApiError
from hr_console.clients.hr_client_sdk.http_client import HttpClient


def _config(attempts: int = 3) -> SDKConfig:
    return SDKConfig(
        base_url="http://hr.local/",
        timeout_seconds=5,
        verify_ssl=True,
        retry_max_attempts=attempts,
        retry_backoff_ms=100,
    )


def _client(handler, attempts: int = 3, sleeps: list[float] | None = None) -> HttpClient:
    transport = httpx.MockTransport(handler)
    sleeper = sleeps.append if sleeps is not None else (lambda _: None)
    return HttpClient(
        config=_config(attempts),
        client=httpx.Client(base_url="http://hr.local/", transport=transport),
        sleeper=sleeper,
    )


def test_get_retries_on_timeout_and_5xx_with_linear_backoff() -> None:
    calls = {"count": 0}

    def _handler(request: httpx.Request) -> httpx.Response:
        calls["count"] += 1
        if calls["count"] == 1:
            raise httpx.ReadTimeout("timeout", request=request)
        if calls["count"] == 2:
            return httpx.Response(503, json={"message": "down"})
        return httpx.Response(200, json={"ok": True})

    sleeps: list[float] = []
    client = _client(_handler, sleeps=sleeps)

    payload = client.request("GET", "/api/employees")

    assert payload == {"ok": True}
    assert calls["count"] == 3
    assert sleeps == [0.1, 0.2]


def test_mutations_are_not_retried() -> None:
    calls = {"count": 0}

    def _handler(request: httpx.Request) -> httpx.Response:
        calls["count"] += 1
        return httpx.Response(500, json={"message": "boom"})

    client = _client(_handler)

    with pytest.raises(ApiError) as raised:
        client.request("DELETE", "/api/employees/1")

    assert calls["count"] == 1
    assert raised.value.status_code == 500


def test_network_error_after_retries_are_exhausted() -> None:
    def _handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    client = _client(_handler, attempts=2)

    with pytest.raises(ApiError) as raised:
        client.request("GET", "/api/departments")

    assert raised.value.code == "NETWORK_ERROR"


def test_bearer_token_and_list_payload_wrapping() -> None:
    seen: dict[str, str] = {}

    def _handler(request: httpx.Request) -> httpx.Response:
        seen["authorization"] = request.headers.get("Authorization", "")
        seen["path"] = request.url.path
        return httpx.Response(200, json=[{"id": 1}])

    client = _client(_handler)

    payload = client.request("GET", "api/departments", token="abc")

    assert seen == {"authorization": "Bearer abc", "path": "/api/departments"}
    assert payload == {"data": [{"id": 1}]}


def test_no_content_returns_empty_dict() -> None:
    client = _client(lambda request: httpx.Response(204))

    assert client.request("DELETE", "/api/departments/3") == {}


def test_auth_errors_reach_registered_handler() -> None:
    client = _client(lambda request: httpx.Response(401, json={"message": "Unauthorized"}))
    received: list[ApiError] = []
    client.register_auth_error_handler(received.append)

    with pytest.raises(ApiError):
        client.request("GET", "/api/employees")

    assert [error.code for error in received] == ["UNAUTHORIZED"]
