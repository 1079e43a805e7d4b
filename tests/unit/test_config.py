import os

import pytest

from hr_console.app.config import AppConfig, normalize_base_url, parse_bool, read_env_file


def test_defaults_without_env_file(tmp_path) -> None:
    config = AppConfig.from_env(str(tmp_path / "missing.env"), environ={})

    assert config.sdk.base_url == "http://localhost:5000/"
    assert config.sdk.timeout_seconds == 30
    assert config.sdk.verify_ssl is True
    assert config.sdk.retry_max_attempts == 3
    assert config.sdk.retry_backoff_ms == 250
    assert config.page_size == 10
    assert config.cache_ttl_seconds == 20
    assert config.export_dir == "out/exports"
    assert config.role == "admin"
    assert config.access_token is None


def test_env_file_feeds_sdk_and_console_settings(tmp_path) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text(
        "# local settings\n"
        'HR_API_BASE_URL="https://hr.example.com/base"\n'
        "HR_API_VERIFY_SSL=no\n"
        "export HR_API_RETRY_MAX_ATTEMPTS=5\n"
        "HR_CONSOLE_PAGE_SIZE=20\n"
        "HR_CONSOLE_ROLE=Manager\n"
        "HR_API_TOKEN='secret'\n",
        encoding="utf-8",
    )

    config = AppConfig.from_env(str(env_file), environ={"HR_API_RETRY_MAX_ATTEMPTS": "2"})

    assert config.sdk.base_url == "https://hr.example.com/base/"
    assert config.sdk.verify_ssl is False
    assert config.sdk.retry_max_attempts == 2
    assert config.page_size == 20
    assert config.role == "manager"
    assert config.access_token == "secret"


def test_env_file_does_not_leak_into_process_environment(tmp_path, monkeypatch) -> None:
    monkeypatch.delenv("HR_CONSOLE_EXPORT_DIR", raising=False)
    env_file = tmp_path / ".env"
    env_file.write_text("HR_CONSOLE_EXPORT_DIR=reports\n", encoding="utf-8")

    config = AppConfig.from_env(str(env_file))

    assert config.export_dir == "reports"
    assert "HR_CONSOLE_EXPORT_DIR" not in os.environ


def test_read_env_file_skips_noise(tmp_path) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("\n# comment\nNO_EQUALS\nKEY = value \n", encoding="utf-8")

    assert read_env_file(str(env_file)) == {"KEY": "value"}
    assert read_env_file(str(tmp_path / "missing.env")) == {}


def test_parse_bool_falls_back_to_default() -> None:
    assert parse_bool("ON") is True
    assert parse_bool("0") is False
    assert parse_bool("maybe", default=False) is False
    assert parse_bool(None) is True


def test_normalize_base_url() -> None:
    assert normalize_base_url(" https://hr.example.com ") == "https://hr.example.com/"
    assert normalize_base_url("") == "http://localhost:5000/"


def test_blank_numbers_use_defaults(tmp_path) -> None:
    config = AppConfig.from_env(str(tmp_path / "missing.env"), environ={"HR_CONSOLE_PAGE_SIZE": " "})

    assert config.page_size == 10


@pytest.mark.parametrize(
    ("key", "value"),
    [
        ("HR_CONSOLE_PAGE_SIZE", "15"),
        ("HR_CONSOLE_CACHE_TTL_SECONDS", "0"),
        ("HR_CONSOLE_EXPORT_DIR", "  "),
        ("HR_API_TIMEOUT_SECONDS", "-1"),
        ("HR_API_RETRY_MAX_ATTEMPTS", "0"),
        ("HR_API_RETRY_BACKOFF_MS", "-5"),
    ],
)
def test_invalid_values_are_rejected(tmp_path, key: str, value: str) -> None:
    with pytest.raises(ValueError, match=key):
        AppConfig.from_env(str(tmp_path / "missing.env"), environ={key: value})


def test_non_numeric_value_names_the_variable(tmp_path) -> None:
    with pytest.raises(ValueError, match="HR_API_RETRY_BACKOFF_MS must be an integer, got 'soon'"):
        AppConfig.from_env(str(tmp_path / "missing.env"), environ={"HR_API_RETRY_BACKOFF_MS": "soon"})
