from hr_console.app import main as main_module
from hr_console.app.main import build_session, main


def test_build_session_applies_role() -> None:
    session = build_session("HR", "token")

    assert session.role == "hr"
    assert session.access_token == "token"
    assert session.can("roles.view")


def test_unknown_role_is_rejected(tmp_path, capsys) -> None:
    code = main(["--env-file", str(tmp_path / "missing.env"), "--role", "intern"])

    assert code == 1
    assert "Unknown role 'intern'" in capsys.readouterr().err


def test_invalid_configuration_exits_with_error(tmp_path, monkeypatch, capsys) -> None:
    monkeypatch.setenv("HR_CONSOLE_PAGE_SIZE", "7")

    code = main(["--env-file", str(tmp_path / "missing.env")])

    assert code == 1
    assert "HR_CONSOLE_PAGE_SIZE" in capsys.readouterr().err


def test_cli_runs_console_until_exit(tmp_path, monkeypatch, capsys) -> None:
    monkeypatch.setenv("HR_CONSOLE_ROLE", "manager")
    monkeypatch.setattr("builtins.input", lambda _: "0")

    code = main_module.run_cli(env_file=str(tmp_path / "missing.env"))

    output = capsys.readouterr().out
    assert code == 0
    assert "Base URL: http://localhost:5000/" in output
    assert "Role: manager" in output


def test_cli_reads_role_and_token_from_env_file(tmp_path, monkeypatch, capsys) -> None:
    monkeypatch.delenv("HR_CONSOLE_ROLE", raising=False)
    monkeypatch.delenv("HR_API_TOKEN", raising=False)
    env_file = tmp_path / ".env"
    env_file.write_text("HR_CONSOLE_ROLE=hr\nHR_API_TOKEN=abc\n", encoding="utf-8")
    monkeypatch.setattr("builtins.input", lambda _: "0")

    code = main(["--env-file", str(env_file)])

    assert code == 0
    assert "Role: hr" in capsys.readouterr().out
