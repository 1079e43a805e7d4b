import json
import logging

from hr_console.app.infrastructure.logging.logger import get_logger, log_action


def test_log_action_emits_json_contract(caplog) -> None:
    logger = logging.getLogger("test.hr_console.log_contract")
    caplog.set_level(logging.INFO, logger=logger.name)

    log_action(
        logger,
        module="departments",
        action="delete",
        actor_role="admin",
        outcome="success",
        trace_id="trace-1",
        department_id=3,
        token="secret-token",
    )

    payload = json.loads(caplog.records[-1].getMessage())
    assert {"ts", "level", "module", "action", "actor_role", "trace_id", "outcome"} <= set(payload)
    assert payload["module"] == "departments"
    assert payload["department_id"] == 3
    assert "token" not in payload
    assert "secret-token" not in caplog.text


def test_get_logger_attaches_single_handler() -> None:
    first = get_logger("test.hr_console.single_handler")
    second = get_logger("test.hr_console.single_handler")

    assert first is second
    assert len(second.handlers) == 1
