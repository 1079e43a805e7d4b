import json
import logging
from datetime import datetime, timezone
from typing import Any

REDACTED_KEYS = {"password", "token", "access_token", "refresh_token", "secret"}


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger
    logger.setLevel(logging.INFO)
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    return logger


def log_action(
    logger: logging.Logger,
    module: str,
    action: str,
    actor_role: str | None,
    outcome: str,
    trace_id: str | None = None,
    **extra: Any,
) -> None:
    payload: dict[str, Any] = {
        "ts": datetime.now(timezone.utc).isoformat(),
        "level": "INFO",
        "module": module,
        "action": action,
        "actor_role": actor_role,
        "trace_id": trace_id,
        "outcome": outcome,
    }
    for key, value in extra.items():
        if key.lower() in REDACTED_KEYS:
            continue
        payload[key] = value if isinstance(value, (str, int, float, bool)) or value is None else str(value)
    logger.info(json.dumps(payload))
