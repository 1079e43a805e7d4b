from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

NAME_MAX_LENGTH = 255
DESCRIPTION_MAX_LENGTH = 1000


class FormStatus(str, Enum):
    IDLE = "idle"
    DIRTY = "dirty"
    VALID = "valid"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    ERROR = "error"


@dataclass
class FormResult:
    values: dict[str, Any]
    field_errors: dict[str, str]

    @property
    def first_invalid_field(self) -> str | None:
        return next(iter(self.field_errors), None)

    @property
    def is_valid(self) -> bool:
        return len(self.field_errors) == 0


@dataclass
class FormState:
    status: FormStatus = FormStatus.IDLE
    submit_enabled: bool = False
    submit_disabled_reason: str = "Fill in the required fields."


def _normalize_text(value: str | None) -> str:
    return (value or "").strip()


def validate_department_form(name: str | None, description: str | None = None) -> FormResult:
    normalized_name = _normalize_text(name)
    normalized_description = _normalize_text(description)
    field_errors: dict[str, str] = {}
    if not normalized_name:
        field_errors["name"] = "Department name is required."
    elif len(normalized_name) > NAME_MAX_LENGTH:
        field_errors["name"] = f"Department name cannot exceed {NAME_MAX_LENGTH} characters."
    if len(normalized_description) > DESCRIPTION_MAX_LENGTH:
        field_errors["description"] = f"Description cannot exceed {DESCRIPTION_MAX_LENGTH} characters."
    return FormResult(
        values={"name": normalized_name, "description": normalized_description},
        field_errors=field_errors,
    )


def department_defaults(department: dict[str, Any] | None) -> dict[str, str]:
    """Initial form values; empty for a new department."""
    department = department or {}
    return {"name": department.get("name") or "", "description": department.get("description") or ""}


def build_form_state(result: FormResult) -> FormState:
    if result.is_valid:
        return FormState(status=FormStatus.VALID, submit_enabled=True, submit_disabled_reason="")

    first_invalid_field = result.first_invalid_field or "form"
    return FormState(
        status=FormStatus.DIRTY,
        submit_enabled=False,
        submit_disabled_reason=f"Fix '{first_invalid_field}' before submitting.",
    )


def map_api_validation_errors(error_details: Any) -> dict[str, str]:
    if not error_details:
        return {}

    mapped: dict[str, str] = {}
    if isinstance(error_details, dict):
        if isinstance(error_details.get("errors"), dict):
            for key, value in error_details["errors"].items():
                mapped[str(key)] = str(value)
        for key, value in error_details.items():
            if key == "errors":
                continue
            if isinstance(value, str):
                mapped[str(key)] = value
            elif isinstance(value, list) and value and isinstance(value[0], str):
                mapped[str(key)] = value[0]
    elif isinstance(error_details, list):
        # zod-style issues: {"path": ["name"], "message": "..."}
        for item in error_details:
            if not isinstance(item, dict):
                continue
            field = item.get("field") or item.get("path") or item.get("loc")
            message = item.get("message") or item.get("msg")
            if isinstance(field, list):
                field = field[-1] if field else None
            if field and message:
                mapped[str(field)] = str(message)
    return mapped
