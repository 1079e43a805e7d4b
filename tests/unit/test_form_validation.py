from hr_console.app.ui.forms import (
    FormStatus,
    build_form_state,
    department_defaults,
    map_api_validation_errors,
    validate_department_form,
)


def test_department_name_is_required() -> None:
    result = validate_department_form("   ", "desc")

    assert result.field_errors == {"name": "Department name is required."}
    state = build_form_state(result)
    assert state.status == FormStatus.DIRTY
    assert not state.submit_enabled
    assert "name" in state.submit_disabled_reason


def test_department_limits() -> None:
    too_long = validate_department_form("x" * 256, "y" * 1001)

    assert set(too_long.field_errors) == {"name", "description"}
    assert validate_department_form("x" * 255, None).is_valid


def test_valid_form_strips_values() -> None:
    result = validate_department_form("  Sales ", " Revenue team ")

    assert result.values == {"name": "Sales", "description": "Revenue team"}
    assert build_form_state(result).submit_enabled


def test_department_defaults() -> None:
    assert department_defaults(None) == {"name": "", "description": ""}
    assert department_defaults({"name": "Ops", "description": None}) == {"name": "Ops", "description": ""}


def test_map_api_validation_errors_supports_dict_and_issue_list() -> None:
    assert map_api_validation_errors({"name": ["Already exists"], "errors": {"description": "Too long"}}) == {
        "description": "Too long",
        "name": "Already exists",
    }
    assert map_api_validation_errors([{"path": ["body", "name"], "message": "Required"}]) == {"name": "Required"}
    assert map_api_validation_errors(None) == {}
