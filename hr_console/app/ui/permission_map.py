from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Permission:
    id: str
    label: str
    category: str


PERMISSIONS: tuple[Permission, ...] = (
    Permission("employees.view", "View employees", "Employees"),
    Permission("employees.create", "Create employees", "Employees"),
    Permission("employees.edit", "Edit employees", "Employees"),
    Permission("employees.delete", "Delete employees", "Employees"),
    Permission("departments.view", "View departments", "Departments"),
    Permission("departments.manage", "Manage departments", "Departments"),
    Permission("attendance.view", "View attendance", "Attendance"),
    Permission("attendance.manage", "Manage attendance", "Attendance"),
    Permission("leave.view", "View leave requests", "Leave"),
    Permission("leave.approve", "Approve leave requests", "Leave"),
    Permission("reports.view", "View reports", "Reports"),
    Permission("reports.export", "Export reports", "Reports"),
    Permission("roles.view", "View roles", "Roles"),
    Permission("roles.manage", "Manage roles and permissions", "Roles"),
)

_ALL = [permission.id for permission in PERMISSIONS]

DEFAULT_ROLE_PERMISSIONS: dict[str, list[str]] = {
    "admin": list(_ALL),
    "hr": [permission for permission in _ALL if not permission.startswith("roles.")] + ["roles.view"],
    "manager": [
        "employees.view",
        "departments.view",
        "attendance.view",
        "leave.view",
        "leave.approve",
        "reports.view",
    ],
    "employee": ["attendance.view", "leave.view"],
}


@dataclass(frozen=True)
class PermissionDecision:
    allowed: bool
    mode: str
    message: str = ""


def default_permissions(role: str | None) -> list[str]:
    return list(DEFAULT_ROLE_PERMISSIONS.get((role or "").lower(), []))


def effective_permissions(role: str | None, custom_permissions: list[str] | None = None) -> list[str]:
    merged = default_permissions(role)
    for permission in custom_permissions or []:
        if permission not in merged:
            merged.append(permission)
    return merged


def toggle_permission(role: str | None, custom_permissions: list[str], permission: str) -> list[str]:
    """Add or remove a custom grant; role defaults cannot be removed."""
    if permission in default_permissions(role):
        return list(custom_permissions)
    if permission in custom_permissions:
        return [item for item in custom_permissions if item != permission]
    return [*custom_permissions, permission]


def can_edit_permissions(role: str | None) -> bool:
    return (role or "").lower() == "admin"


def check_permission(role: str | None, custom_permissions: list[str] | None, key: str) -> PermissionDecision:
    if key not in _ALL:
        return PermissionDecision(False, "hidden", f"Unmapped permission: {key}.")
    if not role:
        return PermissionDecision(False, "disabled", "Log in to use this screen.")
    if key in effective_permissions(role, custom_permissions):
        return PermissionDecision(True, "enabled")
    return PermissionDecision(False, "hidden", f"Your role does not grant {key}.")


__all__ = [
    "DEFAULT_ROLE_PERMISSIONS",
    "PERMISSIONS",
    "Permission",
    "PermissionDecision",
    "can_edit_permissions",
    "check_permission",
    "default_permissions",
    "effective_permissions",
    "toggle_permission",
]
