from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from hr_console.app.ui.permission_map import check_permission

MAIN_MENU = "main_menu"


@dataclass
class SessionState:
    access_token: str | None = None
    user: dict[str, Any] | None = None
    role: str | None = None
    custom_permissions: list[str] = field(default_factory=list)
    filters_by_module: dict[str, dict[str, str]] = field(default_factory=dict)
    listing_view_by_module: dict[str, dict[str, Any]] = field(default_factory=dict)
    current_module: str = MAIN_MENU

    def apply_user(self, user_payload: dict[str, Any]) -> None:
        self.user = user_payload
        self.role = str(user_payload.get("role") or "").lower() or None
        self.custom_permissions = list(user_payload.get("custom_permissions") or [])

    def can(self, permission: str) -> bool:
        return check_permission(self.role, self.custom_permissions, permission).allowed

    def clear(self) -> None:
        self.access_token = None
        self.user = None
        self.role = None
        self.custom_permissions = []
        self.filters_by_module = {}
        self.listing_view_by_module = {}
        self.current_module = MAIN_MENU
