"""Collaborator capabilities and the default grants for each relationship.

A link's ``permissions`` column is a JSON map of capability name to bool. Only
names in :class:`Permission` may ever be written to it, and a missing name
reads as denied.
"""

from enum import Enum
from typing import Any, Mapping

from backend.app.core.errors import InvalidRequestError


class Role(str, Enum):
    STUDENT = "student"
    COUNSELOR = "counselor"
    PARENT = "parent"


class Relationship(str, Enum):
    COUNSELOR = "counselor"
    PARENT = "parent"


COLLABORATOR_ROLES = frozenset({Role.COUNSELOR.value, Role.PARENT.value})


class Permission(str, Enum):
    VIEW_TASKS = "viewTasks"
    MANAGE_TASKS = "manageTasks"
    VIEW_ESSAYS = "viewEssays"
    MANAGE_ESSAYS = "manageEssays"
    VIEW_CALENDAR = "viewCalendar"
    MANAGE_CALENDAR = "manageCalendar"
    VIEW_FINANCIAL = "viewFinancial"
    APPROVE_AI_SUGGESTIONS = "approveAiSuggestions"


PERMISSION_KEYS = frozenset(perm.value for perm in Permission)

PERMISSION_LABELS: dict[Permission, str] = {
    Permission.VIEW_TASKS: "View tasks & deadlines",
    Permission.MANAGE_TASKS: "Create & edit tasks",
    Permission.VIEW_ESSAYS: "See essay drafts",
    Permission.MANAGE_ESSAYS: "Edit essays",
    Permission.VIEW_CALENDAR: "See synced calendar feed",
    Permission.MANAGE_CALENDAR: "Sync & update calendars",
    Permission.VIEW_FINANCIAL: "See financial aid info",
    Permission.APPROVE_AI_SUGGESTIONS: "Approve AI rewrite suggestions",
}

PARENT_READ_ONLY = frozenset(
    {
        Permission.VIEW_TASKS,
        Permission.VIEW_ESSAYS,
        Permission.VIEW_CALENDAR,
        Permission.VIEW_FINANCIAL,
    }
)


def is_permission_key(value: Any) -> bool:
    if isinstance(value, Permission):
        return True
    return isinstance(value, str) and value in PERMISSION_KEYS


def default_permissions(relationship: Relationship | str) -> dict[str, bool]:
    """Full access for counselors, view-only for parents."""
    relationship = Relationship(relationship)
    if relationship is Relationship.COUNSELOR:
        return {perm.value: True for perm in Permission}
    return {perm.value: perm in PARENT_READ_ONLY for perm in Permission}


def has_permission(permissions: Mapping[str, Any] | None, permission: Permission | str) -> bool:
    if not permissions:
        return False
    key = permission.value if isinstance(permission, Permission) else permission
    return permissions.get(key) is True


def sanitize_permissions(patch: Mapping[str, Any] | None) -> dict[str, bool]:
    """Validate a partial permission map; unknown capability names are rejected."""
    if not patch:
        return {}
    unknown = sorted(str(key) for key in patch if not is_permission_key(key))
    if unknown:
        raise InvalidRequestError(f"Unknown permission(s): {', '.join(unknown)}")
    not_bool = sorted(str(key) for key, value in patch.items() if not isinstance(value, bool))
    if not_bool:
        raise InvalidRequestError(f"Permission values must be true or false: {', '.join(not_bool)}")
    return {Permission(key).value: value for key, value in patch.items()}


def permission_label(permission: Permission | str) -> str:
    return PERMISSION_LABELS.get(Permission(permission), str(permission))
