"""Role-based visibility: admins see every record, users see the records they created."""

from __future__ import annotations

from typing import Any, Dict, Optional, TypeVar
from uuid import UUID

from .adapters.auth import SessionUser
from .db.models import Role

QueryT = TypeVar("QueryT")

_BASE_PERMISSIONS: Dict[str, bool] = {
    "canViewOwnResources": True,
    "canCreateResources": True,
    "canUpdateOwnResources": True,
    "canDeleteOwnResources": True,
}

_ADMIN_PERMISSIONS: Dict[str, bool] = {
    "canViewAllResources": True,
    "canUpdateAllResources": True,
    "canDeleteAllResources": True,
    "canManageUsers": True,
}


def can_access_resource(user_id: Any, owner_id: Any, is_admin: bool) -> bool:
    return is_admin or str(user_id) == str(owner_id)


def get_permissions(role: Role) -> Dict[str, bool]:
    permissions = dict(_BASE_PERMISSIONS)
    if Role(role) == Role.ADMIN:
        permissions.update(_ADMIN_PERMISSIONS)
    return permissions


def has_permission(user: SessionUser, permission: str) -> bool:
    return get_permissions(user.role).get(permission) is True


def can_access(user: SessionUser, record: Any) -> bool:
    """Check a record carrying ``created_by_user_id`` against the session user."""

    return can_access_resource(user.id, record.created_by_user_id, user.is_admin)


def scope_query(query: QueryT, model: Any, user: SessionUser) -> QueryT:
    """Restrict a query to the caller's own rows unless they are an admin."""

    if user.is_admin:
        return query
    return query.filter(model.created_by_user_id == UUID(user.id))


def visible_or_none(record: Optional[Any], user: SessionUser) -> Optional[Any]:
    """Treat records the caller cannot see the same as missing ones."""

    if record is None or not can_access(user, record):
        return None
    return record
