from studio.adapters.auth import SessionUser
from studio.db.models import Role
from studio.rbac import can_access_resource, get_permissions, has_permission


def test_owner_or_admin_can_access() -> None:
    assert can_access_resource("u1", "u1", False)
    assert not can_access_resource("u1", "u2", False)
    assert can_access_resource("u1", "u2", True)


def test_user_permissions_are_the_base_set() -> None:
    permissions = get_permissions(Role.USER)
    assert permissions == {
        "canViewOwnResources": True,
        "canCreateResources": True,
        "canUpdateOwnResources": True,
        "canDeleteOwnResources": True,
    }


def test_admin_permissions_extend_the_base_set() -> None:
    permissions = get_permissions(Role.ADMIN)
    assert permissions["canViewOwnResources"]
    assert permissions["canViewAllResources"]
    assert permissions["canUpdateAllResources"]
    assert permissions["canDeleteAllResources"]
    assert permissions["canManageUsers"]


def test_has_permission() -> None:
    admin = SessionUser(id="a", email="a@example.com", role=Role.ADMIN)
    user = SessionUser(id="u", email="u@example.com", role=Role.USER)
    assert has_permission(admin, "canManageUsers")
    assert not has_permission(user, "canManageUsers")
    assert has_permission(user, "canCreateResources")
    assert not has_permission(user, "doesNotExist")
