"""
Role based permission classes.
"""
from rest_framework.permissions import BasePermission, SAFE_METHODS

MANAGER_ROLES = {"manager", "admin", "super"}
ADMIN_ROLES = {"admin", "super"}


def is_manager(user) -> bool:
    return getattr(user, "role", None) in MANAGER_ROLES


class IsManagerRole(BasePermission):
    """Managers and above."""
    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        user = getattr(request, "user", None)
        return bool(user and user.is_authenticated and is_manager(user))


class IsAdminRole(BasePermission):
    """Organization administrators and super users."""
    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        user = getattr(request, "user", None)
        return bool(user and user.is_authenticated and getattr(user, "role", None) in ADMIN_ROLES)


class IsSuper(BasePermission):
    """Only super admin."""
    def has_permission(self, request, view) -> bool:
        user = getattr(request, "user", None)
        return bool(user and user.is_authenticated and getattr(user, "role", None) == "super")


class ManagerWriteOrReadOnly(BasePermission):
    """Anyone authenticated may read; writes need a manager."""
    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        user = getattr(request, "user", None)
        if not (user and user.is_authenticated):
            return False
        return request.method in SAFE_METHODS or is_manager(user)
