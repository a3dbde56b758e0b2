"""
Permission classes for role based access control.
"""
from rest_framework.permissions import BasePermission


class IsAdminRole(BasePermission):
    """Allow access only to users with the administrative role."""
    message = 'Administrator privileges are required.'

    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        user = getattr(request, "user", None)
        return bool(user and user.is_authenticated and getattr(user, "role", None) == "admin")
