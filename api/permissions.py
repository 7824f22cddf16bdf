"""
Custom permission classes for role based access control.
"""
from rest_framework.permissions import BasePermission

from .models import Account


class IsAdminRole(BasePermission):
    """Allow access only to administrator accounts."""
    message = 'Administrator access required'

    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        user = getattr(request, "user", None)
        return bool(user and user.is_authenticated and getattr(user, "role", None) == Account.ROLE_ADMIN)


def is_admin(user) -> bool:
    return bool(user and getattr(user, "is_authenticated", False) and getattr(user, "role", None) == Account.ROLE_ADMIN)


def is_owner_or_admin(user, owner_id) -> bool:
    """True when ``user`` is the account ``owner_id`` or an administrator."""
    if not (user and getattr(user, "is_authenticated", False)):
        return False
    return is_admin(user) or str(user.id) == str(owner_id)
