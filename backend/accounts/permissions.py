from rest_framework import permissions

from .models import UserRole


class IsAdmin(permissions.BasePermission):
    """
    Only administrators. Administrators also bypass the pricing lock.
    """
    def has_permission(self, request, view):
        return request.user.is_authenticated and request.user.role == UserRole.ADMIN


class IsInternalStaff(permissions.BasePermission):
    """
    Administrators and internal operations staff.
    """
    def has_permission(self, request, view):
        return request.user.is_authenticated and request.user.role in (UserRole.ADMIN, UserRole.INTERNAL_STAFF)


class IsCustomer(permissions.BasePermission):
    """
    External customers only.
    """
    def has_permission(self, request, view):
        return request.user.is_authenticated and request.user.role == UserRole.CUSTOMER
