"""
Custom permission classes for revenue app.
"""
from rest_framework.permissions import BasePermission

from apps.accounts.models import UserRole


class CanReportSales(BasePermission):
    """
    Permission to report a sale and trigger revenue distribution.

    Allows if:
    - User is staff
    - User holds the manufacturer or designer role
    """

    message = 'Only staff, manufacturers and designers can report sales.'

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False
        if user.is_staff:
            return True
        return user.has_role(UserRole.MANUFACTURER) or user.has_role(UserRole.DESIGNER)
