# ==================== UTILS/PERMISSIONS.PY ====================
from rest_framework import permissions


class IsOwnerOrReadOnly(permissions.BasePermission):
    """Only the space owner may modify a parking space or its windows and pricing"""

    def has_object_permission(self, request, view, obj):
        if request.method in permissions.SAFE_METHODS:
            return True
        return obj.owner == request.user


class IsOwnerOrDriver(permissions.BasePermission):
    """Booking visible to its driver and to the owner of the booked space"""

    def has_object_permission(self, request, view, obj):
        return obj.driver == request.user or obj.parking_space.owner == request.user
