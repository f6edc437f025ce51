from rest_framework import permissions


class IsOrderOwnerOrRestaurantStaff(permissions.BasePermission):
    """
    Object-level read access to an order:
    - The customer who placed it
    - Staff of the restaurant it was placed with
    """

    def has_object_permission(self, request, view, obj):
        if not (request.user and request.user.is_authenticated):
            return False

        if obj.user_id == request.user.pk:
            return True

        return obj.restaurant.has_staff_member(request.user)
