from rest_framework import serializers

from orders.services import STAFF_SELECTABLE_STATUSES


class UpdateOrderStatusSerializer(serializers.Serializer):
    """
    Serializer specifically for validating a staff status change.

    Only the statuses offered to staff are accepted here; cancelling has its
    own endpoint and transition rules are enforced by OrderService.
    """

    status = serializers.ChoiceField(choices=STAFF_SELECTABLE_STATUSES)
