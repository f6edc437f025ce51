from rest_framework import serializers
from orders.models import Order

from .order_item_serializers import OrderItemSerializer


class OrderSerializer(serializers.ModelSerializer):
    """
    Read-only representation of a placed order.

    Orders are never edited through the API; status changes go through the
    dedicated actions.
    """

    items = OrderItemSerializer(many=True, read_only=True)
    restaurant_id = serializers.UUIDField(read_only=True)
    is_terminal = serializers.BooleanField(read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "status",
            "is_terminal",
            "restaurant_id",
            "restaurant_name",
            "customer_name",
            "customer_phone",
            "delivery_address",
            "payment_method",
            "delivery_tier",
            "delivery_time",
            "notes",
            "items",
            "subtotal",
            "delivery_fee",
            "tip",
            "total",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class OrderListSerializer(serializers.ModelSerializer):
    """Lightweight order summary for list endpoints."""

    restaurant_id = serializers.UUIDField(read_only=True)
    item_count = serializers.IntegerField(read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "status",
            "restaurant_id",
            "restaurant_name",
            "customer_name",
            "item_count",
            "total",
            "delivery_time",
            "created_at",
        ]
        read_only_fields = fields


class CheckoutSerializer(serializers.Serializer):
    """
    Validates the checkout form.

    Business validation (empty cart, unknown tier, tip parsing) stays in
    OrderFactory; this only shapes the request.
    """

    delivery_address = serializers.CharField(required=False, allow_blank=True, trim_whitespace=True)
    payment_method = serializers.ChoiceField(
        choices=Order.PaymentMethod.choices, default=Order.PaymentMethod.CASH
    )
    delivery_tier = serializers.ChoiceField(
        choices=Order.DeliveryTier.choices, default=Order.DeliveryTier.STANDARD
    )
    tip_selection = serializers.CharField(default="0")
    custom_tip = serializers.CharField(required=False, allow_blank=True, default="")
    notes = serializers.CharField(required=False, allow_blank=True, default="")
