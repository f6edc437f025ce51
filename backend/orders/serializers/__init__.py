"""
Orders serializers package - modular serializer layer.
"""

# Order item serializers
from .order_item_serializers import OrderItemSerializer

# Order serializers
from .order_serializers import (
    CheckoutSerializer,
    OrderListSerializer,
    OrderSerializer,
)

# Status serializers
from .status_serializers import UpdateOrderStatusSerializer

__all__ = [
    # Order items
    "OrderItemSerializer",
    # Orders
    "OrderSerializer",
    "OrderListSerializer",
    "CheckoutSerializer",
    # Status
    "UpdateOrderStatusSerializer",
]
