from rest_framework import viewsets
from rest_framework.permissions import IsAuthenticated

from orders.serializers import OrderListSerializer, OrderSerializer
from orders.services import OrderService


class OrderViewSet(viewsets.ReadOnlyModelViewSet):
    """
    The signed-in user's own orders, newest first.

    GET /api/orders/        - order history
    GET /api/orders/{id}/   - one of the user's orders
    """

    permission_classes = [IsAuthenticated]

    def get_queryset(self):
        return OrderService.list_user_orders(self.request.user)

    def get_serializer_class(self):
        if self.action == "list":
            return OrderListSerializer
        return OrderSerializer
