from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.request import Request
import logging

from orders.serializers import OrderSerializer, UpdateOrderStatusSerializer
from orders.services import OrderService

logger = logging.getLogger(__name__)


class StatusActionsMixin:
    """
    Mixin for order status transition actions

    This mixin provides action methods for RestaurantOrderViewSet. Authorization
    and transition rules live in OrderService; errors it raises are rendered
    by the project exception handler.
    """

    @action(detail=True, methods=["post"], url_path="update-status")
    def update_status(self, request: Request, restaurant_pk=None, pk=None) -> Response:
        """
        Moves the order to one of the statuses offered to staff.

        Request body: {"status": "pending" | "preparing" | "delivering" | "delivered"}
        """
        serializer = UpdateOrderStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        order = OrderService.update_order_status(
            order_id=pk,
            restaurant_id=restaurant_pk,
            new_status=serializer.validated_data["status"],
            actor=request.user,
        )
        return Response(OrderSerializer(order).data)

    @action(detail=True, methods=["post"], url_path="cancel")
    def cancel(self, request: Request, restaurant_pk=None, pk=None) -> Response:
        """Cancels a non-terminal order."""
        order = OrderService.get_order(pk, restaurant_pk)
        order = OrderService.cancel_order(order, request.user)
        return Response(OrderSerializer(order).data)
