from django.shortcuts import get_object_or_404
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import viewsets
from rest_framework.permissions import IsAuthenticated

from orders.filters import OrderFilter
from orders.permissions import IsOrderOwnerOrRestaurantStaff
from orders.serializers import OrderListSerializer, OrderSerializer
from orders.services import OrderService
from restaurants.models import Restaurant

from .status_actions import StatusActionsMixin


class RestaurantOrderViewSet(StatusActionsMixin, viewsets.ReadOnlyModelViewSet):
    """
    Orders of one restaurant, nested under /api/restaurants/{restaurant_pk}/.

    - Status transitions (StatusActionsMixin)
    - List is staff only and supports ?status= filtering
    - Detail is visible to the restaurant's staff and to the order's owner
    """

    permission_classes = [IsAuthenticated, IsOrderOwnerOrRestaurantStaff]
    filter_backends = [DjangoFilterBackend]
    filterset_class = OrderFilter

    def get_restaurant(self) -> Restaurant:
        if not hasattr(self, "_restaurant"):
            self._restaurant = get_object_or_404(Restaurant, pk=self.kwargs["restaurant_pk"])
        return self._restaurant

    def get_queryset(self):
        return OrderService.list_restaurant_orders(self.get_restaurant(), self.request.user)

    def get_object(self):
        order = OrderService.get_order(self.kwargs["pk"], self.kwargs["restaurant_pk"])
        self.check_object_permissions(self.request, order)
        return order

    def get_serializer_class(self):
        if self.action == "list":
            return OrderListSerializer
        return OrderSerializer
