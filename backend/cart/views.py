"""
Cart API views for customer-facing cart operations.

Only signed-in users have a cart. Domain errors raised by the services are
rendered by delivery_core.exceptions.ordering_exception_handler.
"""

from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
import logging

from delivery_core.exceptions import CatalogItemNotFound
from orders.serializers import CheckoutSerializer
from orders.services import CheckoutService
from .serializers import (
    CartSerializer,
    AddToCartSerializer,
    UpdateCartItemSerializer,
)
from .services import CartService

logger = logging.getLogger(__name__)


class CartViewSet(viewsets.ViewSet):
    """
    ViewSet for cart operations.

    Endpoints:
    - GET /api/cart/ - Retrieve current cart
    - POST /api/cart/add-item/ - Add item to cart
    - PATCH /api/cart/update-item/{catalog_item_id}/ - Update item quantity
    - DELETE /api/cart/remove-item/{catalog_item_id}/ - Remove item from cart
    - DELETE /api/cart/clear/ - Clear all items
    - POST /api/cart/checkout/ - Convert cart to order
    """

    permission_classes = [IsAuthenticated]

    def _cart_response(self, request, status_code=status.HTTP_200_OK):
        summary = CartService.get_cart_summary(request.user)
        return Response(CartSerializer(summary).data, status=status_code)

    def retrieve(self, request):
        """
        GET /api/cart/

        Retrieve the current cart with all items and its subtotal.
        """
        return self._cart_response(request)

    @action(detail=False, methods=['post'], url_path='add-item')
    def add_item(self, request):
        """
        POST /api/cart/add-item/

        Request body:
        {
            "catalog_item_id": "uuid",
            "restaurant_id": "uuid",
            "quantity": 1
        }
        """
        serializer = AddToCartSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        CartService.add_to_cart(
            request.user,
            catalog_item_id=serializer.validated_data['catalog_item_id'],
            restaurant_id=serializer.validated_data['restaurant_id'],
            quantity=serializer.validated_data['quantity'],
        )
        return self._cart_response(request, status.HTTP_201_CREATED)

    @action(detail=False, methods=['patch'], url_path='update-item/(?P<catalog_item_id>[^/.]+)')
    def update_item(self, request, catalog_item_id=None):
        """
        PATCH /api/cart/update-item/{catalog_item_id}/

        Request body:
        {
            "quantity": 2
        }
        """
        serializer = UpdateCartItemSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        CartService.update_item_quantity(
            request.user, catalog_item_id, serializer.validated_data['quantity']
        )
        return self._cart_response(request)

    @action(detail=False, methods=['delete'], url_path='remove-item/(?P<catalog_item_id>[^/.]+)')
    def remove_item(self, request, catalog_item_id=None):
        """
        DELETE /api/cart/remove-item/{catalog_item_id}/
        """
        if not CartService.remove_item(request.user, catalog_item_id):
            raise CatalogItemNotFound(f"Catalog item {catalog_item_id} is not in your cart.")
        return self._cart_response(request)

    @action(detail=False, methods=['delete'], url_path='clear')
    def clear(self, request):
        """
        DELETE /api/cart/clear/

        Remove all items from the cart.
        """
        CartService.clear(request.user)
        return self._cart_response(request)

    @action(detail=False, methods=['post'], url_path='checkout')
    def checkout(self, request):
        """
        POST /api/cart/checkout/

        Convert the cart into an order. The cart is emptied afterwards.

        Request body:
        {
            "delivery_address": "Calle 10 # 5-20",   (defaults to the profile address)
            "payment_method": "Efectivo" | "Tarjeta" | "Nequi",
            "delivery_tier": "standard" | "express",
            "tip_selection": "0" | "2000" | "5000" | "custom",
            "custom_tip": "3500",
            "notes": "Sin cebolla"
        }

        Response (201):
        {
            "order_id": "uuid",
            "restaurant_id": "uuid"
        }
        """
        serializer = CheckoutSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        delivery_address = data.get('delivery_address')
        if delivery_address is None:
            delivery_address = request.user.address

        order = CheckoutService.checkout(
            request.user,
            delivery_address=delivery_address,
            payment_method=data['payment_method'],
            delivery_tier=data['delivery_tier'],
            tip_selection=data['tip_selection'],
            notes=data['notes'],
            custom_tip=data['custom_tip'],
        )
        return Response(
            {'order_id': str(order.id), 'restaurant_id': str(order.restaurant_id)},
            status=status.HTTP_201_CREATED,
        )
