"""
Domain exceptions for the ordering engine.

Services raise these; the API layer renders them through
`ordering_exception_handler`, which is installed as DRF's EXCEPTION_HANDLER.
Each class carries the HTTP status and a stable machine-readable code.
"""
import logging

from django.db import DatabaseError
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class OrderingError(Exception):
    """Base exception for cart, checkout and order lifecycle errors."""

    status_code = status.HTTP_400_BAD_REQUEST
    code = "ordering_error"
    default_message = "The request could not be processed."

    def __init__(self, message=None, **details):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


class Unauthenticated(OrderingError):
    """No current user/actor. Never treated as anonymous."""

    status_code = status.HTTP_401_UNAUTHORIZED
    code = "unauthenticated"
    default_message = "You must be signed in to perform this action."


class Forbidden(OrderingError):
    """Actor is not staff of the order's restaurant."""

    status_code = status.HTTP_403_FORBIDDEN
    code = "forbidden"
    default_message = "You are not allowed to manage this restaurant's orders."


class CrossRestaurantCart(OrderingError):
    """Add-to-cart targets a different restaurant than the existing cart."""

    status_code = status.HTTP_409_CONFLICT
    code = "cross_restaurant_cart"

    def __init__(self, cart_restaurant_id, requested_restaurant_id, message=None):
        self.cart_restaurant_id = cart_restaurant_id
        self.requested_restaurant_id = requested_restaurant_id
        if message is None:
            message = (
                "Your cart already contains items from another restaurant. "
                "Clear your cart first."
            )
        super().__init__(
            message,
            cart_restaurant_id=str(cart_restaurant_id),
            requested_restaurant_id=str(requested_restaurant_id),
        )


class EmptyCart(OrderingError):
    """Checkout attempted with zero cart items."""

    code = "empty_cart"
    default_message = "Your cart is empty."


class InvalidQuantity(OrderingError):
    code = "invalid_quantity"
    default_message = "Quantity must be a positive whole number."


class InvalidCheckout(OrderingError):
    """Checkout input failed validation (address, payment method, tier, tip)."""

    code = "invalid_checkout"


class InvalidTransition(OrderingError):
    """Status change rejected; the order is left unchanged."""

    status_code = status.HTTP_409_CONFLICT
    code = "invalid_transition"

    def __init__(self, current_status, requested_status, message=None):
        self.current_status = current_status
        self.requested_status = requested_status
        if message is None:
            message = f"Cannot transition order from {current_status} to {requested_status}."
        super().__init__(
            message, current_status=current_status, requested_status=requested_status
        )


class CatalogItemNotFound(OrderingError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "catalog_item_not_found"
    default_message = "Catalog item not found."


class ItemUnavailable(OrderingError):
    status_code = status.HTTP_409_CONFLICT
    code = "item_unavailable"
    default_message = "This item is currently unavailable."


class OrderNotFound(OrderingError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "order_not_found"
    default_message = "Order not found."


class PersistenceFailure(OrderingError):
    """
    A store read/write failed. Propagated to the caller; retries belong to
    the storage client, not to this layer.
    """

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    code = "persistence_failure"
    default_message = "We could not save your request. Please try again."


class CartClearAnomaly(OrderingError):
    """
    The order was created but clearing the cart afterwards failed.

    Only ever logged. Checkout does not fail because of it: the persisted
    order is authoritative and a stale cart is tolerated.
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "cart_clear_anomaly"

    def __init__(self, order_id, user_id, message=None):
        self.order_id = order_id
        self.user_id = user_id
        if message is None:
            message = f"Order {order_id} was created but the cart of user {user_id} was not cleared."
        super().__init__(message, order_id=str(order_id), user_id=str(user_id))


def ordering_exception_handler(exc, context):
    """
    DRF exception handler: domain errors become `{"error", "code"}` responses,
    everything else falls through to DRF's default handling.

    Store errors that escape the services (e.g. while a view evaluates a lazy
    queryset) are rendered as PersistenceFailure.
    """
    if isinstance(exc, DatabaseError):
        logger.error(f"Store error in API view: {type(exc).__name__}: {exc}", exc_info=exc)
        exc = PersistenceFailure()

    if isinstance(exc, OrderingError):
        request = context.get("request")
        if request is not None:
            logger.info(
                f"Ordering error {exc.code} on {request.method} {request.path}: {exc.message}"
            )
        data = {"error": exc.message, "code": exc.code}
        if exc.details:
            data["details"] = exc.details
        return Response(data, status=exc.status_code)

    return exception_handler(exc, context)
