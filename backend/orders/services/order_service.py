from django.core.exceptions import ValidationError
from django.db import DatabaseError, transaction
from django.utils import timezone
import logging

from delivery_core.exceptions import (
    Forbidden,
    InvalidTransition,
    OrderNotFound,
    PersistenceFailure,
)
from orders.models import Order, OrderStatusChange
from users.services import require_authenticated

logger = logging.getLogger(__name__)

TERMINAL_STATUSES = frozenset({Order.OrderStatus.DELIVERED.value, Order.OrderStatus.CANCELLED.value})

# Offered to staff by the status-update endpoint; cancelling has its own action.
STAFF_SELECTABLE_STATUSES = (
    Order.OrderStatus.PENDING.value,
    Order.OrderStatus.PREPARING.value,
    Order.OrderStatus.DELIVERING.value,
    Order.OrderStatus.DELIVERED.value,
)


class OrderService:
    """Order lifecycle: lookups and staff-driven status changes."""

    # Gated on terminality only: any non-terminal status may move to any other
    # status. Terminal statuses have no way out. Requesting the status the order
    # already has is rejected (409) and writes no audit row.
    VALID_STATUS_TRANSITIONS = {
        current: [
            target
            for target in Order.OrderStatus.values
            if target != current and current not in TERMINAL_STATUSES
        ]
        for current in Order.OrderStatus.values
    }

    @staticmethod
    def get_order(order_id, restaurant_id) -> Order:
        try:
            return (
                Order.objects.select_related("restaurant", "user")
                .prefetch_related("items")
                .get(pk=order_id, restaurant_id=restaurant_id)
            )
        except (Order.DoesNotExist, ValidationError, ValueError):
            raise OrderNotFound(f"Order {order_id} not found for restaurant {restaurant_id}.")
        except DatabaseError as exc:
            raise PersistenceFailure(f"Could not read order {order_id}.") from exc

    @staticmethod
    def list_user_orders(user):
        """The user's own orders, newest first."""
        require_authenticated(user, "view your orders")
        return (
            Order.objects.filter(user=user)
            .select_related("restaurant")
            .prefetch_related("items")
            .order_by("-created_at")
        )

    @staticmethod
    def list_restaurant_orders(restaurant, actor, status=None):
        """All orders of a restaurant, newest first. Staff only."""
        OrderService._require_staff(restaurant, actor)
        queryset = Order.objects.filter(restaurant=restaurant).prefetch_related("items")
        if status:
            queryset = queryset.filter(status=status)
        return queryset.order_by("-created_at")

    @staticmethod
    def _require_staff(restaurant, actor):
        require_authenticated(actor, "manage orders")
        if not restaurant.has_staff_member(actor):
            logger.warning(
                f"User {actor.pk} tried to manage orders of restaurant {restaurant.pk} without staff rights"
            )
            raise Forbidden()

    @staticmethod
    def update_status(order: Order, new_status: str, actor) -> Order:
        """
        Move `order` to `new_status` on behalf of `actor`.

        Checks run in this order: authentication, staff membership of the
        order's restaurant, then the transition itself. The write is
        conditional on the status read here, so a concurrent change makes
        this call fail instead of overwriting it. Only `status` and
        `updated_at` change on the order row.

        Raises:
            Unauthenticated: no actor
            Forbidden: actor is not staff of the order's restaurant
            InvalidTransition: unknown status, same status, or the order is
                already delivered/cancelled
            PersistenceFailure: the order or its audit row could not be written
        """
        OrderService._require_staff(order.restaurant, actor)

        previous_status = order.status
        if new_status not in Order.OrderStatus.values:
            raise InvalidTransition(
                previous_status,
                new_status,
                message=f"'{new_status}' is not a valid order status.",
            )

        if new_status not in OrderService.VALID_STATUS_TRANSITIONS.get(previous_status, []):
            raise InvalidTransition(previous_status, new_status)

        now = timezone.now()
        try:
            with transaction.atomic():
                updated = Order.objects.filter(pk=order.pk, status=previous_status).update(
                    status=new_status, updated_at=now
                )
                if not updated:
                    logger.warning(
                        f"Order {order.pk} changed status concurrently; {previous_status} -> {new_status} rejected"
                    )
                    raise InvalidTransition(
                        previous_status,
                        new_status,
                        message="The order was updated by someone else. Reload and try again.",
                    )
                OrderStatusChange.objects.create(
                    order=order,
                    from_status=previous_status,
                    to_status=new_status,
                    changed_by=actor,
                    created_at=now,
                )
        except DatabaseError as exc:
            logger.error(
                f"Failed to move order {order.pk} {previous_status} -> {new_status}: "
                f"{type(exc).__name__}: {exc}"
            )
            raise PersistenceFailure(f"Could not update order {order.pk}.") from exc

        order.status = new_status
        order.updated_at = now
        logger.info(f"Order {order.pk} moved {previous_status} -> {new_status} by user {actor.pk}")
        return order

    @staticmethod
    def update_order_status(order_id, restaurant_id, new_status: str, actor) -> Order:
        require_authenticated(actor, "manage orders")
        order = OrderService.get_order(order_id, restaurant_id)
        return OrderService.update_status(order, new_status, actor)

    @staticmethod
    def cancel_order(order: Order, actor) -> Order:
        return OrderService.update_status(order, Order.OrderStatus.CANCELLED, actor)
