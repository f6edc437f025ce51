from django.db import DatabaseError, transaction
import logging

from cart.services import CartService
from delivery_core.exceptions import (
    CartClearAnomaly,
    EmptyCart,
    InvalidCheckout,
    PersistenceFailure,
)
from orders.calculators import (
    calculate_delivery_fee,
    calculate_subtotal,
    calculate_tip,
    calculate_total,
    delivery_time_label,
)
from orders.models import Order, OrderItem, OrderStatusChange
from users.services import require_authenticated

logger = logging.getLogger(__name__)


class OrderFactory:
    """Turns a user's cart items into a persisted, priced order."""

    @staticmethod
    def build_line_items(cart_items) -> list:
        """
        Unsaved OrderItems carrying each cart item's frozen snapshot.

        Prices come from the cart row only; promotions and catalog prices are
        never consulted again at this point.
        """
        return [
            OrderItem(
                position=position,
                catalog_item_id=cart_item.catalog_item_id,
                item_name=cart_item.item_name,
                quantity=cart_item.quantity,
                unit_price=cart_item.discounted_price,
                original_price=cart_item.original_price,
                has_promotion=cart_item.has_promotion,
                promotion_id=cart_item.promotion_id,
                promotion_title=cart_item.promotion_title,
                promotion_discount=cart_item.promotion_discount,
            )
            for position, cart_item in enumerate(cart_items)
        ]

    @staticmethod
    def create_order(
        user,
        cart_items,
        delivery_address: str,
        payment_method: str,
        delivery_tier: str,
        tip_selection,
        notes: str = "",
        custom_tip="",
    ) -> Order:
        """
        Create an Order from cart items (atomic transaction), then remove those
        items from the cart.

        Lifecycle:
        1. Validate inputs (nothing is written if any check fails)
        2. Copy each cart item's snapshot into an OrderItem
        3. Compute subtotal, delivery fee, tip and total once
        4. Persist Order + OrderItems + initial status row in one transaction
        5. Remove the ordered rows from the cart, only after step 4 succeeded;
           rows added since `cart_items` was read stay in the cart

        Raises:
            Unauthenticated: no current user
            EmptyCart: no cart items
            InvalidCheckout: blank address, mixed restaurants, unknown
                payment method, delivery tier or tip selection
            PersistenceFailure: the order could not be written; cart untouched
        """
        require_authenticated(user, "place an order")
        cart_items = list(cart_items)

        logger.info(
            f"[OrderFactory.create_order] Starting checkout for user {user.pk} "
            f"with {len(cart_items)} cart item(s)"
        )

        # Validation
        if not cart_items:
            logger.info(f"[OrderFactory.create_order] Cart of user {user.pk} is empty")
            raise EmptyCart()

        restaurant_ids = {cart_item.restaurant_id for cart_item in cart_items}
        if len(restaurant_ids) > 1:
            logger.error(
                f"[OrderFactory.create_order] Cart of user {user.pk} spans restaurants {restaurant_ids}"
            )
            raise InvalidCheckout("All items of an order must come from one restaurant.")

        delivery_address = (delivery_address or "").strip()
        if not delivery_address:
            raise InvalidCheckout("A delivery address is required.")

        if payment_method not in Order.PaymentMethod.values:
            raise InvalidCheckout(f"Unknown payment method: {payment_method!r}.")

        try:
            delivery_fee = calculate_delivery_fee(delivery_tier)
            delivery_time = delivery_time_label(delivery_tier)
            tip = calculate_tip(tip_selection, custom_tip)
        except ValueError as exc:
            raise InvalidCheckout(str(exc))

        line_items = OrderFactory.build_line_items(cart_items)
        subtotal = calculate_subtotal(line_items)
        total = calculate_total(subtotal, delivery_fee, tip)
        logger.info(
            f"[OrderFactory.create_order] Totals calculated - Subtotal: {subtotal}, "
            f"Delivery: {delivery_fee}, Tip: {tip}, Total: {total}"
        )

        restaurant = cart_items[0].restaurant
        try:
            with transaction.atomic():
                order = Order.objects.create(
                    user=user,
                    customer_name=user.display_name,
                    customer_phone=user.phone_number,
                    restaurant=restaurant,
                    restaurant_name=restaurant.name,
                    status=Order.OrderStatus.PENDING,
                    delivery_address=delivery_address,
                    payment_method=payment_method,
                    delivery_tier=delivery_tier,
                    delivery_time=delivery_time,
                    notes=(notes or "").strip(),
                    subtotal=subtotal,
                    delivery_fee=delivery_fee,
                    tip=tip,
                    total=total,
                )
                for line_item in line_items:
                    line_item.order = order
                OrderItem.objects.bulk_create(line_items)
                OrderStatusChange.objects.create(
                    order=order,
                    to_status=Order.OrderStatus.PENDING,
                    changed_by=user,
                )
        except DatabaseError as e:
            logger.error(
                f"[OrderFactory.create_order] Failed to persist order for user {user.pk}: "
                f"{type(e).__name__}: {e}",
                exc_info=True,
            )
            raise PersistenceFailure() from e

        logger.info(
            f"[OrderFactory.create_order] Order created successfully - ID: {order.id}, "
            f"Restaurant: {restaurant.pk}, Total: {total}"
        )

        OrderFactory._clear_cart(user, order, cart_items)
        return order

    @staticmethod
    def _clear_cart(user, order, cart_items):
        # Only the ordered rows go; the order is authoritative and a stale cart is tolerated.
        try:
            with transaction.atomic():
                CartService.remove_ordered_items(user, cart_items)
        except (DatabaseError, PersistenceFailure):
            anomaly = CartClearAnomaly(order.pk, user.pk)
            logger.exception(f"[OrderFactory.create_order] {anomaly.message}")


class CheckoutService:
    """Customer-facing checkout: reads the cart and hands it to OrderFactory."""

    @staticmethod
    def checkout(
        user,
        delivery_address: str,
        payment_method: str,
        delivery_tier: str,
        tip_selection,
        notes: str = "",
        custom_tip="",
    ) -> Order:
        """
        Check out the user's current cart.

        The cart row stays locked from reading the items until they are
        removed, so concurrent adds wait and a second checkout of the same
        cart finds it empty.
        """
        require_authenticated(user, "place an order")
        try:
            with transaction.atomic():
                CartService.lock_cart(user)
                cart_items = CartService.list_items(user)
                order = OrderFactory.create_order(
                    user,
                    cart_items,
                    delivery_address=delivery_address,
                    payment_method=payment_method,
                    delivery_tier=delivery_tier,
                    tip_selection=tip_selection,
                    notes=notes,
                    custom_tip=custom_tip,
                )
        except DatabaseError as exc:
            logger.error(
                f"[CheckoutService.checkout] Checkout of user {user.pk} failed: "
                f"{type(exc).__name__}: {exc}"
            )
            raise PersistenceFailure() from exc
        return order
