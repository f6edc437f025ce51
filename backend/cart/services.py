"""
Cart service layer for managing shopping cart operations.

This service handles:
- Cart creation and retrieval (authenticated users only)
- Adding items with a price snapshot resolved at add time
- Updating/removing items and clearing the cart
- Enforcing the single-restaurant rule

Converting the cart into an order lives in orders.services.CheckoutService.
"""

from django.core.exceptions import ValidationError
from django.db import DatabaseError, IntegrityError, transaction
from django.db.models import F
from django.utils import timezone
from typing import List
import logging

from catalog.services import CatalogService
from delivery_core.exceptions import (
    CatalogItemNotFound,
    CrossRestaurantCart,
    InvalidQuantity,
    PersistenceFailure,
)
from promotions.resolver import PriceSnapshot, PromotionResolver
from promotions.services import PromotionDirectory
from users.services import require_authenticated
from .models import Cart, CartItem

logger = logging.getLogger(__name__)


def _validate_quantity(quantity) -> int:
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
        raise InvalidQuantity(f"Quantity must be a positive whole number, got {quantity!r}.")
    return quantity


class CartService:
    """Service for managing cart operations."""

    @staticmethod
    def get_or_create_cart(user) -> Cart:
        require_authenticated(user, "use a cart")
        cart, created = Cart.objects.get_or_create(user=user)
        if created:
            logger.info(f"Created new cart {cart.id} for user {user.pk}")
        return cart

    @staticmethod
    def lock_cart(user) -> Cart:
        """
        Lock the user's cart row until the surrounding transaction ends.

        Adds, quantity changes and checkout all take this lock, so checkout
        reads and clears a cart no other session is changing.
        """
        cart = CartService.get_or_create_cart(user)
        return Cart.objects.select_for_update().get(pk=cart.pk)

    @staticmethod
    def add_item(user, catalog_item, restaurant, quantity: int, snapshot: PriceSnapshot) -> CartItem:
        """
        Store `quantity` of `catalog_item` in the user's cart.

        If the item is already in the cart only its quantity grows; the price
        snapshot taken on the first add is kept. The cart row is locked for
        the duration so concurrent adds for the same user are serialised.

        Raises:
            Unauthenticated: no current user
            InvalidQuantity: quantity is not a positive integer
            CrossRestaurantCart: cart already holds items of another restaurant
            PersistenceFailure: the cart could not be read or written
        """
        require_authenticated(user, "add items to a cart")
        _validate_quantity(quantity)

        if catalog_item.restaurant_id != restaurant.pk:
            raise CatalogItemNotFound(
                f"Catalog item {catalog_item.pk} does not belong to restaurant {restaurant.pk}."
            )

        try:
            with transaction.atomic():
                return CartService._store_item(user, catalog_item, restaurant, quantity, snapshot)
        except DatabaseError as exc:
            logger.error(
                f"Failed to add item {catalog_item.pk} to cart of user {user.pk}: "
                f"{type(exc).__name__}: {exc}"
            )
            raise PersistenceFailure(f"Could not update cart of user {user.pk}.") from exc

    @staticmethod
    def _store_item(user, catalog_item, restaurant, quantity: int, snapshot: PriceSnapshot) -> CartItem:
        cart = CartService.lock_cart(user)

        cart_restaurant_id = cart.restaurant_id
        if cart_restaurant_id is not None and cart_restaurant_id != restaurant.pk:
            logger.info(
                f"User {user.pk} tried to add item from restaurant {restaurant.pk} "
                f"to a cart holding restaurant {cart_restaurant_id}"
            )
            raise CrossRestaurantCart(cart_restaurant_id, restaurant.pk)

        if not CartService._increment(cart, catalog_item, quantity):
            try:
                with transaction.atomic():
                    CartItem.objects.create(
                        cart=cart,
                        catalog_item=catalog_item,
                        restaurant=restaurant,
                        item_name=catalog_item.name,
                        quantity=quantity,
                        original_price=snapshot.original_price,
                        discounted_price=snapshot.discounted_price,
                        has_promotion=snapshot.has_promotion,
                        promotion_id=snapshot.promotion_id,
                        promotion_title=snapshot.promotion_title,
                        promotion_discount=snapshot.promotion_discount,
                    )
            except IntegrityError:
                # Lost the insert race (no row lock on some backends); the row exists now.
                CartService._increment(cart, catalog_item, quantity)

        cart.touch()
        return CartItem.objects.get(cart=cart, catalog_item=catalog_item)

    @staticmethod
    def _increment(cart, catalog_item, quantity: int) -> bool:
        updated = CartItem.objects.filter(cart=cart, catalog_item=catalog_item).update(
            quantity=F("quantity") + quantity,
            updated_at=timezone.now(),
        )
        return updated > 0

    @staticmethod
    def add_to_cart(user, catalog_item_id, restaurant_id, quantity: int = 1) -> CartItem:
        """
        Customer-facing add: validates the item, resolves its promotion and
        stores the resulting snapshot.
        """
        require_authenticated(user, "add items to a cart")
        _validate_quantity(quantity)

        catalog_item = CatalogService.get_item(catalog_item_id, restaurant_id)
        promotions = PromotionDirectory.get_effective_promotions(catalog_item.restaurant_id)
        snapshot = PromotionResolver.resolve(catalog_item, promotions)

        cart_item = CartService.add_item(
            user, catalog_item, catalog_item.restaurant, quantity, snapshot
        )
        logger.info(
            f"Added {quantity}x {catalog_item.name} to cart of user {user.pk} "
            f"(now {cart_item.quantity})"
        )
        return cart_item

    @staticmethod
    def list_items(user) -> List[CartItem]:
        require_authenticated(user, "view a cart")
        try:
            return list(
                CartItem.objects.filter(cart__user=user)
                .select_related("catalog_item", "restaurant")
                .order_by("added_at")
            )
        except DatabaseError as exc:
            raise PersistenceFailure(f"Could not read cart of user {user.pk}.") from exc

    @staticmethod
    def get_cart(user) -> List[CartItem]:
        return CartService.list_items(user)

    @staticmethod
    def update_item_quantity(user, catalog_item_id, quantity: int):
        """
        Set an item's quantity. A quantity of zero or less removes the item.

        Returns the updated CartItem, or None when it was removed.
        """
        require_authenticated(user, "modify a cart")
        if isinstance(quantity, bool) or not isinstance(quantity, int):
            raise InvalidQuantity(f"Quantity must be a whole number, got {quantity!r}.")

        if quantity <= 0:
            CartService.remove_item(user, catalog_item_id)
            return None

        try:
            with transaction.atomic():
                cart = CartService.lock_cart(user)
                try:
                    cart_item = CartItem.objects.get(catalog_item_id=catalog_item_id, cart=cart)
                except (CartItem.DoesNotExist, ValidationError, ValueError):
                    raise CatalogItemNotFound(
                        f"Catalog item {catalog_item_id} is not in your cart."
                    )

                cart_item.quantity = quantity
                cart_item.save(update_fields=["quantity", "updated_at"])
                cart.touch()
        except DatabaseError as exc:
            raise PersistenceFailure(f"Could not update cart of user {user.pk}.") from exc
        return cart_item

    @staticmethod
    def remove_item(user, catalog_item_id) -> bool:
        require_authenticated(user, "modify a cart")
        try:
            deleted, _ = CartItem.objects.filter(
                catalog_item_id=catalog_item_id, cart__user=user
            ).delete()
        except (ValidationError, ValueError):
            deleted = 0
        except DatabaseError as exc:
            raise PersistenceFailure(f"Could not update cart of user {user.pk}.") from exc
        if deleted:
            logger.info(f"Removed catalog item {catalog_item_id} from cart for user {user.pk}")
        return bool(deleted)

    @staticmethod
    def clear(user) -> int:
        """Delete every item in the user's cart. Returns the number removed."""
        require_authenticated(user, "clear a cart")
        try:
            deleted, _ = CartItem.objects.filter(cart__user=user).delete()
        except DatabaseError as exc:
            raise PersistenceFailure(f"Could not clear cart of user {user.pk}.") from exc
        logger.info(f"Cleared {deleted} item(s) from cart of user {user.pk}")
        return deleted

    @staticmethod
    def remove_ordered_items(user, cart_items) -> int:
        """
        Delete exactly the cart rows that went into an order.

        Rows added after checkout read the cart are kept.
        """
        require_authenticated(user, "clear a cart")
        item_ids = [cart_item.pk for cart_item in cart_items]
        try:
            deleted, _ = CartItem.objects.filter(cart__user=user, pk__in=item_ids).delete()
        except DatabaseError as exc:
            raise PersistenceFailure(f"Could not clear cart of user {user.pk}.") from exc
        logger.info(f"Removed {deleted} ordered item(s) from cart of user {user.pk}")
        return deleted

    @staticmethod
    def get_cart_summary(user) -> dict:
        from orders.calculators import calculate_subtotal

        items = CartService.list_items(user)
        return {
            "items": items,
            "item_count": sum(item.quantity for item in items),
            "restaurant_id": items[0].restaurant_id if items else None,
            "subtotal": calculate_subtotal(items),
        }
