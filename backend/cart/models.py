import uuid
from django.conf import settings
from django.db import models

from promotions.resolver import PriceSnapshot


class Cart(models.Model):
    """
    A user's pending selection of catalog items.

    One cart per user. The row itself holds no money; it is the lock anchor
    that serialises concurrent adds from different sessions of the same user.

    Lifecycle:
    1. Created on first "Add to Cart"
    2. Items added/removed while the user shops (single restaurant only)
    3. Read at checkout and converted into an Order
    4. Emptied only after the order has been persisted
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="cart",
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-updated_at"]

    def __str__(self):
        return f"Cart for {self.user}"

    @property
    def restaurant_id(self):
        """Restaurant every item of this cart belongs to, or None when empty."""
        return self.items.values_list("restaurant_id", flat=True).first()

    def touch(self):
        self.save(update_fields=["updated_at"])


class CartItem(models.Model):
    """
    One catalog item in a cart, with the price frozen when it was first added.

    Repeated adds of the same item only grow `quantity`; the snapshot columns
    are never rewritten.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    cart = models.ForeignKey(Cart, on_delete=models.CASCADE, related_name="items")
    catalog_item = models.ForeignKey(
        "catalog.CatalogItem",
        on_delete=models.CASCADE,
        related_name="cart_items",
    )
    restaurant = models.ForeignKey(
        "restaurants.Restaurant",
        on_delete=models.CASCADE,
        related_name="cart_items",
    )
    item_name = models.CharField(max_length=255)
    quantity = models.PositiveIntegerField(default=1)

    # Price snapshot (resolved once at add time)
    original_price = models.PositiveIntegerField()
    discounted_price = models.PositiveIntegerField()
    has_promotion = models.BooleanField(default=False)
    promotion_id = models.UUIDField(null=True, blank=True)
    promotion_title = models.CharField(max_length=255, blank=True, default="")
    promotion_discount = models.CharField(max_length=100, blank=True, default="")

    added_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["added_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["cart", "catalog_item"],
                name="unique_catalog_item_per_cart",
            ),
        ]
        indexes = [
            models.Index(fields=["cart", "restaurant"], name="cartitem_cart_rest_idx"),
        ]

    def __str__(self):
        return f"{self.quantity}x {self.item_name}"

    @property
    def unit_price(self) -> int:
        return self.discounted_price

    @property
    def total_price(self) -> int:
        return self.discounted_price * self.quantity

    @property
    def snapshot(self) -> PriceSnapshot:
        return PriceSnapshot(
            original_price=self.original_price,
            discounted_price=self.discounted_price,
            has_promotion=self.has_promotion,
            promotion_id=str(self.promotion_id) if self.promotion_id else None,
            promotion_title=self.promotion_title,
            promotion_discount=self.promotion_discount,
        )
