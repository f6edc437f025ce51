import uuid
from django.db import models
from django.conf import settings
from django.utils.translation import gettext_lazy as _
from django.utils import timezone


class Order(models.Model):
    # --- Status Fields ---
    class OrderStatus(models.TextChoices):
        PENDING = "pending", _("Pending")  # Placed, waiting for the restaurant
        CONFIRMED = "confirmed", _("Confirmed")
        PREPARING = "preparing", _("Preparing")
        READY = "ready", _("Ready")
        DELIVERING = "delivering", _("Delivering")
        DELIVERED = "delivered", _("Delivered")  # Terminal
        CANCELLED = "cancelled", _("Cancelled")  # Terminal

    class PaymentMethod(models.TextChoices):
        CASH = "Efectivo", _("Cash")
        CARD = "Tarjeta", _("Card")
        NEQUI = "Nequi", _("Nequi")

    class DeliveryTier(models.TextChoices):
        STANDARD = "standard", _("Standard")
        EXPRESS = "express", _("Express")

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    status = models.CharField(
        max_length=20, choices=OrderStatus.choices, default=OrderStatus.PENDING
    )

    # --- Relationships ---
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="orders",
    )
    restaurant = models.ForeignKey(
        "restaurants.Restaurant",
        on_delete=models.PROTECT,
        related_name="orders",
    )

    # --- Denormalised display fields (copied at checkout) ---
    customer_name = models.CharField(max_length=255)
    customer_phone = models.CharField(max_length=20, blank=True, default="")
    restaurant_name = models.CharField(max_length=255)

    # --- Delivery & payment ---
    delivery_address = models.TextField()
    payment_method = models.CharField(
        max_length=20, choices=PaymentMethod.choices, default=PaymentMethod.CASH
    )
    delivery_tier = models.CharField(
        max_length=10, choices=DeliveryTier.choices, default=DeliveryTier.STANDARD
    )
    delivery_time = models.CharField(
        max_length=50,
        help_text=_("Estimated delivery window shown to the customer, e.g. '30-45 min'."),
    )
    notes = models.TextField(blank=True, default="")

    # --- Financial Fields (whole currency units, stored once at checkout) ---
    subtotal = models.PositiveIntegerField()
    delivery_fee = models.PositiveIntegerField()
    tip = models.PositiveIntegerField(default=0)
    total = models.PositiveIntegerField(
        help_text=_("subtotal + delivery_fee + tip at checkout. Never recomputed."),
    )

    created_at = models.DateTimeField(default=timezone.now, editable=False)
    updated_at = models.DateTimeField(default=timezone.now, editable=False)

    class Meta:
        # Newest orders first
        ordering = ["-created_at"]
        verbose_name = _("Order")
        verbose_name_plural = _("Orders")
        indexes = [
            models.Index(fields=["user", "-created_at"], name="order_user_created_idx"),
            models.Index(fields=["restaurant", "status"], name="order_rest_stat_idx"),
            models.Index(
                fields=["restaurant", "-created_at"], name="order_rest_created_idx"
            ),
        ]

    def __str__(self):
        return f"Order {self.pk} ({self.restaurant_name}) - {self.status}"

    @property
    def is_terminal(self):
        return self.status in (self.OrderStatus.DELIVERED, self.OrderStatus.CANCELLED)

    @property
    def item_count(self):
        return sum(item.quantity for item in self.items.all())


class OrderItem(models.Model):
    """
    A frozen line of an order.

    Price and promotion columns are copied from the cart snapshot and never
    change afterwards. `catalog_item_id` is a plain value so the line survives
    the catalog item being deleted.
    """

    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name="items")
    position = models.PositiveIntegerField(default=0)
    catalog_item_id = models.UUIDField(db_index=True)
    item_name = models.CharField(max_length=255)
    quantity = models.PositiveIntegerField(default=1)

    # Price snapshot
    unit_price = models.PositiveIntegerField(
        help_text=_("Price per unit at the time of sale, promotion already applied."),
    )
    original_price = models.PositiveIntegerField(
        help_text=_("Catalog price at the time of sale, before any promotion."),
    )
    has_promotion = models.BooleanField(default=False)
    promotion_id = models.UUIDField(null=True, blank=True)
    promotion_title = models.CharField(max_length=255, blank=True, default="")
    promotion_discount = models.CharField(max_length=100, blank=True, default="")

    class Meta:
        verbose_name = _("Order Item")
        verbose_name_plural = _("Order Items")
        ordering = ["position"]

    def __str__(self):
        return f"{self.quantity} of {self.item_name} in Order {self.order_id}"

    @property
    def total_price(self):
        return self.quantity * self.unit_price


class OrderStatusChange(models.Model):
    """Audit trail of status changes. One row at creation, one per transition."""

    order = models.ForeignKey(
        Order, on_delete=models.CASCADE, related_name="status_changes"
    )
    from_status = models.CharField(
        max_length=20, choices=Order.OrderStatus.choices, blank=True, default=""
    )
    to_status = models.CharField(max_length=20, choices=Order.OrderStatus.choices)
    changed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="order_status_changes",
    )
    created_at = models.DateTimeField(default=timezone.now, editable=False)

    class Meta:
        ordering = ["created_at", "id"]
        indexes = [
            models.Index(fields=["order", "created_at"], name="status_change_order_idx"),
        ]

    def __str__(self):
        return f"{self.order_id}: {self.from_status or '-'} -> {self.to_status}"
