import uuid
from django.db import models
from django.db.models import Q
from django.utils import timezone


class PromotionQuerySet(models.QuerySet):
    def effective(self, at=None):
        """Active promotions that have not expired at `at` (defaults to now)."""
        at = at or timezone.now()
        return self.filter(is_active=True).filter(
            Q(expires_at__isnull=True) | Q(expires_at__gt=at)
        )


class Promotion(models.Model):
    """
    A restaurant promotion.

    `discount` is a display label such as "15% OFF" or "2x1". Only labels with
    a numeric percentage change the charged price; any other label is shown
    to the customer but discounts nothing.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    restaurant = models.ForeignKey(
        "restaurants.Restaurant",
        on_delete=models.CASCADE,
        related_name="promotions",
    )
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    discount = models.CharField(
        max_length=100,
        help_text='Discount label, e.g. "15% OFF". The number before % is the percentage.',
    )

    # Empty = applies to every item of the restaurant
    applicable_items = models.ManyToManyField(
        "catalog.CatalogItem",
        blank=True,
        related_name="promotions",
    )

    is_active = models.BooleanField(default=True)
    expires_at = models.DateTimeField(
        null=True, blank=True, help_text="The promotion stops applying at this moment."
    )
    min_order_amount = models.PositiveIntegerField(
        null=True,
        blank=True,
        help_text="Minimum order amount advertised with the promotion.",
    )
    delivery_time = models.CharField(
        max_length=50,
        blank=True,
        default="",
        help_text='Delivery time advertised with the promotion, e.g. "20-30 min".',
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = PromotionQuerySet.as_manager()

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(
                fields=["restaurant", "is_active", "expires_at"],
                name="promo_rest_active_idx",
            ),
        ]

    def __str__(self):
        return f"{self.title} ({self.discount})"

    def is_effective(self, at=None) -> bool:
        at = at or timezone.now()
        if not self.is_active:
            return False
        return self.expires_at is None or self.expires_at > at
