import uuid
from django.core.validators import MinValueValidator
from django.db import models


class CatalogItem(models.Model):
    """
    A dish sold by a restaurant.

    `price` is an integer amount in the smallest display unit (whole pesos);
    the engine never stores fractional money.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    restaurant = models.ForeignKey(
        "restaurants.Restaurant",
        on_delete=models.CASCADE,
        related_name="catalog_items",
    )
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    category = models.CharField(max_length=100, blank=True)
    price = models.PositiveIntegerField(validators=[MinValueValidator(0)])
    is_available = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]
        indexes = [
            models.Index(fields=["restaurant", "is_available"], name="catalog_rest_avail_idx"),
        ]

    def __str__(self):
        return f"{self.name} ({self.price})"
