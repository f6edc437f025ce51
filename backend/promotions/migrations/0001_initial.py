import uuid
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("catalog", "0001_initial"),
        ("restaurants", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Promotion",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4, editable=False, primary_key=True, serialize=False
                    ),
                ),
                ("title", models.CharField(max_length=255)),
                ("description", models.TextField(blank=True)),
                (
                    "discount",
                    models.CharField(
                        help_text='Discount label, e.g. "15% OFF". The number before % is the percentage.',
                        max_length=100,
                    ),
                ),
                ("is_active", models.BooleanField(default=True)),
                (
                    "expires_at",
                    models.DateTimeField(
                        blank=True,
                        help_text="The promotion stops applying at this moment.",
                        null=True,
                    ),
                ),
                (
                    "min_order_amount",
                    models.PositiveIntegerField(
                        blank=True,
                        help_text="Minimum order amount advertised with the promotion.",
                        null=True,
                    ),
                ),
                (
                    "delivery_time",
                    models.CharField(
                        blank=True,
                        default="",
                        help_text='Delivery time advertised with the promotion, e.g. "20-30 min".',
                        max_length=50,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "applicable_items",
                    models.ManyToManyField(
                        blank=True, related_name="promotions", to="catalog.catalogitem"
                    ),
                ),
                (
                    "restaurant",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="promotions",
                        to="restaurants.restaurant",
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(
                        fields=["restaurant", "is_active", "expires_at"],
                        name="promo_rest_active_idx",
                    )
                ],
            },
        ),
    ]
