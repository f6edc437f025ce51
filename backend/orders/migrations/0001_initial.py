import uuid
import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


STATUS_CHOICES = [
    ("pending", "Pending"),
    ("confirmed", "Confirmed"),
    ("preparing", "Preparing"),
    ("ready", "Ready"),
    ("delivering", "Delivering"),
    ("delivered", "Delivered"),
    ("cancelled", "Cancelled"),
]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("restaurants", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Order",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4, editable=False, primary_key=True, serialize=False
                    ),
                ),
                (
                    "status",
                    models.CharField(choices=STATUS_CHOICES, default="pending", max_length=20),
                ),
                ("customer_name", models.CharField(max_length=255)),
                ("customer_phone", models.CharField(blank=True, default="", max_length=20)),
                ("restaurant_name", models.CharField(max_length=255)),
                ("delivery_address", models.TextField()),
                (
                    "payment_method",
                    models.CharField(
                        choices=[("Efectivo", "Cash"), ("Tarjeta", "Card"), ("Nequi", "Nequi")],
                        default="Efectivo",
                        max_length=20,
                    ),
                ),
                (
                    "delivery_tier",
                    models.CharField(
                        choices=[("standard", "Standard"), ("express", "Express")],
                        default="standard",
                        max_length=10,
                    ),
                ),
                (
                    "delivery_time",
                    models.CharField(
                        help_text="Estimated delivery window shown to the customer, e.g. '30-45 min'.",
                        max_length=50,
                    ),
                ),
                ("notes", models.TextField(blank=True, default="")),
                ("subtotal", models.PositiveIntegerField()),
                ("delivery_fee", models.PositiveIntegerField()),
                ("tip", models.PositiveIntegerField(default=0)),
                (
                    "total",
                    models.PositiveIntegerField(
                        help_text="subtotal + delivery_fee + tip at checkout. Never recomputed."
                    ),
                ),
                (
                    "created_at",
                    models.DateTimeField(default=django.utils.timezone.now, editable=False),
                ),
                (
                    "updated_at",
                    models.DateTimeField(default=django.utils.timezone.now, editable=False),
                ),
                (
                    "restaurant",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="orders",
                        to="restaurants.restaurant",
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="orders",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "Order",
                "verbose_name_plural": "Orders",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["user", "-created_at"], name="order_user_created_idx"),
                    models.Index(fields=["restaurant", "status"], name="order_rest_stat_idx"),
                    models.Index(
                        fields=["restaurant", "-created_at"], name="order_rest_created_idx"
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="OrderItem",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
                    ),
                ),
                ("position", models.PositiveIntegerField(default=0)),
                ("catalog_item_id", models.UUIDField(db_index=True)),
                ("item_name", models.CharField(max_length=255)),
                ("quantity", models.PositiveIntegerField(default=1)),
                (
                    "unit_price",
                    models.PositiveIntegerField(
                        help_text="Price per unit at the time of sale, promotion already applied."
                    ),
                ),
                (
                    "original_price",
                    models.PositiveIntegerField(
                        help_text="Catalog price at the time of sale, before any promotion."
                    ),
                ),
                ("has_promotion", models.BooleanField(default=False)),
                ("promotion_id", models.UUIDField(blank=True, null=True)),
                ("promotion_title", models.CharField(blank=True, default="", max_length=255)),
                (
                    "promotion_discount",
                    models.CharField(blank=True, default="", max_length=100),
                ),
                (
                    "order",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="items",
                        to="orders.order",
                    ),
                ),
            ],
            options={
                "verbose_name": "Order Item",
                "verbose_name_plural": "Order Items",
                "ordering": ["position"],
            },
        ),
        migrations.CreateModel(
            name="OrderStatusChange",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
                    ),
                ),
                (
                    "from_status",
                    models.CharField(
                        blank=True, choices=STATUS_CHOICES, default="", max_length=20
                    ),
                ),
                ("to_status", models.CharField(choices=STATUS_CHOICES, max_length=20)),
                (
                    "created_at",
                    models.DateTimeField(default=django.utils.timezone.now, editable=False),
                ),
                (
                    "changed_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="order_status_changes",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "order",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="status_changes",
                        to="orders.order",
                    ),
                ),
            ],
            options={
                "ordering": ["created_at", "id"],
                "indexes": [
                    models.Index(
                        fields=["order", "created_at"], name="status_change_order_idx"
                    )
                ],
            },
        ),
    ]
