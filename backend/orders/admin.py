from django.contrib import admin
from .models import Order, OrderItem, OrderStatusChange


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    readonly_fields = (
        "item_name",
        "quantity",
        "unit_price",
        "original_price",
        "promotion_title",
        "get_line_item_total",
    )
    fields = readonly_fields
    can_delete = False

    def get_line_item_total(self, obj):
        return f"${obj.total_price:,}"

    get_line_item_total.short_description = "Line Item Total"

    def has_add_permission(self, request, obj=None):
        return False


class OrderStatusChangeInline(admin.TabularInline):
    model = OrderStatusChange
    extra = 0
    readonly_fields = ("from_status", "to_status", "changed_by", "created_at")
    can_delete = False

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    """
    Admin configuration for the Order model.

    Orders are read-only here: money columns are frozen at checkout and
    status changes go through OrderService so they are authorised and audited.
    """

    list_display = (
        "id",
        "restaurant_name",
        "customer_name",
        "status",
        "delivery_tier",
        "payment_method",
        "total",
        "created_at",
    )
    search_fields = ("id", "customer_name", "user__email", "restaurant_name")
    list_filter = ("status", "delivery_tier", "payment_method", "restaurant", "created_at")
    ordering = ("-created_at",)
    inlines = [OrderItemInline, OrderStatusChangeInline]

    def has_change_permission(self, request, obj=None):
        return False

    def get_queryset(self, request):
        return super().get_queryset(request).select_related("restaurant", "user")
