from django.contrib import admin
from .models import Promotion


@admin.register(Promotion)
class PromotionAdmin(admin.ModelAdmin):
    """
    Admin interface for managing promotions.
    """

    list_display = (
        "title",
        "restaurant",
        "discount",
        "is_active",
        "expires_at",
        "created_at",
    )
    list_filter = ("restaurant", "is_active")
    search_fields = ("title", "discount")
    ordering = ("-created_at",)

    fieldsets = (
        (None, {"fields": ("restaurant", "title", "description", "is_active")}),
        ("Rule", {"fields": ("discount", "min_order_amount", "delivery_time")}),
        ("Applicability", {"fields": ("applicable_items",)}),
        ("Timeframe", {"fields": ("expires_at",)}),
    )

    filter_horizontal = ("applicable_items",)

    actions = ["deactivate_selected"]

    def deactivate_selected(self, request, queryset):
        count = queryset.filter(is_active=True).update(is_active=False)
        self.message_user(request, f"{count} promotion(s) have been deactivated.")
    deactivate_selected.short_description = "Deactivate selected promotions"

    def get_queryset(self, request):
        return super().get_queryset(request).select_related("restaurant").prefetch_related(
            "applicable_items"
        )
