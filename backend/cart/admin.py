from django.contrib import admin

from .models import Cart, CartItem


class CartItemInline(admin.TabularInline):
    model = CartItem
    extra = 0
    readonly_fields = (
        "catalog_item",
        "item_name",
        "quantity",
        "original_price",
        "discounted_price",
        "promotion_title",
        "added_at",
    )
    fields = readonly_fields

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Cart)
class CartAdmin(admin.ModelAdmin):
    list_display = ("user", "updated_at", "created_at")
    search_fields = ("user__email",)
    readonly_fields = ("user", "created_at", "updated_at")
    inlines = [CartItemInline]
