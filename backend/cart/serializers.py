"""
Cart serializers for API representation.

These serializers handle the conversion between Cart models and JSON
for the customer-facing API.
"""

from rest_framework import serializers

from .models import CartItem


class CartItemSerializer(serializers.ModelSerializer):
    """
    Serializer for cart items.
    Prices are the snapshot taken when the item was first added, not live catalog prices.
    """

    catalog_item_id = serializers.UUIDField(read_only=True)
    restaurant_id = serializers.UUIDField(read_only=True)
    unit_price = serializers.IntegerField(read_only=True)
    total_price = serializers.IntegerField(read_only=True)

    class Meta:
        model = CartItem
        fields = [
            'id',
            'catalog_item_id',
            'restaurant_id',
            'item_name',
            'quantity',
            'original_price',
            'discounted_price',
            'unit_price',
            'total_price',
            'has_promotion',
            'promotion_id',
            'promotion_title',
            'promotion_discount',
            'added_at',
            'updated_at'
        ]
        read_only_fields = fields


class CartSerializer(serializers.Serializer):
    """
    Serializer for the cart summary returned by CartService.get_cart_summary.
    """
    items = CartItemSerializer(many=True, read_only=True)
    item_count = serializers.IntegerField(read_only=True)
    restaurant_id = serializers.UUIDField(read_only=True, allow_null=True)
    subtotal = serializers.IntegerField(read_only=True)


class AddToCartSerializer(serializers.Serializer):
    """
    Serializer for adding items to cart.
    """
    catalog_item_id = serializers.UUIDField()
    restaurant_id = serializers.UUIDField()
    quantity = serializers.IntegerField(min_value=1, default=1)


class UpdateCartItemSerializer(serializers.Serializer):
    """
    Serializer for updating cart item quantity.
    A quantity of zero or less removes the item.
    """
    quantity = serializers.IntegerField()
