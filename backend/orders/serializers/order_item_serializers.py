from rest_framework import serializers
from orders.models import OrderItem


class OrderItemSerializer(serializers.ModelSerializer):
    total_price = serializers.IntegerField(read_only=True)

    class Meta:
        model = OrderItem
        fields = [
            "catalog_item_id",
            "item_name",
            "quantity",
            "unit_price",
            "original_price",
            "total_price",
            "has_promotion",
            "promotion_id",
            "promotion_title",
            "promotion_discount",
        ]
        read_only_fields = fields
