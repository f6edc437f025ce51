from rest_framework import serializers


class MenuItemSerializer(serializers.Serializer):
    """
    A catalog item as the customer sees it: the catalog price plus the price
    after the restaurant's current promotion, if any.

    Expects {"item": CatalogItem, "pricing": PriceSnapshot}.
    """

    id = serializers.UUIDField(source="item.id", read_only=True)
    name = serializers.CharField(source="item.name", read_only=True)
    description = serializers.CharField(source="item.description", read_only=True)
    category = serializers.CharField(source="item.category", read_only=True)
    original_price = serializers.IntegerField(source="pricing.original_price", read_only=True)
    discounted_price = serializers.IntegerField(source="pricing.discounted_price", read_only=True)
    has_promotion = serializers.BooleanField(source="pricing.has_promotion", read_only=True)
    promotion_title = serializers.CharField(source="pricing.promotion_title", read_only=True)
    promotion_discount = serializers.CharField(source="pricing.promotion_discount", read_only=True)
