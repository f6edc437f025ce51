import logging

from django.core.exceptions import ValidationError

from delivery_core.exceptions import CatalogItemNotFound, ItemUnavailable
from .models import CatalogItem

logger = logging.getLogger(__name__)


class CatalogService:
    """Read-only access to a restaurant's catalog."""

    @staticmethod
    def get_item(item_id, restaurant_id, require_available: bool = True) -> CatalogItem:
        """
        Fetch a catalog item scoped to its restaurant.

        Raises:
            CatalogItemNotFound: no such item for this restaurant
            ItemUnavailable: the item exists but is switched off
        """
        try:
            item = CatalogItem.objects.select_related("restaurant").get(
                id=item_id, restaurant_id=restaurant_id
            )
        except (CatalogItem.DoesNotExist, ValidationError, ValueError):
            raise CatalogItemNotFound(
                f"Catalog item {item_id} not found for restaurant {restaurant_id}."
            )

        if require_available and not item.is_available:
            logger.info(f"Catalog item {item.id} requested while unavailable")
            raise ItemUnavailable(f"'{item.name}' is currently unavailable.")

        return item

    @staticmethod
    def list_available_items(restaurant_id):
        return CatalogItem.objects.filter(restaurant_id=restaurant_id, is_available=True)
