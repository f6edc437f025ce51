import uuid
import pytest

from catalog.services import CatalogService
from delivery_core.exceptions import CatalogItemNotFound, ItemUnavailable


@pytest.mark.django_db
class TestCatalogService:
    """Catalog lookups used when adding to the cart"""

    def test_get_item_scoped_to_restaurant(self, pizza, restaurant_a):
        item = CatalogService.get_item(pizza.id, restaurant_a.id)

        assert item == pizza
        assert item.restaurant == restaurant_a

    def test_item_of_another_restaurant_is_not_found(self, pizza, restaurant_b):
        """
        Security Impact: an item id cannot be used to order from another restaurant
        """
        with pytest.raises(CatalogItemNotFound):
            CatalogService.get_item(pizza.id, restaurant_b.id)

    def test_unknown_or_malformed_id_is_not_found(self, restaurant_a):
        with pytest.raises(CatalogItemNotFound):
            CatalogService.get_item(uuid.uuid4(), restaurant_a.id)

        with pytest.raises(CatalogItemNotFound):
            CatalogService.get_item("not-a-uuid", restaurant_a.id)

    def test_unavailable_item_is_rejected(self, unavailable_item, restaurant_a):
        with pytest.raises(ItemUnavailable):
            CatalogService.get_item(unavailable_item.id, restaurant_a.id)

        item = CatalogService.get_item(
            unavailable_item.id, restaurant_a.id, require_available=False
        )
        assert item == unavailable_item

    def test_list_available_items(self, restaurant_a, pizza, lasagna, unavailable_item):
        items = list(CatalogService.list_available_items(restaurant_a.id))

        assert items == [lasagna, pizza]
