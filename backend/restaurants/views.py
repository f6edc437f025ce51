from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from catalog.serializers import MenuItemSerializer
from catalog.services import CatalogService
from promotions.resolver import PromotionResolver
from promotions.services import PromotionDirectory

from .models import Restaurant
from .serializers import RestaurantSerializer


class RestaurantViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Active restaurants and their menus.

    GET /api/restaurants/
    GET /api/restaurants/{id}/
    GET /api/restaurants/{id}/menu/ - available items priced with current promotions
    """

    queryset = Restaurant.objects.filter(is_active=True)
    serializer_class = RestaurantSerializer
    permission_classes = [IsAuthenticated]

    @action(detail=True, methods=["get"], url_path="menu")
    def menu(self, request, pk=None):
        restaurant = self.get_object()
        promotions = PromotionDirectory.get_effective_promotions(restaurant.pk)
        entries = [
            {"item": item, "pricing": PromotionResolver.resolve(item, promotions)}
            for item in CatalogService.list_available_items(restaurant.pk)
        ]
        return Response(MenuItemSerializer(entries, many=True).data)
