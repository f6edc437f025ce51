import django_filters
from .models import Order


class OrderFilter(django_filters.FilterSet):
    """
    Filters for a restaurant's order board.

    ?status=preparing
    ?created_at__gte=2025-01-01T00:00:00Z&created_at__lte=...
    """

    status = django_filters.ChoiceFilter(choices=Order.OrderStatus.choices)
    delivery_tier = django_filters.ChoiceFilter(choices=Order.DeliveryTier.choices)
    created_at__gte = django_filters.DateTimeFilter(field_name='created_at', lookup_expr='gte')
    created_at__lte = django_filters.DateTimeFilter(field_name='created_at', lookup_expr='lte')

    class Meta:
        model = Order
        fields = ['status', 'delivery_tier']
