"""
Orders views package - modular view layer with mixins.
"""

from .order_viewset import OrderViewSet
from .restaurant_order_viewset import RestaurantOrderViewSet

__all__ = [
    'OrderViewSet',
    'RestaurantOrderViewSet',
]
