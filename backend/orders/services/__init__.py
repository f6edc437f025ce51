"""
Orders services package.

- OrderFactory / CheckoutService: cart -> priced, persisted order
- OrderService: order lookups and the status lifecycle
"""

# Checkout
from .checkout_service import CheckoutService, OrderFactory

# Lifecycle
from .order_service import (
    STAFF_SELECTABLE_STATUSES,
    TERMINAL_STATUSES,
    OrderService,
)

__all__ = [
    # Checkout
    'CheckoutService',
    'OrderFactory',
    # Lifecycle
    'OrderService',
    'STAFF_SELECTABLE_STATUSES',
    'TERMINAL_STATUSES',
]
