"""
Shared test fixtures for all backend tests.

This module provides reusable pytest fixtures for common test objects
like users, restaurants, catalog items, promotions and carts.
"""
import pytest
from datetime import timedelta
from django.utils import timezone

from users.models import User
from restaurants.models import Restaurant
from catalog.models import CatalogItem
from promotions.models import Promotion


# ============================================================================
# USER FIXTURES
# ============================================================================

@pytest.fixture
def customer(db):
    """Create a customer with a saved delivery address"""
    return User.objects.create_user(
        email='ana@example.com',
        password='password123',
        first_name='Ana',
        last_name='Gomez',
        phone_number='3001234567',
        address='Calle 10 # 5-20',
    )


@pytest.fixture
def other_customer(db):
    """Create a second customer"""
    return User.objects.create_user(
        email='luis@example.com',
        password='password123',
        first_name='Luis',
    )


@pytest.fixture
def restaurant_admin(db, restaurant_a):
    """Create an admin who is staff of restaurant A"""
    user = User.objects.create_user(
        email='admin@pizza.com',
        password='password123',
        first_name='Marta',
        role=User.Role.ADMIN,
    )
    restaurant_a.staff.add(user)
    return user


@pytest.fixture
def other_restaurant_admin(db, restaurant_b):
    """Create an admin who is staff of restaurant B only"""
    user = User.objects.create_user(
        email='admin@burger.com',
        password='password123',
        role=User.Role.ADMIN,
    )
    restaurant_b.staff.add(user)
    return user


# ============================================================================
# RESTAURANT FIXTURES
# ============================================================================

@pytest.fixture
def restaurant_a(db):
    """Create test restaurant A (Pizza Place)"""
    return Restaurant.objects.create(name='Pizza Place', slug='pizza-place')


@pytest.fixture
def restaurant_b(db):
    """Create test restaurant B (Burger Joint)"""
    return Restaurant.objects.create(name='Burger Joint', slug='burger-joint')


# ============================================================================
# CATALOG FIXTURES
# ============================================================================

@pytest.fixture
def pizza(restaurant_a):
    """Pepperoni pizza at restaurant A (20000)"""
    return CatalogItem.objects.create(
        restaurant=restaurant_a, name='Pepperoni Pizza', price=20000, category='Pizzas'
    )


@pytest.fixture
def lasagna(restaurant_a):
    """Lasagna at restaurant A (10000)"""
    return CatalogItem.objects.create(
        restaurant=restaurant_a, name='Lasagna', price=10000, category='Pastas'
    )


@pytest.fixture
def unavailable_item(restaurant_a):
    return CatalogItem.objects.create(
        restaurant=restaurant_a, name='Calzone', price=15000, is_available=False
    )


@pytest.fixture
def burger(restaurant_b):
    """Cheeseburger at restaurant B (18000)"""
    return CatalogItem.objects.create(
        restaurant=restaurant_b, name='Cheeseburger', price=18000, category='Burgers'
    )


# ============================================================================
# PROMOTION FIXTURES
# ============================================================================

@pytest.fixture
def pizza_promotion(restaurant_a, pizza):
    """15% off the pepperoni pizza (20000 -> 17000)"""
    promotion = Promotion.objects.create(
        restaurant=restaurant_a,
        title='Pizza Tuesday',
        discount='15% OFF',
        expires_at=timezone.now() + timedelta(days=7),
    )
    promotion.applicable_items.add(pizza)
    return promotion


@pytest.fixture
def expired_promotion(restaurant_a):
    """Restaurant-wide 50% that expired yesterday"""
    return Promotion.objects.create(
        restaurant=restaurant_a,
        title='Old Deal',
        discount='50% OFF',
        expires_at=timezone.now() - timedelta(days=1),
    )


# ============================================================================
# CART FIXTURES
# ============================================================================

@pytest.fixture
def filled_cart(customer, pizza, lasagna, pizza_promotion):
    """
    Customer cart for the worked checkout example:
    1x pizza at 17000 (15% promotion) + 1x lasagna at 10000 = 27000
    """
    from cart.services import CartService

    CartService.add_to_cart(customer, pizza.id, pizza.restaurant_id, 1)
    CartService.add_to_cart(customer, lasagna.id, lasagna.restaurant_id, 1)
    return CartService.list_items(customer)


# ============================================================================
# ORDER FIXTURES
# ============================================================================

@pytest.fixture
def pending_order(customer, filled_cart):
    """A freshly checked-out order at restaurant A"""
    from orders.services import CheckoutService

    return CheckoutService.checkout(
        customer,
        delivery_address='Calle 10 # 5-20',
        payment_method='Efectivo',
        delivery_tier='standard',
        tip_selection=0,
    )
