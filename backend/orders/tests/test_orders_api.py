"""
Ordering API Integration Tests

Tests the complete request/response cycle for:
- Cart endpoints (add, update, remove, clear, checkout)
- Customer order history
- Restaurant order board with status filtering
- Staff status transitions and cancellation
- Menu pricing with promotions
- Error rendering ({"error", "code"}) for domain failures
"""
import pytest
from unittest import mock
from django.db import OperationalError
from rest_framework import status

from cart.models import CartItem
from orders.models import Order
from orders.services import OrderService


@pytest.mark.django_db
class TestCartAPI:
    """Customer cart endpoints under /api/cart/"""

    def test_cart_requires_authentication(self, api_client):
        response = api_client.get('/api/cart/')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_empty_cart(self, customer_client):
        response = customer_client.get('/api/cart/')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['items'] == []
        assert response.data['item_count'] == 0
        assert response.data['restaurant_id'] is None
        assert response.data['subtotal'] == 0

    def test_add_item_snapshots_promotion_price(self, customer_client, pizza, pizza_promotion):
        response = customer_client.post('/api/cart/add-item/', {
            'catalog_item_id': str(pizza.id),
            'restaurant_id': str(pizza.restaurant_id),
            'quantity': 2,
        }, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        item = response.data['items'][0]
        assert item['original_price'] == 20000
        assert item['discounted_price'] == 17000
        assert item['promotion_title'] == 'Pizza Tuesday'
        assert item['quantity'] == 2
        assert response.data['subtotal'] == 34000
        assert response.data['restaurant_id'] == str(pizza.restaurant_id)

    def test_add_item_from_another_restaurant_conflicts(self, customer_client, pizza, burger):
        """
        CRITICAL: A cart never mixes restaurants

        Business Impact: One order is dispatched by exactly one restaurant.
        """
        customer_client.post('/api/cart/add-item/', {
            'catalog_item_id': str(pizza.id),
            'restaurant_id': str(pizza.restaurant_id),
        }, format='json')

        response = customer_client.post('/api/cart/add-item/', {
            'catalog_item_id': str(burger.id),
            'restaurant_id': str(burger.restaurant_id),
        }, format='json')

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data['code'] == 'cross_restaurant_cart'
        assert CartItem.objects.filter(catalog_item=burger).count() == 0

    def test_add_item_rejects_zero_quantity(self, customer_client, pizza):
        response = customer_client.post('/api/cart/add-item/', {
            'catalog_item_id': str(pizza.id),
            'restaurant_id': str(pizza.restaurant_id),
            'quantity': 0,
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_add_unavailable_item(self, customer_client, unavailable_item):
        response = customer_client.post('/api/cart/add-item/', {
            'catalog_item_id': str(unavailable_item.id),
            'restaurant_id': str(unavailable_item.restaurant_id),
        }, format='json')

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data['code'] == 'item_unavailable'

    def test_update_and_remove_item(self, customer_client, filled_cart, lasagna):
        response = customer_client.patch(
            f'/api/cart/update-item/{lasagna.id}/', {'quantity': 3}, format='json'
        )
        assert response.status_code == status.HTTP_200_OK
        assert response.data['subtotal'] == 17000 + 30000

        response = customer_client.delete(f'/api/cart/remove-item/{lasagna.id}/')
        assert response.status_code == status.HTTP_200_OK
        assert response.data['item_count'] == 1

        response = customer_client.delete(f'/api/cart/remove-item/{lasagna.id}/')
        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['code'] == 'catalog_item_not_found'

    def test_clear(self, customer_client, filled_cart):
        response = customer_client.delete('/api/cart/clear/')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['items'] == []
        assert response.data['restaurant_id'] is None


@pytest.mark.django_db
class TestCheckoutAPI:
    """POST /api/cart/checkout/"""

    def test_checkout_creates_order(self, customer_client, filled_cart, customer, restaurant_a):
        """
        CRITICAL: Checkout totals match the worked example

        Business Impact: 27000 subtotal + 5000 express fee + 2000 tip = 34000
        """
        response = customer_client.post('/api/cart/checkout/', {
            'payment_method': 'Tarjeta',
            'delivery_tier': 'express',
            'tip_selection': '2000',
            'notes': 'Sin cebolla',
        }, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['restaurant_id'] == str(restaurant_a.id)

        order = Order.objects.get(pk=response.data['order_id'])
        assert order.total == 34000
        assert order.delivery_address == customer.address
        assert order.notes == 'Sin cebolla'
        assert CartItem.objects.filter(cart__user=customer).count() == 0

    def test_checkout_custom_tip(self, customer_client, filled_cart):
        response = customer_client.post('/api/cart/checkout/', {
            'delivery_address': 'Carrera 7 # 12-30',
            'tip_selection': 'custom',
            'custom_tip': '3500 pesos',
        }, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        order = Order.objects.get(pk=response.data['order_id'])
        assert order.tip == 3500
        assert order.total == 27000 + 3000 + 3500
        assert order.payment_method == 'Efectivo'

    def test_checkout_empty_cart(self, customer_client):
        response = customer_client.post('/api/cart/checkout/', {}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['code'] == 'empty_cart'

    def test_checkout_unknown_payment_method(self, customer_client, filled_cart):
        response = customer_client.post('/api/cart/checkout/', {
            'payment_method': 'Bitcoin',
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert Order.objects.count() == 0

    def test_checkout_requires_authentication(self, api_client):
        response = api_client.post('/api/cart/checkout/', {}, format='json')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestOrderHistoryAPI:
    """GET /api/orders/"""

    def test_lists_only_own_orders(self, customer_client, pending_order, other_customer):
        response = customer_client.get('/api/orders/')

        assert response.status_code == status.HTTP_200_OK
        assert [o['id'] for o in response.data] == [str(pending_order.id)]
        assert response.data[0]['item_count'] == 2

    def test_store_failure_is_service_unavailable(self, customer_client, pending_order):
        with mock.patch.object(
            OrderService, 'list_user_orders', side_effect=OperationalError('down')
        ):
            response = customer_client.get('/api/orders/')

        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
        assert response.data['code'] == 'persistence_failure'

    def test_order_detail(self, customer_client, pending_order):
        response = customer_client.get(f'/api/orders/{pending_order.id}/')

        assert response.status_code == status.HTTP_200_OK
        assert [i['item_name'] for i in response.data['items']] == ['Pepperoni Pizza', 'Lasagna']
        assert response.data['items'][0]['unit_price'] == 17000
        assert response.data['total'] == 30000


@pytest.mark.django_db
class TestRestaurantOrdersAPI:
    """Order board under /api/restaurants/{restaurant_pk}/orders/"""

    def test_staff_lists_orders_filtered_by_status(self, admin_client, pending_order, restaurant_a):
        url = f'/api/restaurants/{restaurant_a.id}/orders/'

        response = admin_client.get(url, {'status': 'pending'})
        assert response.status_code == status.HTTP_200_OK
        assert [o['id'] for o in response.data] == [str(pending_order.id)]

        response = admin_client.get(url, {'status': 'preparing'})
        assert response.data == []

    def test_customer_cannot_list_board(self, customer_client, pending_order, restaurant_a):
        response = customer_client.get(f'/api/restaurants/{restaurant_a.id}/orders/')

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data['code'] == 'forbidden'

    def test_owner_can_view_detail(self, customer_client, pending_order, restaurant_a):
        response = customer_client.get(
            f'/api/restaurants/{restaurant_a.id}/orders/{pending_order.id}/'
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['status'] == 'pending'

    def test_stranger_cannot_view_detail(self, api_client, other_customer, pending_order, restaurant_a):
        api_client.force_authenticate(user=other_customer)

        response = api_client.get(f'/api/restaurants/{restaurant_a.id}/orders/{pending_order.id}/')

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_order_of_another_restaurant_is_not_found(self, admin_client, pending_order, restaurant_b):
        response = admin_client.get(f'/api/restaurants/{restaurant_b.id}/orders/{pending_order.id}/')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['code'] == 'order_not_found'


@pytest.mark.django_db
class TestStatusActionsAPI:
    """update-status and cancel actions"""

    def url(self, order, action):
        return f'/api/restaurants/{order.restaurant_id}/orders/{order.id}/{action}/'

    def test_staff_updates_status(self, admin_client, pending_order):
        response = admin_client.post(
            self.url(pending_order, 'update-status'), {'status': 'preparing'}, format='json'
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['status'] == 'preparing'
        pending_order.refresh_from_db()
        assert pending_order.status == 'preparing'

    def test_customer_cannot_update_status(self, customer_client, pending_order):
        """
        CRITICAL: Customers cannot move their own orders

        Business Impact: Prevents a customer from marking an order delivered.
        """
        response = customer_client.post(
            self.url(pending_order, 'update-status'), {'status': 'delivered'}, format='json'
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        pending_order.refresh_from_db()
        assert pending_order.status == 'pending'

    def test_same_status_conflicts(self, admin_client, pending_order):
        response = admin_client.post(
            self.url(pending_order, 'update-status'), {'status': 'pending'}, format='json'
        )

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data['code'] == 'invalid_transition'

    def test_cancelled_is_not_offered_by_update_status(self, admin_client, pending_order):
        response = admin_client.post(
            self.url(pending_order, 'update-status'), {'status': 'cancelled'}, format='json'
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_cancel_then_update_conflicts(self, admin_client, pending_order):
        response = admin_client.post(self.url(pending_order, 'cancel'))
        assert response.status_code == status.HTTP_200_OK
        assert response.data['status'] == 'cancelled'
        assert response.data['is_terminal'] is True

        response = admin_client.post(
            self.url(pending_order, 'update-status'), {'status': 'preparing'}, format='json'
        )
        assert response.status_code == status.HTTP_409_CONFLICT


@pytest.mark.django_db
class TestRestaurantMenuAPI:

    def test_restaurants_list_active_only(self, customer_client, restaurant_a, restaurant_b):
        restaurant_b.is_active = False
        restaurant_b.save()

        response = customer_client.get('/api/restaurants/')

        assert response.status_code == status.HTTP_200_OK
        assert [r['id'] for r in response.data] == [str(restaurant_a.id)]

    def test_menu_applies_current_promotion(
        self, customer_client, restaurant_a, pizza, lasagna, unavailable_item, pizza_promotion
    ):
        response = customer_client.get(f'/api/restaurants/{restaurant_a.id}/menu/')

        assert response.status_code == status.HTTP_200_OK
        menu = {entry['name']: entry for entry in response.data}
        assert set(menu) == {'Pepperoni Pizza', 'Lasagna'}
        assert menu['Pepperoni Pizza']['discounted_price'] == 17000
        assert menu['Pepperoni Pizza']['has_promotion'] is True
        assert menu['Lasagna']['discounted_price'] == 10000
        assert menu['Lasagna']['has_promotion'] is False
