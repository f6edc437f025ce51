"""
Root conftest.py for all backend tests.

This file makes fixtures available to all test files across all apps.
"""
import pytest
from django.test import override_settings

# Import all fixtures from the shared fixtures module
from delivery_core.tests.fixtures import *  # noqa: F401,F403


# ============================================================================
# AUTO-USE FIXTURES (Run automatically for every test)
# ============================================================================

@pytest.fixture(autouse=True)
def default_delivery_settings():
    """
    Pin the delivery tables for every test.

    Environment overrides (DELIVERY_BASE_FEE, ...) must not change expected totals.
    """
    with override_settings(
        DELIVERY_FEES={"BASE_FEE": 3000, "EXPRESS_SURCHARGE": 2000},
        DELIVERY_TIME_LABELS={"standard": "30-45 min", "express": "15-20 min"},
        TIP_PRESETS=(0, 2000, 5000),
    ):
        yield


# ============================================================================
# API CLIENT FIXTURES
# ============================================================================

@pytest.fixture
def api_client():
    """
    Provide DRF API client for API tests.

    Usage:
        def test_my_api(api_client):
            response = api_client.get('/api/orders/')
            assert response.status_code == 401
    """
    from rest_framework.test import APIClient
    return APIClient()


@pytest.fixture
def customer_client(api_client, customer):
    """
    Provide an API client authenticated as `customer` with a real JWT.
    """
    from rest_framework_simplejwt.tokens import RefreshToken

    refresh = RefreshToken.for_user(customer)
    api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {refresh.access_token}")
    return api_client


@pytest.fixture
def admin_client(restaurant_admin):
    """API client authenticated as staff of restaurant A."""
    from rest_framework.test import APIClient
    from rest_framework_simplejwt.tokens import RefreshToken

    client = APIClient()
    refresh = RefreshToken.for_user(restaurant_admin)
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {refresh.access_token}")
    return client
