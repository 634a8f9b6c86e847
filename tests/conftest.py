# ===============================================================================
# PYTEST CONFIGURATION FOR THE ORDER LEDGER
# ===============================================================================
"""
Global test configuration.

Test Structure:
- tests/ mirrors apps/ structure for app-specific tests
- Naming convention: test_{app}_{feature}.py

Test Discovery:
- Run specific app tests: pytest tests/billing/
- Run all tests: pytest tests/
"""

import os

import django


def pytest_configure():
    """Configure Django settings for pytest"""
    os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings.test')

    # Configure Django
    django.setup()

# ===============================================================================
# PYTEST FIXTURES
# ===============================================================================

import pytest  # noqa: E402

from apps.orders.models import Order  # noqa: E402


@pytest.fixture
def paid_order(db):
    """Create a paid order worth 160.00"""
    return Order.objects.create(total_in_cents=16_000)
