"""
Pytest fixtures for Stockledger tests.
"""

from decimal import Decimal

import pytest

from stockledger.adapters import reset_audit_sink
from stockledger.models import Warehouse
from stockledger.permissions import Actor
from tests_project.catalog.models import Product


@pytest.fixture(autouse=True)
def _fresh_audit_sink():
    """Each test resolves the sink from its own settings."""
    reset_audit_sink()
    yield
    reset_audit_sink()


@pytest.fixture
def actor():
    """A warehouse manager acting on the ledger."""
    return Actor(id=7, role='Warehouse Manager')


@pytest.fixture
def product(db):
    """Product with a low-stock threshold of 20 and a cost price."""
    return Product.objects.create(
        name='Widget',
        sku='widget',
        low_stock_threshold=20,
        cost_price=Decimal('2.50'),
    )


@pytest.fixture
def gadget(db):
    """Second product, cheaper, threshold 5."""
    return Product.objects.create(
        name='Gadget',
        sku='gadget',
        low_stock_threshold=5,
        cost_price=Decimal('10.00'),
    )


@pytest.fixture
def untracked_product(db):
    """Product without threshold or cost price."""
    return Product.objects.create(name='Sample', sku='sample')


@pytest.fixture
def main(db):
    """Main warehouse, capacity 100."""
    return Warehouse.objects.create(code='main', name='Main DC', capacity=100)


@pytest.fixture
def annex(db):
    """Annex warehouse, capacity 50."""
    return Warehouse.objects.create(code='annex', name='Annex', capacity=50)


@pytest.fixture
def overflow(db):
    """Warehouse without a tracked capacity."""
    return Warehouse.objects.create(code='overflow', name='Overflow Yard')
