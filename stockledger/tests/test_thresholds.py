"""
Tests for ledger.evaluate() and the low-stock rules.
"""

from decimal import Decimal
from types import SimpleNamespace

import pytest

from stockledger import ledger


def row(quantity):
    return SimpleNamespace(quantity=quantity)


def item(threshold):
    return SimpleNamespace(name='Widget', low_stock_threshold=threshold)


def site(capacity):
    return SimpleNamespace(code='main', capacity=capacity)


class TestLowStock:
    """Threshold rule and capacity rule."""

    @pytest.mark.parametrize('quantity, expected', [
        (19, True),
        (5, True),
        (15, True),
        (20, False),
        (25, False),
    ])
    def test_threshold_rule(self, quantity, expected):
        """Threshold 20, capacity 100: low below 20."""
        level = ledger.evaluate(row(quantity), item(20), site(100))

        assert level.is_low is expected

    def test_above_threshold_and_ratio(self):
        """Threshold 20, capacity 50: 25 is above both limits."""
        assert ledger.evaluate(row(25), item(20), site(50)).is_low is False

    def test_capacity_rule(self):
        """Threshold 20, capacity 300: 25 is under 10% of capacity."""
        assert ledger.evaluate(row(25), item(20), site(300)).is_low is True

    def test_no_threshold_is_never_low(self):
        """Without a threshold, neither rule applies."""
        assert ledger.evaluate(row(0), item(None), site(300)).is_low is False

    def test_zero_threshold_uses_capacity_rule(self):
        """Threshold 0 is set: only the capacity rule can trigger."""
        assert ledger.evaluate(row(5), item(0), site(100)).is_low is True
        assert ledger.evaluate(row(10), item(0), site(100)).is_low is False

    def test_no_capacity_uses_threshold_only(self):
        assert ledger.evaluate(row(25), item(20), site(None)).is_low is False
        assert ledger.evaluate(row(3), item(20), site(None)).is_low is True

    def test_missing_warehouse(self):
        level = ledger.evaluate(row(3), item(20), None)

        assert level.is_low is True
        assert level.is_full is False

    def test_missing_product(self):
        assert ledger.evaluate(row(0), None, site(100)).is_low is False

    @pytest.mark.django_db
    def test_ratio_from_settings(self, settings):
        """LOW_STOCK_CAPACITY_RATIO changes the capacity rule."""
        settings.STOCK_LEDGER = {'LOW_STOCK_CAPACITY_RATIO': '0.5'}

        assert ledger.evaluate(row(40), item(20), site(100)).is_low is True
        assert ledger.evaluate(row(50), item(20), site(100)).is_low is False


class TestFull:
    """Capacity rule for full warehouses."""

    @pytest.mark.parametrize('quantity, expected', [
        (99, False),
        (100, True),
        (140, True),
    ])
    def test_full_at_capacity(self, quantity, expected):
        assert ledger.evaluate(row(quantity), item(20), site(100)).is_full is expected

    def test_no_capacity_never_full(self):
        assert ledger.evaluate(row(10_000), item(20), site(None)).is_full is False

    def test_level_is_low_and_full_independent(self):
        """A product with a huge threshold can be both low and full."""
        level = ledger.evaluate(row(100), item(Decimal('500')), site(100))

        assert level.is_low is True
        assert level.is_full is True


class TestZeroCapacity:
    """Capacity 0 is treated as no capacity."""

    def test_zero_capacity_never_full(self):
        assert ledger.evaluate(row(5), item(20), site(0)).is_full is False

    def test_zero_capacity_uses_threshold_only(self):
        assert ledger.evaluate(row(5), item(20), site(0)).is_low is True
        assert ledger.evaluate(row(25), item(20), site(0)).is_low is False

    @pytest.mark.django_db
    def test_zero_capacity_fails_validation(self):
        from django.core.exceptions import ValidationError as FieldError

        from stockledger.models import Warehouse

        with pytest.raises(FieldError) as exc:
            Warehouse(code='dock', name='Dock', capacity=0).full_clean()

        assert 'capacity' in exc.value.message_dict
