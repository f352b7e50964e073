"""
Stockable Product Protocol — what the ledger reads from a product.

Products live in the host project's catalog. StockRecord, Movement and the
other ledger rows point at them through a generic foreign key, so any model
with an integer pk works. Missing attributes fall back to PRODUCT_DEFAULTS.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Protocol, runtime_checkable

PRODUCT_DEFAULTS = {
    'name': None,
    'low_stock_threshold': None,
    'cost_price': None,
}


@runtime_checkable
class StockableProduct(Protocol):
    """
    Attribute surface consumed by the ledger.

    Attributes:
        pk: Primary key of the product row
        name: Display name used by reports
        low_stock_threshold: Absolute threshold; None disables low-stock alerts
        cost_price: Unit cost used by inventory valuation; None skips the product
    """

    pk: int
    name: str
    low_stock_threshold: int | None
    cost_price: Decimal | None


def get_product_attr(product, attr: str, default=None):
    """Get product attribute with fallback to default."""
    value = getattr(product, attr, None)
    if value is not None:
        return value
    return PRODUCT_DEFAULTS.get(attr, default)
