"""
Threshold evaluation — derive low-stock / full flags for a stock row.

Pure: reads only the three objects it is given.
"""

from dataclasses import dataclass
from decimal import Decimal

from stockledger.conf import ledger_settings
from stockledger.protocols.product import get_product_attr


@dataclass(frozen=True)
class StockLevel:
    """Flags for one (product, warehouse) row."""

    is_low: bool
    is_full: bool


def evaluate(stock_record, product, warehouse) -> StockLevel:
    """
    Evaluate a stock row against product threshold and warehouse capacity.

    is_full: capacity is set and quantity >= capacity
    is_low:  threshold is set and (quantity < threshold
             or (capacity is set and quantity < capacity * ratio))

    The two low-stock rules trigger the same flag independently, but a
    product without a threshold is never low. ``product`` or ``warehouse``
    may be None when the joined row is missing. A capacity of 0 counts
    as no capacity.

    Args:
        stock_record: Anything with an integer ``quantity``
        product: StockableProduct or None
        warehouse: Warehouse or None
    """
    quantity = stock_record.quantity
    capacity = getattr(warehouse, 'capacity', None) if warehouse is not None else None
    if not capacity:
        capacity = None
    threshold = get_product_attr(product, 'low_stock_threshold') if product is not None else None

    is_full = capacity is not None and quantity >= capacity

    is_low = False
    if threshold is not None:
        if quantity < threshold:
            is_low = True
        elif capacity is not None:
            ratio = ledger_settings.LOW_STOCK_CAPACITY_RATIO
            is_low = quantity < Decimal(capacity) * ratio

    return StockLevel(is_low=is_low, is_full=is_full)
