"""
Exceptions for Stockledger.

All errors are StockError subclasses with a structured code for programmatic
handling. The subclass tells the caller which kind of failure happened:

- ValidationError: rejected before touching the store
- NotFoundError: referenced order, purchase order, item or backorder is absent
- PersistenceError: the store failed; ``data['step']`` names the sub-step
- InvariantViolation: the operation would break a ledger invariant
- PermissionDenied: the actor's role lacks the capability
"""

from typing import Any


class StockError(Exception):
    """
    Structured exception for stock operations.

    Usage:
        try:
            ledger.transfer(10, product, main, annex)
        except StockError as e:
            if e.code == 'NEGATIVE_STOCK':
                print(f"Only {e.available} on hand")

    Attributes:
        code: Error code for programmatic handling
        message: Human-readable message
        data: Additional context data
    """

    _default_messages: dict[str, str] = {}

    def __init__(self, code: str, message: str | None = None, **data: Any):
        self.code = code
        self.message = message or self._default_messages.get(code, code)
        self.data = data
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.data:
            details = ', '.join(f"{k}={v}" for k, v in self.data.items())
            return f"[{self.code}] {self.message} ({details})"
        return f"[{self.code}] {self.message}"

    @property
    def available(self) -> int:
        """Shortcut for data['available']."""
        return self.data.get('available', 0)

    @property
    def requested(self) -> int:
        """Shortcut for data['requested']."""
        return self.data.get('requested', 0)

    def as_dict(self) -> dict[str, Any]:
        """Serialize to dict (useful for APIs)."""
        return {
            'kind': type(self).__name__,
            'code': self.code,
            'message': self.message,
            'data': {
                k: v if isinstance(v, (int, float, bool, type(None))) else str(v)
                for k, v in self.data.items()
            }
        }


class ValidationError(StockError):
    _default_messages = {
        'INVALID_QUANTITY': 'Quantity must be a positive integer',
        'INVALID_PRODUCT': 'Product does not exist',
        'INVALID_WAREHOUSE': 'Warehouse does not exist',
        'INVALID_CUSTOMER': 'Customer ID must be a positive integer',
        'INVALID_ORDER': 'Order ID must be a positive integer',
        'INVALID_SUPPLIER': 'Supplier ID must be a positive integer',
        'INVALID_PURCHASE_ORDER': 'Purchase order ID must be a positive integer',
        'INVALID_STATUS': 'Status is not valid for this operation',
        'SAME_WAREHOUSE': 'Source and destination warehouses must differ',
        'EMPTY_ORDER': 'Order must have at least one item',
        'REASON_REQUIRED': 'Reason is required',
        'INSUFFICIENT_QUANTITY': 'Not enough stock on hand',
    }


class NotFoundError(StockError):
    _default_messages = {
        'ORDER_NOT_FOUND': 'Order not found',
        'ORDER_ITEMS_NOT_FOUND': 'Order items not found',
        'BACKORDER_NOT_FOUND': 'Backorder not found',
        'PURCHASE_ORDER_NOT_FOUND': 'Purchase order not found',
        'PURCHASE_ORDER_ITEMS_NOT_FOUND': 'Purchase order items not found',
    }


class PersistenceError(StockError):
    """Store read/write failed. Effects of earlier sub-steps were rolled back."""

    _default_messages = {
        'STORE_FAILURE': 'Stock store read/write failed',
    }

    @property
    def step(self) -> str | None:
        return self.data.get('step')


class InvariantViolation(StockError):
    _default_messages = {
        'NEGATIVE_STOCK': 'Operation would leave stock below zero',
    }


class PermissionDenied(StockError):
    _default_messages = {
        'NOT_ALLOWED': 'Role is not allowed to perform this operation',
    }
