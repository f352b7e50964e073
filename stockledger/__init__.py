"""
Django Stockledger — per-warehouse stock ledger.

Usage:
    from stockledger import ledger, StockError

    ledger.receive(50, widget, main)
    ledger.reserve(5, widget, main)       # ReservationResult(reserved_quantity=5)
    ledger.transfer(10, widget, main, annex)
    ledger.list_low_stock()
"""


def __getattr__(name):
    """Lazy import to avoid circular imports during app loading."""
    if name == 'ledger':
        from stockledger.service import Ledger
        return Ledger
    elif name in ('StockError', 'ValidationError', 'NotFoundError',
                  'PersistenceError', 'InvariantViolation', 'PermissionDenied'):
        from stockledger import exceptions
        return getattr(exceptions, name)
    elif name == 'Actor':
        from stockledger.permissions import Actor
        return Actor
    elif name in ('Warehouse', 'StockRecord', 'Movement', 'Transfer', 'Backorder',
                  'Order', 'OrderItem', 'PurchaseOrder', 'PurchaseOrderItem',
                  'MovementStatus', 'BackorderStatus', 'OrderStatus', 'PurchaseOrderStatus'):
        from stockledger import models
        return getattr(models, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    'ledger',
    'Actor',
    'StockError',
    'ValidationError',
    'NotFoundError',
    'PersistenceError',
    'InvariantViolation',
    'PermissionDenied',
    'Warehouse',
    'StockRecord',
    'Movement',
    'Transfer',
    'Backorder',
    'Order',
    'OrderItem',
    'PurchaseOrder',
    'PurchaseOrderItem',
    'MovementStatus',
    'BackorderStatus',
    'OrderStatus',
    'PurchaseOrderStatus',
]

__version__ = '0.1.0'
