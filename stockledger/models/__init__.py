"""
Stockledger Models.

Core models for the stock ledger:
- Warehouse: Where stock exists
- StockRecord: On-hand quantity per (product, warehouse)
- Movement: Immutable journal of quantity changes
- Transfer: Audit row per transfer request
- Backorder: Unmet demand from reservations
- Order / OrderItem: Customer orders that reserve stock
- PurchaseOrder / PurchaseOrderItem: Supplier orders whose receipt adds stock
- AuditLog: Actor trail written by the database audit sink
"""

from stockledger.models.audit import AuditLog
from stockledger.models.backorder import Backorder
from stockledger.models.enums import (
    BackorderStatus,
    MovementStatus,
    OrderStatus,
    PurchaseOrderStatus,
)
from stockledger.models.movement import Movement
from stockledger.models.order import Order, OrderItem
from stockledger.models.purchase_order import PurchaseOrder, PurchaseOrderItem
from stockledger.models.stock import StockRecord
from stockledger.models.transfer import Transfer
from stockledger.models.warehouse import Warehouse

__all__ = [
    'MovementStatus',
    'BackorderStatus',
    'OrderStatus',
    'PurchaseOrderStatus',
    'Warehouse',
    'StockRecord',
    'Movement',
    'Transfer',
    'Backorder',
    'Order',
    'OrderItem',
    'PurchaseOrder',
    'PurchaseOrderItem',
    'AuditLog',
]
