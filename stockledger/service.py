"""
Ledger Service — The single public interface for all stock operations.

Usage:
    from stockledger import ledger, StockError

    ledger.receive(100, widget, main)
    result = ledger.reserve(30, widget, main)      # result.reserved_quantity == 30
    ledger.transfer(20, widget, main, annex)
    ledger.list_low_stock()
"""

from stockledger.models.enums import MovementStatus, PurchaseOrderStatus
from stockledger.services.backorders import StockBackorders
from stockledger.services.movements import StockMovements
from stockledger.services.orders import StockOrders
from stockledger.services.purchasing import StockPurchasing
from stockledger.services.queries import StockQueries
from stockledger.services.reports import StockReports
from stockledger.services.reservations import StockReservations
from stockledger.services.thresholds import evaluate
from stockledger.services.transfers import StockTransfers


class Ledger:
    """
    Single interface for all ledger operations.

    Parameter convention: (quantity, product, warehouse, ...)
    Follows natural language: "Transfer 20 widgets from main to annex"

    Every state-changing method accepts ``actor`` (a permissions.Actor or
    None) and forwards it to the audit sink. None of them checks the
    actor's role; see stockledger.permissions.require().
    """

    # ══════════════════════════════════════════════════════════════
    # CORE: QUERIES
    # ══════════════════════════════════════════════════════════════

    get_record = StockQueries.get_record
    quantity = StockQueries.quantity
    list_stock = StockQueries.list_stock
    list_backorders = StockQueries.list_backorders

    # ══════════════════════════════════════════════════════════════
    # CORE: RESERVATIONS & ORDERS
    # ══════════════════════════════════════════════════════════════

    @classmethod
    def reserve(cls, quantity, product, warehouse, actor=None):
        """Reserve on-hand stock; backorder the shortfall. See StockReservations."""
        return StockReservations.reserve(quantity, product, warehouse, actor=actor)

    @classmethod
    def place_order(cls, customer_id, warehouse, items, actor=None):
        return StockOrders.place_order(customer_id, warehouse, items, actor=actor)

    @classmethod
    def ship_order(cls, order, actor=None):
        return StockOrders.ship_order(order, actor=actor)

    # ══════════════════════════════════════════════════════════════
    # CORE: TRANSFERS
    # ══════════════════════════════════════════════════════════════

    @classmethod
    def transfer(cls, quantity, product, source, destination,
                 status=MovementStatus.PENDING, actor=None):
        """Move stock between warehouses. See StockTransfers."""
        return StockTransfers.transfer(
            quantity, product, source, destination, status=status, actor=actor
        )

    # ══════════════════════════════════════════════════════════════
    # CORE: THRESHOLDS
    # ══════════════════════════════════════════════════════════════

    @staticmethod
    def evaluate(stock_record, product, warehouse):
        """Low-stock / full flags for one stock row. Pure."""
        return evaluate(stock_record, product, warehouse)

    # ══════════════════════════════════════════════════════════════
    # EXTENSION: RECEIVING
    # ══════════════════════════════════════════════════════════════

    @classmethod
    def receive(cls, quantity, product, warehouse, reason='Receipt', actor=None):
        return StockMovements.receive(quantity, product, warehouse, reason=reason, actor=actor)

    @classmethod
    def adjust(cls, record, new_quantity, reason, actor=None):
        return StockMovements.adjust(record, new_quantity, reason, actor=actor)

    # ══════════════════════════════════════════════════════════════
    # EXTENSION: PURCHASING
    # ══════════════════════════════════════════════════════════════

    list_purchase_orders = StockPurchasing.list_purchase_orders

    @classmethod
    def create_purchase_order(cls, supplier_id, items, status=PurchaseOrderStatus.PENDING,
                              order_date=None, actor=None):
        """Record a supplier order; items are (product, warehouse, quantity)."""
        return StockPurchasing.create(
            supplier_id, items, status=status, order_date=order_date, actor=actor
        )

    @classmethod
    def receive_purchase_order(cls, purchase_order, actor=None):
        return StockPurchasing.receive(purchase_order, actor=actor)

    @classmethod
    def cancel_purchase_order(cls, purchase_order, actor=None):
        return StockPurchasing.cancel(purchase_order, actor=actor)

    # ══════════════════════════════════════════════════════════════
    # EXTENSION: BACKORDERS
    # ══════════════════════════════════════════════════════════════

    @classmethod
    def pending_backorders(cls, product, warehouse):
        return StockBackorders.pending(product, warehouse)

    @classmethod
    def cancel_backorder(cls, backorder, reason='', actor=None):
        return StockBackorders.cancel(backorder, reason=reason, actor=actor)

    @classmethod
    def fulfill_backorder(cls, backorder, actor=None):
        return StockBackorders.fulfill(backorder, actor=actor)

    # ══════════════════════════════════════════════════════════════
    # REPORTING
    # ══════════════════════════════════════════════════════════════

    list_movements = StockReports.list_movements
    list_transfers = StockReports.list_transfers
    list_low_stock = StockReports.list_low_stock
    inventory_value = StockReports.inventory_value
