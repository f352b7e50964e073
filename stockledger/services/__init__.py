"""
Stock services — modular organization of ledger operations.

Re-exports all public classes:
    from stockledger.services import StockReservations, StockTransfers, ...
"""

from stockledger.services.backorders import StockBackorders
from stockledger.services.movements import StockMovements
from stockledger.services.orders import StockOrders
from stockledger.services.purchasing import StockPurchasing
from stockledger.services.queries import StockQueries, StockRow
from stockledger.services.reports import MovementEntry, StockReports, ValuationRow
from stockledger.services.reservations import ReservationResult, StockReservations
from stockledger.services.thresholds import StockLevel, evaluate
from stockledger.services.transfers import StockTransfers

__all__ = [
    'StockQueries',
    'StockMovements',
    'StockReservations',
    'StockTransfers',
    'StockBackorders',
    'StockOrders',
    'StockPurchasing',
    'StockReports',
    'StockRow',
    'StockLevel',
    'ReservationResult',
    'MovementEntry',
    'ValuationRow',
    'evaluate',
]
