"""
Stockledger Protocols.

Defines interfaces for external system integration.
"""

from stockledger.protocols.audit import AuditEvent, AuditSink
from stockledger.protocols.product import StockableProduct

__all__ = [
    "AuditEvent",
    "AuditSink",
    "StockableProduct",
]
