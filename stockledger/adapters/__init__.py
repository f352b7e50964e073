"""
Stockledger Adapters.

Implementations of protocols for external systems.
"""

from stockledger.adapters.audit import (
    DatabaseAuditSink,
    LoggingAuditSink,
    emit,
    get_audit_sink,
    reset_audit_sink,
)
from stockledger.adapters.noop import NoopAuditSink

__all__ = [
    "DatabaseAuditSink",
    "LoggingAuditSink",
    "NoopAuditSink",
    "emit",
    "get_audit_sink",
    "reset_audit_sink",
]
