"""
Noop Audit Sink — Stub adapter for development and testing.

Usage in settings.py:
    STOCK_LEDGER = {
        "AUDIT_SINK": "stockledger.adapters.noop.NoopAuditSink",
    }

WARNING: Do NOT use in production. Nothing is recorded.
"""

from __future__ import annotations

from stockledger.protocols.audit import AuditEvent


class NoopAuditSink:
    """
    No-operation audit sink.

    Implements the ``AuditSink`` protocol without storing anything, for:

    - Local development without an audit table
    - Tests that don't assert on the audit trail
    """

    def record(self, event: AuditEvent) -> None:
        """Discard the event."""
        return None
