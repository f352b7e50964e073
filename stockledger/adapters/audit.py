"""
Stockledger Audit Adapters — load and feed the configured AuditSink.

Usage:
    from stockledger.adapters import get_audit_sink

    get_audit_sink().record(AuditEvent(actor_id="7", action="stock.receive", details="..."))

Settings:
    STOCK_LEDGER = {
        "AUDIT_SINK": "stockledger.adapters.audit.DatabaseAuditSink",
    }
"""

from __future__ import annotations

import logging
import threading

from django.core.exceptions import ImproperlyConfigured
from django.db import DatabaseError
from django.utils.module_loading import import_string

from stockledger.conf import ledger_settings
from stockledger.protocols.audit import AuditEvent, AuditSink

logger = logging.getLogger(__name__)


class DatabaseAuditSink:
    """Writes one AuditLog row per event."""

    def record(self, event: AuditEvent) -> None:
        from stockledger.models.audit import AuditLog

        AuditLog.objects.create(
            actor_id=event.actor_id or '',
            action=event.action,
            details=event.details,
            timestamp=event.timestamp,
        )


class LoggingAuditSink:
    """Emits each event on the ``stockledger.audit`` logger."""

    audit_logger = logging.getLogger('stockledger.audit')

    def record(self, event: AuditEvent) -> None:
        self.audit_logger.info(
            event.action,
            extra={
                "actor_id": event.actor_id,
                "details": event.details,
                "timestamp": event.timestamp.isoformat(),
            },
        )


# Cached sink instance, keyed by its dotted path
_lock = threading.Lock()
_audit_sink: tuple[str, AuditSink] | None = None


def get_audit_sink() -> AuditSink:
    """
    Return the configured audit sink.

    Raises:
        ImproperlyConfigured: If AUDIT_SINK is empty or cannot be imported
    """
    global _audit_sink

    sink_path = ledger_settings.AUDIT_SINK
    cached = _audit_sink
    if cached is not None and cached[0] == sink_path:
        return cached[1]

    with _lock:
        if not sink_path:
            raise ImproperlyConfigured(
                "STOCK_LEDGER['AUDIT_SINK'] must be configured. "
                "Example: 'stockledger.adapters.audit.DatabaseAuditSink'"
            )
        try:
            sink = import_string(sink_path)()
        except ImportError as e:
            raise ImproperlyConfigured(
                f"Failed to import audit sink '{sink_path}': {e}"
            ) from e
        logger.debug("Loaded audit sink: %s", sink_path)
        _audit_sink = (sink_path, sink)
        return sink


def reset_audit_sink() -> None:
    """Reset the cached sink. Useful for testing."""
    global _audit_sink
    _audit_sink = None


def emit(actor, action: str, details: str) -> None:
    """
    Forward one action to the audit sink.

    Audit is best effort: the ledger change has already committed, so a
    sink failure is logged and never undoes or fails the operation.
    """
    actor_id = str(actor.id) if actor is not None else None
    event = AuditEvent(actor_id=actor_id, action=action, details=details)
    try:
        get_audit_sink().record(event)
    except DatabaseError:
        logger.exception(
            "stock.audit.failed",
            extra={"action": action, "actor_id": actor_id},
        )
