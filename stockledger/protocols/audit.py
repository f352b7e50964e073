"""
Audit Sink Protocol — where mutating ledger calls report who did what.

The ledger does not authorize callers; it only forwards the actor it was
given. Implementations decide where the trail goes (database table, log
stream, external service).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Protocol, runtime_checkable

from django.utils import timezone


@dataclass(frozen=True)
class AuditEvent:
    """One audited ledger action."""

    actor_id: str | None
    action: str  # "stock.transfer", "order.placed", ...
    details: str
    timestamp: datetime = field(default_factory=timezone.now)


@runtime_checkable
class AuditSink(Protocol):
    """
    Protocol for audit trail backends.

    record() is called after the ledger transaction has committed. It
    should not raise for transient failures of its own storage; the
    ledger logs and drops any DatabaseError it does raise.
    """

    def record(self, event: AuditEvent) -> None:
        """
        Persist one audit event.

        Args:
            event: The action performed and who performed it
        """
        ...
