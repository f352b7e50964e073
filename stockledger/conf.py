"""
Stockledger configuration.

Usage in settings.py:
    STOCK_LEDGER = {
        "ALLOW_NEGATIVE_STOCK": False,
        "LOW_STOCK_CAPACITY_RATIO": "0.10",
        "AUDIT_SINK": "stockledger.adapters.audit.DatabaseAuditSink",
        "ROLE_CAPABILITIES": {"Auditor": ["view_reports"]},
        "MOVEMENT_HISTORY_LIMIT": 500,
    }
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from django.conf import settings


@dataclass
class LedgerSettings:
    """Stockledger configuration settings."""

    # Let transfers and adjustments drive a stock row below zero
    ALLOW_NEGATIVE_STOCK: bool = False

    # Fraction of warehouse capacity under which a row counts as low
    LOW_STOCK_CAPACITY_RATIO: Decimal = Decimal('0.10')

    # Audit sink backend (dotted path)
    AUDIT_SINK: str = "stockledger.adapters.audit.DatabaseAuditSink"

    # Extra role -> capabilities entries, merged over the defaults
    ROLE_CAPABILITIES: dict[str, Any] = field(default_factory=dict)

    # Default cap for list_movements() (None = no cap)
    MOVEMENT_HISTORY_LIMIT: int | None = None

    def __post_init__(self):
        self.LOW_STOCK_CAPACITY_RATIO = Decimal(str(self.LOW_STOCK_CAPACITY_RATIO))


def get_ledger_settings() -> LedgerSettings:
    """Load settings from Django settings."""
    user_settings: dict[str, Any] = getattr(settings, "STOCK_LEDGER", {})
    return LedgerSettings(**{
        k: v for k, v in user_settings.items()
        if k in LedgerSettings.__dataclass_fields__
    })


class _LazySettings:
    """Lazy proxy that re-reads settings on every attribute access."""

    def __getattr__(self, name):
        return getattr(get_ledger_settings(), name)


ledger_settings = _LazySettings()
