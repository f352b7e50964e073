"""
Role → capability mapping.

The ledger engine never checks roles itself. The boundary that receives a
request (a view, a management command) calls require() once with the
capability of the operation it is about to invoke.

Defaults follow the roles the inventory front-end ships with; extra roles
or overrides come from STOCK_LEDGER['ROLE_CAPABILITIES'].
"""

from dataclasses import dataclass

from stockledger.conf import ledger_settings
from stockledger.exceptions import PermissionDenied

RECEIVE_STOCK = 'receive_stock'
ADJUST_STOCK = 'adjust_stock'
TRANSFER_STOCK = 'transfer_stock'
PLACE_ORDER = 'place_order'
SHIP_ORDER = 'ship_order'
MANAGE_BACKORDERS = 'manage_backorders'
VIEW_STOCK = 'view_stock'
VIEW_REPORTS = 'view_reports'

ALL_CAPABILITIES = frozenset({
    RECEIVE_STOCK,
    ADJUST_STOCK,
    TRANSFER_STOCK,
    PLACE_ORDER,
    SHIP_ORDER,
    MANAGE_BACKORDERS,
    VIEW_STOCK,
    VIEW_REPORTS,
})

DEFAULT_ROLE_CAPABILITIES = {
    'Admin': ALL_CAPABILITIES,
    'Warehouse Manager': ALL_CAPABILITIES,
    'Staff': frozenset({PLACE_ORDER, SHIP_ORDER, VIEW_STOCK}),
}


@dataclass(frozen=True)
class Actor:
    """Authenticated identity passed through to the audit sink."""

    id: int | str
    role: str = ''


def capabilities_for(role: str) -> frozenset[str]:
    """Capability set of a role (empty for unknown roles)."""
    overrides = ledger_settings.ROLE_CAPABILITIES
    if role in overrides:
        return frozenset(overrides[role])
    return DEFAULT_ROLE_CAPABILITIES.get(role, frozenset())


def has_capability(actor: Actor | None, capability: str) -> bool:
    if actor is None:
        return False
    return capability in capabilities_for(actor.role)


def require(actor: Actor | None, capability: str) -> None:
    """
    Raise PermissionDenied unless the actor's role grants the capability.

    Raises:
        PermissionDenied('NOT_ALLOWED')
    """
    if not has_capability(actor, capability):
        raise PermissionDenied(
            'NOT_ALLOWED',
            role=actor.role if actor else None,
            capability=capability,
        )
