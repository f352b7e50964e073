"""
Tests for role capabilities.
"""

import pytest

from stockledger import Actor, PermissionDenied
from stockledger import permissions


class TestCapabilities:

    @pytest.mark.parametrize('role', ['Admin', 'Warehouse Manager'])
    def test_managers_hold_everything(self, role):
        assert permissions.capabilities_for(role) == permissions.ALL_CAPABILITIES

    def test_staff(self):
        staff = Actor(id=3, role='Staff')

        assert permissions.has_capability(staff, permissions.PLACE_ORDER)
        assert permissions.has_capability(staff, permissions.SHIP_ORDER)
        assert not permissions.has_capability(staff, permissions.TRANSFER_STOCK)
        assert not permissions.has_capability(staff, permissions.VIEW_REPORTS)

    def test_unknown_role(self):
        assert permissions.capabilities_for('Visitor') == frozenset()

    def test_no_actor(self):
        assert not permissions.has_capability(None, permissions.VIEW_STOCK)


class TestRequire:

    def test_require_passes(self, actor):
        assert permissions.require(actor, permissions.TRANSFER_STOCK) is None

    def test_require_denies(self):
        with pytest.raises(PermissionDenied) as exc:
            permissions.require(Actor(id=3, role='Staff'), permissions.ADJUST_STOCK)

        assert exc.value.code == 'NOT_ALLOWED'
        assert exc.value.data == {'role': 'Staff', 'capability': 'adjust_stock'}
        assert exc.value.as_dict()['kind'] == 'PermissionDenied'

    def test_role_overrides_from_settings(self, settings):
        settings.STOCK_LEDGER = {'ROLE_CAPABILITIES': {'Auditor': ['view_reports'],
                                                       'Staff': []}}

        permissions.require(Actor(id=9, role='Auditor'), permissions.VIEW_REPORTS)
        with pytest.raises(PermissionDenied):
            permissions.require(Actor(id=3, role='Staff'), permissions.PLACE_ORDER)
