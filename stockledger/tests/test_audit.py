"""
Tests for the audit trail.
"""

import pytest
from django.core.exceptions import ImproperlyConfigured
from django.db import DatabaseError

from stockledger import ledger, ValidationError
from stockledger.adapters import (
    DatabaseAuditSink,
    NoopAuditSink,
    get_audit_sink,
    reset_audit_sink,
)
from stockledger.models import AuditLog


pytestmark = pytest.mark.django_db


class FailingAuditSink:
    def record(self, event):
        raise DatabaseError('audit table locked')


class TestAuditTrail:

    def test_operations_are_audited(self, product, main, annex, actor):
        ledger.receive(30, product, main, actor=actor)
        ledger.reserve(5, product, main, actor=actor)
        ledger.transfer(10, product, main, annex, actor=actor)

        logs = AuditLog.objects.order_by('pk')
        assert [log.action for log in logs] == ['stock.receive', 'stock.reserve', 'stock.transfer']
        assert {log.actor_id for log in logs} == {'7'}
        assert logs[0].details.startswith('Added stock for product')

    def test_anonymous_actor(self, product, main):
        ledger.receive(3, product, main)

        assert AuditLog.objects.get().actor_id == ''

    def test_rejected_operation_not_audited(self, product, main):
        with pytest.raises(ValidationError):
            ledger.reserve(0, product, main)

        assert AuditLog.objects.count() == 0

    def test_order_lifecycle_audited(self, product, main):
        order = ledger.place_order(5, main, [(product, 2)])
        ledger.ship_order(order)

        actions = list(AuditLog.objects.order_by('pk').values_list('action', flat=True))
        assert actions == ['stock.reserve', 'order.placed', 'order.shipped']


class TestAuditSinkLoading:

    def test_default_sink(self):
        assert isinstance(get_audit_sink(), DatabaseAuditSink)

    def test_noop_sink(self, product, main, settings):
        settings.STOCK_LEDGER = {'AUDIT_SINK': 'stockledger.adapters.noop.NoopAuditSink'}

        assert isinstance(get_audit_sink(), NoopAuditSink)
        ledger.receive(3, product, main)
        assert AuditLog.objects.count() == 0

    def test_sink_is_cached(self):
        assert get_audit_sink() is get_audit_sink()
        first = get_audit_sink()
        reset_audit_sink()
        assert get_audit_sink() is not first

    def test_bad_path(self, settings):
        settings.STOCK_LEDGER = {'AUDIT_SINK': 'stockledger.adapters.missing.Sink'}

        with pytest.raises(ImproperlyConfigured):
            get_audit_sink()

    def test_sink_failure_does_not_undo_operation(self, product, main, settings, caplog):
        settings.STOCK_LEDGER = {'AUDIT_SINK': f'{__name__}.FailingAuditSink'}

        with caplog.at_level('ERROR', logger='stockledger'):
            record = ledger.receive(3, product, main)

        assert record.quantity == 3
        assert ledger.quantity(product, main) == 3
        assert 'stock.audit.failed' in caplog.messages
