"""
Tests for supplier purchase orders.
"""

import pytest
from django.db import DatabaseError

from stockledger import ledger, NotFoundError, PersistenceError, ValidationError
from stockledger.models import (
    AuditLog,
    Movement,
    MovementStatus,
    PurchaseOrder,
    PurchaseOrderStatus,
)


pytestmark = pytest.mark.django_db


@pytest.fixture
def purchase_order(product, gadget, main, annex):
    """PENDING order: 40 widgets to main, 10 widgets to annex, 6 gadgets to main."""
    return ledger.create_purchase_order(
        12,
        [(product, main, 40), (product, annex, 10), (gadget, main, 6)],
    )


class TestCreatePurchaseOrder:

    def test_create_pending(self, purchase_order, product, main):
        """A PENDING order records its lines and does not touch stock."""
        assert purchase_order.status == PurchaseOrderStatus.PENDING
        assert purchase_order.supplier_id == 12
        assert [(i.warehouse.code, i.quantity) for i in purchase_order.items.all()] == [
            ('main', 40), ('annex', 10), ('main', 6),
        ]
        assert ledger.get_record(product, main) is None
        assert Movement.objects.count() == 0

    def test_create_received_credits_stock(self, product, main, annex):
        """Status RECEIVED records the order and receives it straight away."""
        ledger.receive(5, product, main)

        order = ledger.create_purchase_order(
            3, [(product, main, 20), (product, annex, 4)],
            status=PurchaseOrderStatus.RECEIVED,
        )

        assert order.status == PurchaseOrderStatus.RECEIVED
        assert order.received_at is not None
        assert ledger.quantity(product, main) == 25
        assert ledger.quantity(product, annex) == 4

    def test_create_cancelled(self, product, main):
        order = ledger.create_purchase_order(
            3, [(product, main, 20)], status=PurchaseOrderStatus.CANCELLED,
        )

        assert order.status == PurchaseOrderStatus.CANCELLED
        assert ledger.quantity(product, main) == 0

    def test_empty_order(self):
        with pytest.raises(ValidationError) as exc:
            ledger.create_purchase_order(3, [])

        assert exc.value.code == 'EMPTY_ORDER'

    @pytest.mark.parametrize('supplier_id', [0, -1, '7', None])
    def test_invalid_supplier(self, product, main, supplier_id):
        with pytest.raises(ValidationError) as exc:
            ledger.create_purchase_order(supplier_id, [(product, main, 1)])

        assert exc.value.code == 'INVALID_SUPPLIER'
        assert PurchaseOrder.objects.count() == 0

    def test_invalid_status(self, product, main):
        with pytest.raises(ValidationError) as exc:
            ledger.create_purchase_order(3, [(product, main, 1)], status='Shipped')

        assert exc.value.code == 'INVALID_STATUS'

    def test_invalid_line_rejects_whole_order(self, product, main):
        with pytest.raises(ValidationError) as exc:
            ledger.create_purchase_order(3, [(product, main, 4), (product, main, 0)])

        assert exc.value.code == 'INVALID_QUANTITY'
        assert PurchaseOrder.objects.count() == 0


class TestReceivePurchaseOrder:

    def test_receive_credits_every_line(self, purchase_order, product, gadget, main, annex):
        ledger.receive(2, product, main)

        received = ledger.receive_purchase_order(purchase_order)

        assert received.status == PurchaseOrderStatus.RECEIVED
        assert received.received_at is not None
        assert ledger.quantity(product, main) == 42
        assert ledger.quantity(product, annex) == 10
        assert ledger.quantity(gadget, main) == 6

    def test_receive_journals_one_movement_per_line(self, purchase_order):
        ledger.receive_purchase_order(purchase_order)

        moves = Movement.objects.filter(reason=f'Purchase order #{purchase_order.pk}')
        assert sorted(m.quantity for m in moves) == [6, 10, 40]
        for move in moves:
            assert move.source_id == move.destination_id
            assert move.status == MovementStatus.RECEIVED

    def test_repeated_lines_accumulate(self, product, main):
        order = ledger.create_purchase_order(3, [(product, main, 4), (product, main, 6)])

        ledger.receive_purchase_order(order)

        assert ledger.quantity(product, main) == 10
        assert Movement.objects.count() == 2

    def test_receive_only_once(self, purchase_order, product, main):
        ledger.receive_purchase_order(purchase_order)

        with pytest.raises(ValidationError) as exc:
            ledger.receive_purchase_order(purchase_order)

        assert exc.value.code == 'INVALID_STATUS'
        assert ledger.quantity(product, main) == 40
        assert Movement.objects.count() == 3

    def test_receive_cancelled(self, purchase_order, product, main):
        ledger.cancel_purchase_order(purchase_order)

        with pytest.raises(ValidationError) as exc:
            ledger.receive_purchase_order(purchase_order)

        assert exc.value.code == 'INVALID_STATUS'
        assert ledger.get_record(product, main) is None

    def test_receive_unknown(self):
        with pytest.raises(NotFoundError) as exc:
            ledger.receive_purchase_order(424242)

        assert exc.value.code == 'PURCHASE_ORDER_NOT_FOUND'

    def test_receive_without_items(self):
        order = PurchaseOrder.objects.create(supplier_id=3)

        with pytest.raises(NotFoundError) as exc:
            ledger.receive_purchase_order(order)

        assert exc.value.code == 'PURCHASE_ORDER_ITEMS_NOT_FOUND'

    def test_store_failure_applies_nothing(self, purchase_order, product, main, monkeypatch):
        """A failing journal write rolls back every line and the status change."""
        ledger.receive(2, product, main)

        def broken_create(**kwargs):
            raise DatabaseError('disk full')

        monkeypatch.setattr(Movement.objects, 'create', broken_create)

        with pytest.raises(PersistenceError) as exc:
            ledger.receive_purchase_order(purchase_order)

        assert exc.value.step == 'journal'
        assert ledger.quantity(product, main) == 2
        purchase_order.refresh_from_db()
        assert purchase_order.status == PurchaseOrderStatus.PENDING

    def test_receive_is_audited(self, purchase_order, actor):
        ledger.receive_purchase_order(purchase_order, actor=actor)

        log = AuditLog.objects.get(action='purchase_order.received')
        assert log.actor_id == '7'
        assert '3 line(s), 56 unit(s)' in log.details


class TestCancelPurchaseOrder:

    def test_cancel(self, purchase_order):
        cancelled = ledger.cancel_purchase_order(purchase_order.pk)

        assert cancelled.status == PurchaseOrderStatus.CANCELLED

    def test_cancel_received(self, purchase_order):
        ledger.receive_purchase_order(purchase_order)

        with pytest.raises(ValidationError) as exc:
            ledger.cancel_purchase_order(purchase_order)

        assert exc.value.code == 'INVALID_STATUS'


class TestListPurchaseOrders:

    def test_filter_by_status(self, purchase_order, product, main):
        other = ledger.create_purchase_order(4, [(product, main, 1)])
        ledger.receive_purchase_order(other)

        assert ledger.list_purchase_orders() == [other, purchase_order]
        assert ledger.list_purchase_orders(status=PurchaseOrderStatus.PENDING) == [purchase_order]
        assert ledger.list_purchase_orders(supplier_id=4) == [other]
