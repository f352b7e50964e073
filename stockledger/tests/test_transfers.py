"""
Tests for ledger.transfer().
"""

import pytest
from django.db import DatabaseError

from stockledger import ledger, InvariantViolation, PersistenceError, ValidationError
from stockledger.models import Movement, MovementStatus, StockRecord, Transfer


pytestmark = pytest.mark.django_db


class TestTransfer:
    """Both ends of a transfer."""

    def test_transfer_moves_stock(self, product, main, annex):
        """Source loses q, destination gains q."""
        ledger.receive(60, product, main)
        ledger.receive(5, product, annex)

        transfer = ledger.transfer(20, product, main, annex)

        assert ledger.quantity(product, main) == 40
        assert ledger.quantity(product, annex) == 25
        assert transfer.quantity == 20
        assert transfer.status == MovementStatus.PENDING
        assert transfer.source == main
        assert transfer.destination == annex

    def test_transfer_journals_both_legs(self, product, main, annex):
        """Two movements linked to the transfer, summing to zero."""
        ledger.receive(60, product, main)

        transfer = ledger.transfer(20, product, main, annex)

        legs = Movement.objects.filter(transfer=transfer)
        assert legs.count() == 2
        assert sum(m.quantity for m in legs) == 0

        debit = legs.get(quantity=-20)
        assert debit.source == main
        assert debit.destination is None
        assert debit.status == MovementStatus.IN_TRANSIT

        credit = legs.get(quantity=20)
        assert credit.source is None
        assert credit.destination == annex
        assert credit.status == MovementStatus.RECEIVED

    def test_transfer_creates_destination_record(self, product, main, annex):
        """First transfer into a warehouse creates its stock row."""
        ledger.receive(10, product, main)
        assert ledger.get_record(product, annex) is None

        ledger.transfer(4, product, main, annex)

        assert ledger.get_record(product, annex).quantity == 4

    def test_transfer_keeps_requested_status(self, product, main, annex):
        """The transfer row carries the caller's status."""
        ledger.receive(10, product, main)

        transfer = ledger.transfer(4, product, main, annex, status=MovementStatus.IN_TRANSIT)

        assert transfer.status == MovementStatus.IN_TRANSIT
        assert ledger.list_transfers() == [transfer]

    def test_journal_sum_matches_stock(self, product, main, annex):
        """Per warehouse, journaled in minus out equals on-hand quantity."""
        ledger.receive(50, product, main)
        ledger.transfer(15, product, main, annex)
        ledger.transfer(5, product, annex, main)

        def journaled(warehouse):
            total = 0
            for move in Movement.objects.all():
                if move.warehouse == warehouse:
                    total += move.quantity
            return total

        assert journaled(main) == ledger.quantity(product, main) == 40
        assert journaled(annex) == ledger.quantity(product, annex) == 10


class TestTransferWithoutSource:
    """Source warehouse never held the product."""

    def test_unsourced_transfer_credits_destination(self, product, main, annex, caplog):
        """Destination is credited, one movement, a warning is logged."""
        with caplog.at_level('WARNING', logger='stockledger'):
            transfer = ledger.transfer(7, product, main, annex)

        assert ledger.quantity(product, annex) == 7
        assert ledger.get_record(product, main) is None

        legs = Movement.objects.filter(transfer=transfer)
        assert legs.count() == 1
        assert legs.get().quantity == 7
        assert 'stock.transfer.unsourced' in caplog.messages


class TestTransferNegativeSource:
    """Source would go below zero."""

    def test_negative_source_rolls_back(self, product, main, annex):
        """Nothing is written when the source cannot cover the transfer."""
        ledger.receive(5, product, main)

        with pytest.raises(InvariantViolation) as exc:
            ledger.transfer(8, product, main, annex)

        assert exc.value.code == 'NEGATIVE_STOCK'
        assert exc.value.available == 5
        assert exc.value.requested == 8
        assert ledger.quantity(product, main) == 5
        assert ledger.get_record(product, annex) is None
        assert Transfer.objects.count() == 0
        assert Movement.objects.count() == 1

    def test_negative_source_allowed_by_setting(self, product, main, annex, settings):
        """ALLOW_NEGATIVE_STOCK lets the source go below zero."""
        settings.STOCK_LEDGER = {
            **settings.STOCK_LEDGER,
            'ALLOW_NEGATIVE_STOCK': True,
        }
        ledger.receive(5, product, main)

        ledger.transfer(8, product, main, annex)

        assert ledger.quantity(product, main) == -3
        assert ledger.quantity(product, annex) == 8


class TestTransferValidation:
    """Invalid requests change nothing."""

    def test_same_warehouse(self, product, main):
        ledger.receive(5, product, main)

        with pytest.raises(ValidationError) as exc:
            ledger.transfer(1, product, main, main)

        assert exc.value.code == 'SAME_WAREHOUSE'
        assert Transfer.objects.count() == 0

    def test_invalid_status(self, product, main, annex):
        ledger.receive(5, product, main)

        with pytest.raises(ValidationError) as exc:
            ledger.transfer(1, product, main, annex, status='Lost')

        assert exc.value.code == 'INVALID_STATUS'
        assert ledger.quantity(product, main) == 5

    @pytest.mark.parametrize('quantity', [0, -1])
    def test_invalid_quantity(self, product, main, annex, quantity):
        with pytest.raises(ValidationError) as exc:
            ledger.transfer(quantity, product, main, annex)

        assert exc.value.code == 'INVALID_QUANTITY'

    def test_deleted_product(self, product, main, annex):
        """A product removed from the catalog cannot be transferred."""
        ledger.receive(5, product, main)
        type(product).objects.filter(pk=product.pk).delete()

        with pytest.raises(ValidationError) as exc:
            ledger.transfer(1, product, main, annex)

        assert exc.value.code == 'INVALID_PRODUCT'
        assert Transfer.objects.count() == 0

    def test_unknown_destination(self, product, main):
        ledger.receive(5, product, main)

        with pytest.raises(ValidationError) as exc:
            ledger.transfer(1, product, main, 424242)

        assert exc.value.code == 'INVALID_WAREHOUSE'


class TestTransferStoreFailure:
    """A failing write rolls the whole transfer back."""

    def test_journal_failure_reports_step(self, product, main, annex, monkeypatch):
        ledger.receive(10, product, main)

        def broken_create(**kwargs):
            raise DatabaseError('disk full')

        monkeypatch.setattr(Movement.objects, 'create', broken_create)

        with pytest.raises(PersistenceError) as exc:
            ledger.transfer(4, product, main, annex)

        assert exc.value.code == 'STORE_FAILURE'
        assert exc.value.step == 'journal'
        assert exc.value.data['operation'] == 'transfer'
        assert Transfer.objects.count() == 0
        assert StockRecord.objects.get(warehouse=main).quantity == 10


class TestTransferLocking:
    """Both rows are locked together, in pk order, before any write."""

    def test_rows_locked_in_one_ordered_query(self, product, main, annex, monkeypatch):
        from stockledger.services import transfers

        ledger.receive(10, product, main)
        ledger.receive(1, product, annex)
        locked = []

        def recording_lock(qs):
            locked.append(qs)
            return qs.select_for_update()

        monkeypatch.setattr(transfers, 'lock_for_update', recording_lock)

        ledger.transfer(4, product, annex, main)

        assert len(locked) == 1
        assert locked[0].query.order_by == ('pk',)
        assert {record.warehouse_id for record in locked[0]} == {main.pk, annex.pk}
        assert ledger.quantity(product, main) == 14

    def test_lock_taken_before_first_write(self, product, main, annex, monkeypatch):
        """A failing lock query aborts before the transfer row is written."""
        from stockledger.services import transfers

        ledger.receive(10, product, main)

        def broken_lock(qs):
            raise DatabaseError('lock wait timeout')

        monkeypatch.setattr(transfers, 'lock_for_update', broken_lock)

        with pytest.raises(PersistenceError) as exc:
            ledger.transfer(4, product, main, annex)

        assert exc.value.step == 'stock_lock'
        assert Transfer.objects.count() == 0
        assert ledger.quantity(product, main) == 10
