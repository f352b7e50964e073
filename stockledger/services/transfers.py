"""
Stock transfers — move a product between two warehouses.

All steps run in one transaction under both key locks, so readers never
see the destination credited while the source is still undebited. Both
stock rows are row-locked together, in pk order, before the first write.
"""

import logging

from django.contrib.contenttypes.models import ContentType
from django.db import transaction

from stockledger.adapters.audit import emit
from stockledger.exceptions import ValidationError
from stockledger.locks import key_lock, lock_for_update, stock_key
from stockledger.models.enums import MovementStatus
from stockledger.models.movement import Movement
from stockledger.models.stock import StockRecord
from stockledger.models.transfer import Transfer
from stockledger.services.common import (
    apply_delta,
    resolve_warehouse,
    tracked_steps,
    validate_product,
    validate_quantity,
)

logger = logging.getLogger('stockledger')


class StockTransfers:
    """Transfer methods."""

    @classmethod
    def transfer(cls, quantity, product, source, destination,
                 status=MovementStatus.PENDING, actor=None) -> Transfer:
        """
        Transfer quantity of product from source to destination.

        1. Lock both StockRecords in one query ordered by pk, then
           insert the Transfer audit row
        2. If source has a StockRecord: debit it and journal
           (source only, -quantity, IN_TRANSIT). Otherwise skip both.
        3. Credit the destination StockRecord, creating it if needed
        4. Journal (destination only, +quantity, RECEIVED)

        Raises:
            ValidationError: bad quantity, status, product or warehouses
            InvariantViolation('NEGATIVE_STOCK'): source would go negative
                (unless ALLOW_NEGATIVE_STOCK); the whole transfer is rolled back
            PersistenceError: store failure; ``step`` names the sub-step
                and the whole transfer is rolled back
        """
        validate_quantity(quantity)
        if status not in MovementStatus.values:
            raise ValidationError('INVALID_STATUS', current=status, expected=MovementStatus.values)
        validate_product(product, check_exists=True)
        source = resolve_warehouse(source)
        destination = resolve_warehouse(destination)
        if source.pk == destination.pk:
            raise ValidationError('SAME_WAREHOUSE', warehouse_id=source.pk)

        actor_id = str(actor.id) if actor is not None else ''

        with tracked_steps('transfer', product_id=product.pk,
                           source_id=source.pk, destination_id=destination.pk) as steps:
            ct = ContentType.objects.get_for_model(product)
            keys = (stock_key(product, source), stock_key(product, destination))

            with key_lock(*keys), transaction.atomic():
                steps.enter('stock_lock')
                locked = {
                    record.warehouse_id: record
                    for record in lock_for_update(
                        StockRecord.objects.for_product(product)
                        .filter(warehouse__in=[source, destination])
                        .order_by('pk')
                    )
                }

                steps.enter('transfer_record')
                transfer = Transfer.objects.create(
                    content_type=ct,
                    object_id=product.pk,
                    source=source,
                    destination=destination,
                    quantity=quantity,
                    status=status,
                    actor_id=actor_id,
                )

                steps.enter('source_debit')
                source_record = locked.get(source.pk)
                if source_record is not None:
                    apply_delta(source_record, -quantity)
                    steps.enter('journal')
                    Movement.objects.create(
                        content_type=ct,
                        object_id=product.pk,
                        source=source,
                        destination=None,
                        quantity=-quantity,
                        status=MovementStatus.IN_TRANSIT,
                        transfer=transfer,
                        reason=f"Transfer #{transfer.pk} out",
                        actor_id=actor_id,
                    )
                else:
                    logger.warning(
                        "stock.transfer.unsourced",
                        extra={
                            "transfer_id": transfer.pk,
                            "product": str(product),
                            "source": source.code,
                        },
                    )

                steps.enter('destination_credit')
                dest_record = locked.get(destination.pk)
                if dest_record is None:
                    StockRecord.objects.create(
                        content_type=ct,
                        object_id=product.pk,
                        warehouse=destination,
                        quantity=quantity,
                    )
                else:
                    apply_delta(dest_record, quantity)

                steps.enter('journal')
                Movement.objects.create(
                    content_type=ct,
                    object_id=product.pk,
                    source=None,
                    destination=destination,
                    quantity=quantity,
                    status=MovementStatus.RECEIVED,
                    transfer=transfer,
                    reason=f"Transfer #{transfer.pk} in",
                    actor_id=actor_id,
                )

        logger.info(
            "stock.transfer",
            extra={
                "transfer_id": transfer.pk,
                "product": str(product),
                "qty": quantity,
                "source": source.code,
                "destination": destination.code,
                "status": status,
            },
        )
        emit(
            actor,
            'stock.transfer',
            f"Transferred product {product.pk} from warehouse {source.pk} to {destination.pk} "
            f"quantity {quantity} status {status}",
        )
        return transfer
