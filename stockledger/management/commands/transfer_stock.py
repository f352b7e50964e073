"""
Management command to transfer stock between warehouses.

Usage:
    python manage.py transfer_stock catalog.product:12 main annex 40
    python manage.py transfer_stock catalog.product:12 main annex 40 --status "In Transit"
"""

from django.apps import apps
from django.core.management.base import BaseCommand, CommandError

from stockledger import ledger
from stockledger.exceptions import StockError
from stockledger.models import MovementStatus, Warehouse
from stockledger.permissions import TRANSFER_STOCK, Actor, require


def _load_product(reference: str):
    """Resolve "app_label.model:pk"."""
    try:
        model_label, pk = reference.rsplit(':', 1)
        model = apps.get_model(model_label)
        pk = int(pk)
    except (ValueError, LookupError) as exc:
        raise CommandError(f'Invalid product reference {reference!r}: {exc}') from exc
    try:
        return model._default_manager.get(pk=pk)
    except model.DoesNotExist:
        raise CommandError(f'Product {reference} not found') from None


def _load_warehouse(code: str) -> Warehouse:
    try:
        return Warehouse.objects.get(code=code)
    except Warehouse.DoesNotExist:
        raise CommandError(f'Warehouse {code!r} not found') from None


class Command(BaseCommand):
    """Transfer stock between two warehouses."""

    help = 'Transfers a quantity of a product from one warehouse to another'

    def add_arguments(self, parser):
        parser.add_argument('product', help='app_label.model:pk')
        parser.add_argument('source', help='Source warehouse code')
        parser.add_argument('destination', help='Destination warehouse code')
        parser.add_argument('quantity', type=int)
        parser.add_argument('--status', default=MovementStatus.PENDING,
                            choices=MovementStatus.values)
        parser.add_argument('--role', default='Warehouse Manager')
        parser.add_argument('--actor-id', default='cli')

    def handle(self, *args, **options):
        actor = Actor(id=options['actor_id'], role=options['role'])
        try:
            require(actor, TRANSFER_STOCK)
        except StockError as exc:
            raise CommandError(str(exc)) from exc

        product = _load_product(options['product'])
        source = _load_warehouse(options['source'])
        destination = _load_warehouse(options['destination'])

        try:
            transfer = ledger.transfer(
                options['quantity'],
                product,
                source,
                destination,
                status=options['status'],
                actor=actor,
            )
        except StockError as exc:
            raise CommandError(str(exc)) from exc

        self.stdout.write(
            self.style.SUCCESS(
                f'Transfer #{transfer.pk}: {transfer.quantity} x {product} '
                f'{source.code} -> {destination.code} ({transfer.status})'
            )
        )
