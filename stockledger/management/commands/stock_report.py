"""
Management command to print ledger reports.

Usage:
    python manage.py stock_report low-stock
    python manage.py stock_report movements --limit 50
    python manage.py stock_report transfers
    python manage.py stock_report valuation --role "Warehouse Manager"
"""

from django.core.management.base import BaseCommand, CommandError

from stockledger import ledger
from stockledger.exceptions import StockError
from stockledger.permissions import VIEW_REPORTS, VIEW_STOCK, Actor, require
from stockledger.protocols.product import get_product_attr

REPORT_CAPABILITIES = {
    'low-stock': VIEW_STOCK,
    'transfers': VIEW_STOCK,
    'movements': VIEW_REPORTS,
    'valuation': VIEW_REPORTS,
}


class Command(BaseCommand):
    """Print a ledger report."""

    help = 'Prints low-stock alerts, movement history, transfers or inventory valuation'

    def add_arguments(self, parser):
        parser.add_argument('report', choices=sorted(REPORT_CAPABILITIES))
        parser.add_argument('--limit', type=int, default=None,
                            help='Max movement rows')
        parser.add_argument('--role', default='Admin',
                            help='Role whose capabilities apply')
        parser.add_argument('--actor-id', default='cli')

    def handle(self, *args, **options):
        report = options['report']
        actor = Actor(id=options['actor_id'], role=options['role'])
        try:
            require(actor, REPORT_CAPABILITIES[report])
        except StockError as exc:
            raise CommandError(str(exc)) from exc

        handler = getattr(self, '_' + report.replace('-', '_'))
        count = handler(options)
        self.stdout.write(self.style.SUCCESS(f'{count} row(s)'))

    def _low_stock(self, options):
        rows = ledger.list_low_stock()
        for row in rows:
            threshold = get_product_attr(row.product, 'low_stock_threshold')
            self.stdout.write(
                f'{row.product}\t{row.warehouse.code}\t{row.quantity}'
                f'\tthreshold={threshold}\tcapacity={row.warehouse.capacity}'
            )
        return len(rows)

    def _movements(self, options):
        entries = ledger.list_movements(limit=options['limit'])
        for entry in entries:
            self.stdout.write(
                f'{entry.created_at:%Y-%m-%d %H:%M}\t{entry.product_name}'
                f'\t{entry.source_name or "-"} -> {entry.destination_name or "-"}'
                f'\t{entry.quantity:+d}\t{entry.status}'
            )
        return len(entries)

    def _transfers(self, options):
        transfers = ledger.list_transfers()
        for transfer in transfers:
            self.stdout.write(
                f'{transfer.transfer_date:%Y-%m-%d %H:%M}\t{transfer.object_id}'
                f'\t{transfer.source.code} -> {transfer.destination.code}'
                f'\t{transfer.quantity}\t{transfer.status}'
            )
        return len(transfers)

    def _valuation(self, options):
        rows = ledger.inventory_value()
        for row in rows:
            self.stdout.write(
                f'{row.product_name}\t{row.total_quantity}\t{row.total_value:.2f}'
            )
        return len(rows)
