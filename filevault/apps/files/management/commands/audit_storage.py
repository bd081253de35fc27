"""Management command to report records whose bytes are missing."""

import logging
from typing import Any, Final

from django.core.management.base import BaseCommand

from filevault.apps.files.logic.file_operations import find_orphaned_records
from filevault.apps.files.models import FileRecord

_DEFAULT_BATCH_SIZE: Final = 1000

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    """Report file records that point to missing storage bytes."""

    help = 'Report file records whose bytes are missing from storage'

    def add_arguments(self, parser: Any) -> None:
        """Add command line arguments.

        Args:
            parser: Argument parser.
        """
        parser.add_argument(
            '--owner',
            help='Only check files owned by this email',
        )
        parser.add_argument(
            '--batch-size',
            type=int,
            default=_DEFAULT_BATCH_SIZE,
            help=f'Max records to check (default: {_DEFAULT_BATCH_SIZE})',
        )

    def handle(self, *args: Any, **options: Any) -> None:
        """Execute the audit command.

        Args:
            args: Positional arguments (unused).
            options: Command options.
        """
        owner_email = options['owner']
        batch_size = options['batch_size']

        records = FileRecord.objects.select_related('owner').order_by('id')
        if owner_email:
            records = records.filter(owner__email=owner_email)

        checked_ids = list(records.values_list('id', flat=True)[:batch_size])
        self.stdout.write(f'Checking {len(checked_ids)} file records')

        orphaned = find_orphaned_records(
            records.filter(id__in=checked_ids),
        )

        for record in orphaned:
            self.stdout.write(
                f'Missing bytes: ID={record.pk} '
                f'{record.display_name} '
                f'(owner: {record.owner.email}, path: {record.storage_name})',
            )
            logger.warning(
                'Record without stored bytes: ID=%d, path=%s',
                record.pk,
                record.storage_name,
            )

        if orphaned:
            self.stdout.write(
                self.style.WARNING(
                    f'Found {len(orphaned)} records with missing bytes',
                ),
            )
        else:
            self.stdout.write(
                self.style.SUCCESS('All file records have stored bytes'),
            )
