import asyncio

from django.core.exceptions import ImproperlyConfigured
from django.core.management import call_command
from django.core.management.base import BaseCommand, CommandError

from chainexporter.apps.chain.client import ChainClient
from chainexporter.apps.chain.ingestor import BlockIngestor
from chainexporter.apps.chain.progress import ProgressTracker
from chainexporter.apps.chain.store import ChainStore
from chainexporter.apps.chain.sync import SyncDriver
from chainexporter.apps.governance.lcd import LcdClient
from chainexporter.apps.governance.store import ProposalStore
from chainexporter.apps.governance.sync import GovernanceSync
from chainexporter.config import Services, load_config
from chainexporter.utils.scheduler import PeriodicTask, TaskRunner


class Command(BaseCommand):
    help = 'Sync blocks, missed signatures, evidence and governance proposals from a node'

    def add_arguments(self, parser):
        parser.add_argument(
            '--once',
            action='store_true',
            help='Run one block sync and one governance sync, then exit'
        )
        parser.add_argument(
            '--skip-migrate',
            action='store_true',
            help='Do not create or update the database schema on startup'
        )

    def handle(self, *args, **options):
        try:
            config = load_config(Services.EXPORTER)
        except ImproperlyConfigured as e:
            raise CommandError(str(e))

        if not options['skip_migrate']:
            call_command('migrate', interactive=False, verbosity=0)

        client = ChainClient(config.node_url, timeout=config.rpc_timeout)
        store = ChainStore()
        driver = SyncDriver(
            ProgressTracker(client, store, start_height=config.start_height),
            BlockIngestor(client, store),
        )
        governance = GovernanceSync(LcdClient(config.lcd_url, timeout=config.rpc_timeout), ProposalStore())

        runner = TaskRunner([
            PeriodicTask(
                'sync blockchain',
                driver.sync,
                config.sync_interval,
                # Keep going while there is progress, back off once caught up or failing
                rerun=lambda result: result is not None and result.made_progress and result.error is None,
            ),
            PeriodicTask('sync governance proposals', governance.sync, config.governance_interval),
        ])

        self.stdout.write(f"Syncing from {config.node_url} starting at height {config.start_height}")

        if options['once']:
            results = asyncio.run(runner.run_once())
            sync_result = results[0]
            if sync_result is None or sync_result.error is not None:
                raise CommandError('Block sync failed, see log for details')
            self.stdout.write(self.style.SUCCESS(f"Synced {sync_result.synced} block(s)"))
            return

        try:
            asyncio.run(runner.start())
        except KeyboardInterrupt:
            self.stdout.write("\nStopping exporter")
