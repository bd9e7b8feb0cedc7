import asyncio

from django.core.exceptions import ImproperlyConfigured
from django.core.management import call_command
from django.core.management.base import BaseCommand, CommandError

from chainexporter.apps.chain.client import ChainClient
from chainexporter.apps.peers.exporter import NetInfoExporter
from chainexporter.config import Services, load_config
from chainexporter.utils.scheduler import PeriodicTask, TaskRunner


class Command(BaseCommand):
    help = 'Periodically snapshot the peers of one or more nodes'

    def add_arguments(self, parser):
        parser.add_argument(
            '--once',
            action='store_true',
            help='Take one snapshot of every node and exit'
        )
        parser.add_argument(
            '--skip-migrate',
            action='store_true',
            help='Do not create or update the database schema on startup'
        )

    def handle(self, *args, **options):
        try:
            config = load_config(Services.NETINFO)
        except ImproperlyConfigured as e:
            raise CommandError(str(e))

        if not options['skip_migrate']:
            call_command('migrate', interactive=False, verbosity=0)

        exporter = NetInfoExporter({
            name: ChainClient(url, timeout=config.rpc_timeout)
            for name, url in config.node_names.items()
        })
        runner = TaskRunner([PeriodicTask('sync net info', exporter.sync, config.period)])

        self.stdout.write(f"Watching {len(exporter.clients)} node(s) every {config.period:g}s")

        if options['once']:
            results = asyncio.run(runner.run_once())[0] or {}
            failed = sorted(name for name, ok in results.items() if not ok)
            if failed:
                self.stdout.write(self.style.WARNING(f"Failed nodes: {', '.join(failed)}"))
            return

        try:
            asyncio.run(runner.start())
        except KeyboardInterrupt:
            self.stdout.write("\nStopping net info exporter")
