import asyncio

from django.core.exceptions import ImproperlyConfigured
from django.core.management.base import BaseCommand, CommandError

from chainexporter.apps.alerts.scanner import AlertScanner
from chainexporter.apps.alerts.sink import SentryAlertSink
from chainexporter.apps.chain.store import ChainStore
from chainexporter.apps.governance.store import ProposalStore
from chainexporter.config import Services, load_config
from chainexporter.utils.scheduler import PeriodicTask, TaskRunner


class Command(BaseCommand):
    help = 'Send Sentry alerts for missed signatures and new governance proposals'

    def add_arguments(self, parser):
        parser.add_argument(
            '--once',
            action='store_true',
            help='Scan once and exit'
        )

    def handle(self, *args, **options):
        try:
            config = load_config(Services.ALERTER)
        except ImproperlyConfigured as e:
            raise CommandError(str(e))

        sink = SentryAlertSink(config.alert_sentry_dsn)
        scanner = AlertScanner(sink, ChainStore(), ProposalStore(), address=config.alert_address)

        runner = TaskRunner([
            PeriodicTask('alerting on misses', scanner.alert_misses, config.alert_interval),
            PeriodicTask('alerting on governance', scanner.alert_governance, config.alert_interval),
        ])

        if config.alert_address:
            self.stdout.write(f"Alerting on misses by {config.alert_address}")
        else:
            self.stdout.write("Alerting on misses by all validators")

        try:
            if options['once']:
                misses, proposals = asyncio.run(runner.run_once())
                self.stdout.write(self.style.SUCCESS(
                    f"Sent {misses or 0} miss alert(s) and {proposals or 0} proposal alert(s)"
                ))
            else:
                asyncio.run(runner.start())
        except KeyboardInterrupt:
            self.stdout.write("\nStopping alerter")
        finally:
            sink.close()
