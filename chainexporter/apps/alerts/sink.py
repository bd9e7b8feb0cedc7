"""
Alert delivery through Sentry.

Alerts go to their own Sentry project, so the sink keeps a dedicated client
instead of reusing the one configured for error reporting.
"""
import logging
from typing import Dict, Optional

import sentry_sdk

from .exceptions import AlertDispatchError

logger = logging.getLogger(__name__)


class SentryAlertSink:
    """Sends alerts as Sentry messages tagged with the row's identifying fields"""

    def __init__(self, dsn: str, environment: Optional[str] = None, level: str = 'warning', **options):
        """
        Args:
            dsn: DSN of the alerting project
            environment: Sentry environment attached to every alert
            level: Sentry level of the alert messages
            **options: Extra ``sentry_sdk.Client`` options, such as a transport
        """
        self.level = level
        self.client = sentry_sdk.Client(dsn=dsn, environment=environment, default_integrations=False, **options)

    def send(self, message: str, tags: Dict[str, str]) -> str:
        """
        Capture a single alert.

        Args:
            message: Free-text alert message
            tags: Flat string tags attached to the event

        Returns:
            str: The Sentry event id

        Raises:
            AlertDispatchError: If the event could not be captured or was dropped
        """
        summary = message.splitlines()[0]
        try:
            # The capture resolves its client from the current scope
            with sentry_sdk.new_scope() as scope:
                scope.set_client(self.client)
                event_id = scope.capture_message(message, level=self.level, tags=tags)
        except Exception as e:
            raise AlertDispatchError(f"Failed to send alert '{summary}': {e}") from e

        if event_id is None:
            raise AlertDispatchError(f"Alert '{summary}' was dropped by the Sentry client")

        logger.debug(f"Captured alert event {event_id}")
        return event_id

    def close(self, timeout: float = 2.0):
        """Flush queued alerts before the process exits"""
        self.client.close(timeout=timeout)
