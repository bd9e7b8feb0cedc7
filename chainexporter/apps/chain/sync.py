import logging
from dataclasses import dataclass
from typing import Optional

from django.db import DatabaseError

from .exceptions import ChainClientError, DataIntegrityError
from .ingestor import BlockIngestor
from .progress import ProgressTracker

logger = logging.getLogger(__name__)

SYNC_ERRORS = (ChainClientError, DataIntegrityError, DatabaseError)


@dataclass
class SyncResult:
    start: Optional[int] = None
    end: Optional[int] = None
    synced: int = 0
    error: Optional[Exception] = None

    @property
    def caught_up(self) -> bool:
        return self.error is None and (self.start is None or self.start > self.end)

    @property
    def made_progress(self) -> bool:
        return self.synced > 0


class SyncDriver:
    """Ingests every pending height in order, stopping at the first failure"""

    def __init__(self, tracker: ProgressTracker, ingestor: BlockIngestor):
        self.tracker = tracker
        self.ingestor = ingestor

    def sync(self) -> SyncResult:
        """Run one sync pass; errors are logged and returned, not raised"""
        result = SyncResult()
        try:
            result.start, result.end = self.tracker.next_heights()
        except SYNC_ERRORS as e:
            logger.error(f"Failed to determine sync range: {e}")
            result.error = e
            return result

        if result.start > result.end:
            logger.debug(f"Caught up at height {result.start - 1}")
            return result

        for height in range(result.start, result.end + 1):
            try:
                self.ingestor.ingest(height)
            except SYNC_ERRORS as e:
                logger.error(f"Failed to ingest block {height}: {e}")
                result.error = e
                break
            result.synced += 1
            logger.info(f"synced block {height}/{result.end}")

        return result
