import logging
from typing import Tuple

logger = logging.getLogger(__name__)


class ProgressTracker:
    """Works out which heights still need to be ingested.

    Progress is always read back from the store so restarts resume where the
    last committed block left off.
    """

    def __init__(self, client, store, start_height: int = 2):
        self.client = client
        self.store = store
        self.start_height = start_height

    def best_height(self) -> int:
        """Highest stored height, or the height just below the floor"""
        best = self.store.best_height()
        return best if best is not None else self.start_height - 1

    def next_heights(self) -> Tuple[int, int]:
        """
        Inclusive range of heights left to ingest.

        Returns:
            Tuple[int, int]: ``(from, to)``, empty (``from > to``) when caught up
        """
        best = self.best_height()
        latest = self.client.status().latest_height
        logger.debug(f"Stored height {best}, node height {latest}")
        return best + 1, latest
