import logging

from .lcd import LcdClient
from .store import ProposalStore

logger = logging.getLogger(__name__)


class GovernanceSync:
    """Mirrors the LCD's governance proposals into the store"""

    def __init__(self, lcd: LcdClient, store: ProposalStore):
        self.lcd = lcd
        self.store = store

    def sync(self) -> int:
        """Fetch and upsert all proposals, returns how many were seen"""
        proposals = self.lcd.proposals()
        count = self.store.upsert(proposals)
        logger.debug(f"Upserted {count} governance proposal(s)")
        return count
