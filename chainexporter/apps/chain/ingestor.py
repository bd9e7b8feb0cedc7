import logging
from dataclasses import dataclass
from typing import List

from .exceptions import DataIntegrityError
from .records import BlockData, BlockRecord, EvidenceRecord, MissRecord, ValidatorSet

logger = logging.getLogger(__name__)


@dataclass
class IngestResult:
    height: int
    misses: int
    evidence: int


class BlockIngestor:
    """
    Ingests one height at a time.

    Signatures for the block at ``H-1`` are only recorded in the last commit
    of the block at ``H``, so ingesting ``H`` reads both blocks and the
    validator set at ``H-1``. The node must already report
    ``latest_height >= H``.
    """

    def __init__(self, client, store):
        self.client = client
        self.store = store

    def ingest(self, height: int) -> IngestResult:
        """
        Fetch, derive and atomically store the records for a height.

        Raises:
            ValueError: If height is below 2
            ChainClientError: If the node can't serve the data
            DataIntegrityError: If heights or commit slots don't line up
        """
        if height < 2:
            raise ValueError(f"Cannot ingest height {height}, a previous block is required")
        prev_height = height - 1

        validator_set = self.client.validators(prev_height)
        block = self.client.block(prev_height)
        next_block = self.client.block(height)

        self.check_alignment(prev_height, validator_set, block, next_block)

        block_record = BlockRecord(
            id=block.block_id,
            height=height,
            proposer=block.proposer_address,
            time=block.time,
        )
        misses = self.find_misses(validator_set, block, next_block)
        evidence = [EvidenceRecord(address=item.address, height=item.height) for item in next_block.evidence]

        self.store.save_block(block_record, misses, evidence)

        if misses:
            logger.info(f"Block {prev_height}: {len(misses)} missed signature(s)")
        if evidence:
            logger.warning(f"Block {height} carries {len(evidence)} evidence item(s)")

        return IngestResult(height=height, misses=len(misses), evidence=len(evidence))

    @staticmethod
    def check_alignment(prev_height: int, validator_set: ValidatorSet, block: BlockData, next_block: BlockData):
        if block.height != prev_height:
            raise DataIntegrityError(f"Requested block {prev_height}, node returned {block.height}")
        if next_block.height != prev_height + 1:
            raise DataIntegrityError(f"Requested block {prev_height + 1}, node returned {next_block.height}")
        if validator_set.height is not None and validator_set.height != prev_height:
            raise DataIntegrityError(
                f"Requested validators at {prev_height}, node returned height {validator_set.height}"
            )
        if len(next_block.commit_slots) < len(validator_set.validators):
            raise DataIntegrityError(
                f"Block {next_block.height} commits {len(next_block.commit_slots)} slots "
                f"for {len(validator_set.validators)} validators"
            )

    @staticmethod
    def find_misses(validator_set: ValidatorSet, block: BlockData, next_block: BlockData) -> List[MissRecord]:
        """Validators whose commit slot in the next block is empty"""
        return [
            MissRecord(
                address=validator.address,
                height=block.height,
                proposer=block.proposer_address,
                time=block.time,
                alerted=False,
            )
            for index, validator in enumerate(validator_set.validators)
            if not next_block.commit_slots[index]
        ]
