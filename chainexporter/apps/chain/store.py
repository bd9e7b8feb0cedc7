from typing import List, Optional, Sequence

from django.db import transaction
from django.db.models import Max

from .models import BlockInfo, EvidenceInfo, MissInfo
from .records import BlockRecord, EvidenceRecord, MissRecord


class ChainStore:
    """Translates chain records to and from their database rows"""

    def best_height(self) -> Optional[int]:
        """Highest stored block height, None when no block is stored"""
        return BlockInfo.objects.aggregate(best=Max('height'))['best']

    def save_block(self, block: BlockRecord, misses: Sequence[MissRecord], evidence: Sequence[EvidenceRecord]):
        """Store a block with its misses and evidence in a single transaction"""
        with transaction.atomic():
            BlockInfo.objects.create(
                block_id=block.id,
                height=block.height,
                proposer=block.proposer,
                time=block.time,
            )

            if evidence:
                EvidenceInfo.objects.bulk_create(
                    [EvidenceInfo(address=item.address, height=item.height) for item in evidence]
                )

            if misses:
                MissInfo.objects.bulk_create([
                    MissInfo(
                        address=miss.address,
                        height=miss.height,
                        alerted=miss.alerted,
                        proposer=miss.proposer,
                        time=miss.time,
                    )
                    for miss in misses
                ])

    def unalerted_misses(self, address: Optional[str] = None) -> List[MissRecord]:
        """Misses that have not triggered an alert yet, oldest first"""
        queryset = MissInfo.objects.filter(alerted=False)
        if address:
            queryset = queryset.filter(address=address)

        return [
            MissRecord(
                id=row.id,
                address=row.address,
                height=row.height,
                proposer=row.proposer,
                time=row.time,
                alerted=row.alerted,
            )
            for row in queryset.order_by('height', 'id')
        ]

    def mark_miss_alerted(self, miss_id: int) -> bool:
        """Flag a single miss as alerted"""
        return MissInfo.objects.filter(id=miss_id, alerted=False).update(alerted=True) == 1
