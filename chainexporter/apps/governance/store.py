from typing import Iterable, List

from django.db import transaction

from .models import Proposal, ProposalStatus
from .records import ProposalRecord


class ProposalStore:
    """Translates proposal records to and from their database rows"""

    def upsert(self, proposals: Iterable[ProposalRecord]) -> int:
        """
        Insert new proposals, refresh the status of known ones.

        A known proposal moving into a different actionable status is
        unflagged, so each of Active, DepositPeriod and VotingPeriod raises
        its own alert.
        """
        rows = {
            record.id: Proposal(
                id=record.id,
                type=record.type,
                height=record.height,
                alerted=record.alerted,
                title=record.title,
                description=record.description,
                proposal_type=record.proposal_type,
                proposal_status=record.proposal_status,
                voting_start_block=record.voting_start_block,
            )
            for record in proposals
        }
        if not rows:
            return 0

        with transaction.atomic():
            known = dict(Proposal.objects.filter(id__in=list(rows)).values_list('id', 'proposal_status'))
            reopened = [
                proposal_id for proposal_id, status in known.items()
                if rows[proposal_id].proposal_status != status
                and rows[proposal_id].proposal_status in ProposalStatus.ACTIONABLE
            ]

            Proposal.objects.bulk_create(
                list(rows.values()),
                update_conflicts=True,
                unique_fields=['id'],
                update_fields=['proposal_status'],
            )
            if reopened:
                Proposal.objects.filter(id__in=reopened).update(alerted=False)

        return len(rows)

    def unalerted(self) -> List[ProposalRecord]:
        """Proposals that have neither been alerted nor suppressed yet"""
        return [
            ProposalRecord(
                id=row.id,
                type=row.type,
                height=row.height,
                title=row.title,
                description=row.description,
                proposal_type=row.proposal_type,
                proposal_status=row.proposal_status,
                voting_start_block=row.voting_start_block,
                alerted=row.alerted,
            )
            for row in Proposal.objects.filter(alerted=False).order_by('height', 'id')
        ]

    def mark_alerted(self, proposal_id: str) -> bool:
        return Proposal.objects.filter(id=proposal_id, alerted=False).update(alerted=True) == 1
