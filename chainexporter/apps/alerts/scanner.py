import logging
from typing import Optional

from chainexporter.apps.chain.store import ChainStore
from chainexporter.apps.governance.models import ProposalStatus
from chainexporter.apps.governance.store import ProposalStore

logger = logging.getLogger(__name__)


class AlertScanner:
    """
    Raises one alert per unflagged row and flags it right after dispatch.

    Rows are handled one at a time, so a crash mid-scan only puts the row in
    flight at risk of a duplicate alert on the next scan.
    """

    def __init__(self, sink, chain_store: ChainStore, proposal_store: ProposalStore, address: Optional[str] = None):
        self.sink = sink
        self.chain_store = chain_store
        self.proposal_store = proposal_store
        self.address = address

    def alert_misses(self) -> int:
        """Alert on missed signatures, returns the number of alerts sent"""
        sent = 0
        for miss in self.chain_store.unalerted_misses(address=self.address):
            self.sink.send(
                'Missed block',
                {
                    'height': str(miss.height),
                    'time': miss.time.isoformat(),
                    'address': miss.address,
                },
            )
            self.chain_store.mark_miss_alerted(miss.id)
            sent += 1
            logger.info(f"alerted on miss #height: {miss.height}")

        return sent

    def alert_governance(self) -> int:
        """Alert on open proposals and silently flag finished ones"""
        sent = 0
        for proposal in self.proposal_store.unalerted():
            if proposal.proposal_status in ProposalStatus.TERMINAL:
                self.proposal_store.mark_alerted(proposal.id)
                logger.info(f"suppressed alert on {proposal.proposal_status.lower()} proposal #{proposal.id}")
                continue

            if proposal.proposal_status not in ProposalStatus.ACTIONABLE:
                continue

            self.sink.send(
                f"New governance proposal: {proposal.title}\n"
                f"Description: {proposal.description}\n"
                f"StartHeight: {proposal.voting_start_block}",
                {
                    'height': str(proposal.height),
                    'type': proposal.type,
                    'proposal_id': proposal.id,
                },
            )
            self.proposal_store.mark_alerted(proposal.id)
            sent += 1
            logger.info(f"alerted on proposal #{proposal.id}")

        return sent
