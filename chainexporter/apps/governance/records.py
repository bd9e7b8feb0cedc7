from dataclasses import dataclass


@dataclass
class ProposalRecord:
    id: str
    type: str
    height: int
    title: str
    description: str
    proposal_type: str
    proposal_status: str
    voting_start_block: str
    alerted: bool = False
