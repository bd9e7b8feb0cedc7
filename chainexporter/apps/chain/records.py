"""
Plain records exchanged between the chain client, the ingestor and the store.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional


@dataclass
class NodeStatus:
    latest_height: int
    network: Optional[str] = None
    catching_up: bool = False


@dataclass
class EvidenceData:
    address: str
    height: int


@dataclass
class BlockData:
    block_id: str
    height: int
    time: datetime
    proposer_address: str
    # One entry per validator slot of the previous block's commit, True if signed
    commit_slots: List[bool] = field(default_factory=list)
    evidence: List[EvidenceData] = field(default_factory=list)


@dataclass
class Validator:
    address: str
    voting_power: int = 0


@dataclass
class ValidatorSet:
    height: Optional[int]
    validators: List[Validator] = field(default_factory=list)


@dataclass
class PeerData:
    peer_id: str
    listen_addr: str = ""
    network: str = ""
    version: str = ""
    channels: str = ""
    moniker: str = ""
    is_outbound: bool = False
    send_data: dict = field(default_factory=dict)
    recv_data: dict = field(default_factory=dict)
    channel_data: list = field(default_factory=list)


@dataclass
class BlockRecord:
    id: str
    height: int
    proposer: str
    time: datetime


@dataclass
class MissRecord:
    address: str
    height: int
    proposer: str
    time: datetime
    alerted: bool = False
    id: Optional[int] = None


@dataclass
class EvidenceRecord:
    address: str
    height: int
