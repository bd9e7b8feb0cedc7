from dataclasses import dataclass, field
from datetime import timedelta
from typing import Dict, List, Set, Tuple

import pytest
from sentry_sdk.transport import Transport

from chainexporter.apps.alerts.exceptions import AlertDispatchError
from chainexporter.apps.chain.exceptions import ChainClientError
from chainexporter.apps.chain.factories import GENESIS_TIME
from chainexporter.apps.chain.ingestor import BlockIngestor
from chainexporter.apps.chain.progress import ProgressTracker
from chainexporter.apps.chain.records import BlockData, EvidenceData, NodeStatus, Validator, ValidatorSet
from chainexporter.apps.chain.store import ChainStore
from chainexporter.apps.chain.sync import SyncDriver
from chainexporter.apps.governance.store import ProposalStore

VALIDATORS = ["AAAA", "BBBB", "CCCC", "DDDD"]


class FakeNode:
    """In-memory stand-in for the chain client"""

    def __init__(self, validators=None, latest_height: int = 5):
        self.addresses = list(validators or VALIDATORS)
        self.latest_height = latest_height
        # signed block height -> validator indexes missing from the next block's commit
        self.missing: Dict[int, Set[int]] = {}
        self.evidence: Dict[int, List[EvidenceData]] = {}
        self.failures: Dict[int, Exception] = {}
        self.calls: List[Tuple[str, int]] = []

    def status(self) -> NodeStatus:
        return NodeStatus(latest_height=self.latest_height)

    def validators(self, height: int) -> ValidatorSet:
        self.calls.append(('validators', height))
        return ValidatorSet(height=height, validators=[Validator(address=a, voting_power=10) for a in self.addresses])

    def block(self, height: int) -> BlockData:
        self.calls.append(('block', height))
        if height in self.failures:
            raise self.failures.pop(height)
        if height > self.latest_height:
            raise ChainClientError(f"Height {height} must be less than or equal to the current blockchain height")

        missing = self.missing.get(height - 1, set())
        return BlockData(
            block_id=f"HASH{height}:1:PARTS{height}",
            height=height,
            time=self.block_time(height),
            proposer_address=self.addresses[height % len(self.addresses)],
            commit_slots=[index not in missing for index in range(len(self.addresses))],
            evidence=list(self.evidence.get(height, [])),
        )

    @staticmethod
    def block_time(height: int):
        return GENESIS_TIME + timedelta(seconds=6 * height)


@dataclass
class RecordingSink:
    sent: List[Tuple[str, Dict[str, str]]] = field(default_factory=list)
    fail: bool = False

    def send(self, message, tags):
        if self.fail:
            raise AlertDispatchError("sentry unavailable")
        self.sent.append((message, tags))
        return f"event-{len(self.sent)}"


class RecordingTransport(Transport):
    """Keeps Sentry envelopes in memory instead of posting them"""

    def __init__(self, options=None):
        super().__init__(options)
        self.envelopes = []

    def capture_envelope(self, envelope):
        self.envelopes.append(envelope)

    @property
    def events(self):
        return [envelope.get_event() for envelope in self.envelopes if envelope.get_event() is not None]


@pytest.fixture
def fake_node():
    return FakeNode()


@pytest.fixture
def chain_store():
    return ChainStore()


@pytest.fixture
def proposal_store():
    return ProposalStore()


@pytest.fixture
def ingestor(fake_node, chain_store):
    return BlockIngestor(fake_node, chain_store)


@pytest.fixture
def sync_driver(fake_node, chain_store, ingestor):
    return SyncDriver(ProgressTracker(fake_node, chain_store, start_height=2), ingestor)


@pytest.fixture
def recording_sink():
    return RecordingSink()


@pytest.fixture
def sentry_transport():
    return RecordingTransport()
