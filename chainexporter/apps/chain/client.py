import logging
from typing import Any, Dict, List, Optional

import requests
from django.utils.dateparse import parse_datetime

from .exceptions import ChainClientError
from .records import BlockData, EvidenceData, NodeStatus, PeerData, Validator, ValidatorSet

logger = logging.getLogger(__name__)

# Tendermint BlockIDFlag values used by the `signatures` commit layout
BLOCK_ID_FLAG_ABSENT = 1

VALIDATORS_PER_PAGE = 100


class ChainClient:
    """Read-only client for the Tendermint RPC endpoints of a node"""

    def __init__(self, rpc_url: str, timeout: float = 5.0, session: Optional[requests.Session] = None):
        self.rpc_url = rpc_url.rstrip('/')
        self.timeout = timeout
        self.session = session or requests.Session()

    def status(self) -> NodeStatus:
        """Get the node's latest height"""
        result = self.rpc_get('status')
        try:
            sync_info = result['sync_info']
            return NodeStatus(
                latest_height=int(sync_info['latest_block_height']),
                network=result.get('node_info', {}).get('network'),
                catching_up=bool(sync_info.get('catching_up', False)),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ChainClientError(f"Unexpected status response: {e}") from e

    def block(self, height: int) -> BlockData:
        """Get the block at the given height"""
        result = self.rpc_get('block', {'height': height})
        try:
            return parse_block(result)
        except (KeyError, TypeError, ValueError) as e:
            raise ChainClientError(f"Unexpected block response at height {height}: {e}") from e

    def validators(self, height: int) -> ValidatorSet:
        """Get the full validator set at the given height, following pagination"""
        validators: List[Validator] = []
        reported_height = None
        page = 1

        while True:
            result = self.rpc_get('validators', {'height': height, 'page': page, 'per_page': VALIDATORS_PER_PAGE})
            try:
                entries = result['validators']
                reported_height = int(result['block_height']) if 'block_height' in result else reported_height
                validators.extend(
                    Validator(address=entry['address'], voting_power=int(entry.get('voting_power', 0)))
                    for entry in entries
                )
                total = int(result['total']) if 'total' in result else None
            except (KeyError, TypeError, ValueError) as e:
                raise ChainClientError(f"Unexpected validators response at height {height}: {e}") from e

            # Older nodes return the whole set without a total
            if total is None or len(validators) >= total or not entries:
                break
            page += 1

        return ValidatorSet(height=reported_height, validators=validators)

    def net_info(self) -> List[PeerData]:
        """Get the node's current peers"""
        result = self.rpc_get('net_info')
        try:
            return [parse_peer(peer) for peer in result.get('peers') or []]
        except (KeyError, TypeError, ValueError) as e:
            raise ChainClientError(f"Unexpected net_info response: {e}") from e

    def rpc_get(self, method: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Call an RPC endpoint over HTTP GET and return its `result` member"""
        url = f"{self.rpc_url}/{method}"
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            raise ChainClientError(f"Request to {url} failed: {e}") from e

        try:
            payload = response.json()
        except ValueError:
            raise ChainClientError(f"Non-JSON response from {url} (HTTP {response.status_code})")

        if not isinstance(payload, dict):
            raise ChainClientError(f"Unexpected response from {url}: {payload!r}")
        if payload.get('error'):
            raise ChainClientError(f"RPC error from {method}: {payload['error']}")
        if response.status_code >= 400:
            raise ChainClientError(f"HTTP {response.status_code} from {url}")
        if not isinstance(payload.get('result'), dict):
            raise ChainClientError(f"Missing result in response from {url}")

        return payload['result']


def format_block_id(block_id: Dict[str, Any]) -> str:
    """Render a block id the way Tendermint prints it: HASH:PARTS_TOTAL:PARTS_HASH"""
    parts = block_id.get('parts') or {}
    return f"{block_id['hash']}:{parts.get('total', 0)}:{parts.get('hash', '')}"


def parse_block(result: Dict[str, Any]) -> BlockData:
    """Parse a `block` result in either the legacy or the current layout"""
    block = result['block']
    header = block['header']
    block_id = result.get('block_id') or result['block_meta']['block_id']

    time = parse_datetime(header['time'])
    if time is None:
        raise ValueError(f"invalid block time {header['time']!r}")

    last_commit = block.get('last_commit') or {}
    if 'signatures' in last_commit:
        commit_slots = [
            signature is not None and int(signature.get('block_id_flag', 0)) != BLOCK_ID_FLAG_ABSENT
            for signature in last_commit['signatures'] or []
        ]
    else:
        commit_slots = [precommit is not None for precommit in last_commit.get('precommits') or []]

    evidence_list = (block.get('evidence') or {}).get('evidence') or []
    evidence = [item for entry in evidence_list for item in parse_evidence(entry)]

    return BlockData(
        block_id=format_block_id(block_id),
        height=int(header['height']),
        time=time,
        proposer_address=header['proposer_address'],
        commit_slots=commit_slots,
        evidence=evidence,
    )


def parse_evidence(entry: Dict[str, Any]) -> List[EvidenceData]:
    """Attribute an evidence entry to the offending validator(s)"""
    value = entry.get('value', entry)

    if 'byzantine_validators' in value:
        # Light client attacks implicate a set of validators at the common height
        height = int(value['common_height'])
        return [EvidenceData(address=validator['address'], height=height)
                for validator in value['byzantine_validators'] or []]

    vote = value.get('vote_a') or value.get('VoteA')
    if vote is None:
        raise ValueError(f"unsupported evidence type {entry.get('type')!r}")

    height = value.get('height', vote['height'])
    return [EvidenceData(address=vote['validator_address'], height=int(height))]


def parse_peer(peer: Dict[str, Any]) -> PeerData:
    node_info = peer['node_info']
    connection_status = peer.get('connection_status') or {}
    return PeerData(
        peer_id=node_info['id'],
        listen_addr=node_info.get('listen_addr', ''),
        network=node_info.get('network', ''),
        version=node_info.get('version', ''),
        channels=node_info.get('channels', ''),
        moniker=node_info.get('moniker', ''),
        is_outbound=bool(peer.get('is_outbound', False)),
        send_data=connection_status.get('SendMonitor') or {},
        recv_data=connection_status.get('RecvMonitor') or {},
        channel_data=connection_status.get('Channels') or [],
    )
