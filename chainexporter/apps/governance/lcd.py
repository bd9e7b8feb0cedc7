import logging
from typing import Any, Dict, List, Optional

import requests

from chainexporter.apps.chain.exceptions import ChainClientError

from .records import ProposalRecord

logger = logging.getLogger(__name__)


class LcdClient:
    """Client for the governance endpoints of the LCD REST service"""

    def __init__(self, lcd_url: str, timeout: float = 5.0, session: Optional[requests.Session] = None):
        self.lcd_url = lcd_url.rstrip('/')
        self.timeout = timeout
        self.session = session or requests.Session()

    def proposals(self) -> List[ProposalRecord]:
        """Fetch every proposal known to the LCD"""
        url = f"{self.lcd_url}/gov/proposals"
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as e:
            raise ChainClientError(f"Request to {url} failed: {e}") from e
        except ValueError as e:
            raise ChainClientError(f"Non-JSON response from {url}") from e

        # Newer LCDs wrap the list as {"height": ..., "result": [...]}
        if isinstance(payload, dict):
            payload = payload.get('result')
        if payload is None:
            return []
        if not isinstance(payload, list):
            raise ChainClientError(f"Unexpected proposals response from {url}")

        try:
            return [parse_proposal(item) for item in payload]
        except (KeyError, TypeError, ValueError) as e:
            raise ChainClientError(f"Unexpected proposal in response from {url}: {e}") from e


def parse_proposal(item: Dict[str, Any]) -> ProposalRecord:
    """Project an LCD proposal object into a proposal record"""
    details = item['value']
    return ProposalRecord(
        id=str(details['proposal_id']),
        type=item.get('type', ''),
        height=int(details.get('submit_block') or 0),
        title=details.get('title', ''),
        description=details.get('description', ''),
        proposal_type=details.get('proposal_type', ''),
        proposal_status=details.get('proposal_status', ''),
        voting_start_block=str(details.get('voting_start_block') or ''),
        alerted=False,
    )
