from unittest.mock import Mock

import pytest
import requests

from chainexporter.apps.alerts.scanner import AlertScanner
from chainexporter.apps.chain.exceptions import ChainClientError
from chainexporter.apps.governance.factories import ProposalFactory
from chainexporter.apps.governance.lcd import LcdClient, parse_proposal
from chainexporter.apps.governance.models import Proposal, ProposalStatus
from chainexporter.apps.governance.records import ProposalRecord
from chainexporter.apps.governance.sync import GovernanceSync


def lcd_proposal(proposal_id="3", status=ProposalStatus.VOTING_PERIOD, title="Enable transfers"):
    return {
        "type": "gov/TextProposal",
        "value": {
            "proposal_id": proposal_id,
            "title": title,
            "description": "Turn on token transfers",
            "proposal_type": "Text",
            "proposal_status": status,
            "submit_block": "250000",
            "voting_start_block": "250400",
        },
    }


def lcd_returning(*payloads):
    session = Mock()
    responses = []
    for payload in payloads:
        response = Mock()
        response.json.return_value = payload
        responses.append(response)
    session.get.side_effect = responses
    return LcdClient("http://lcd:1317/", timeout=2, session=session), session


class TestLcdClient:

    def test_projects_nested_value(self):
        client, session = lcd_returning([lcd_proposal()])

        proposals = client.proposals()

        assert proposals == [ProposalRecord(
            id="3",
            type="gov/TextProposal",
            height=250000,
            title="Enable transfers",
            description="Turn on token transfers",
            proposal_type="Text",
            proposal_status=ProposalStatus.VOTING_PERIOD,
            voting_start_block="250400",
            alerted=False,
        )]
        session.get.assert_called_once_with("http://lcd:1317/gov/proposals", timeout=2)

    def test_accepts_result_envelope(self):
        client, _ = lcd_returning({"height": "250500", "result": [lcd_proposal("1"), lcd_proposal("2")]})

        assert [p.id for p in client.proposals()] == ["1", "2"]

    def test_null_result_means_no_proposals(self):
        client, _ = lcd_returning({"height": "1", "result": None})

        assert client.proposals() == []

    def test_http_error_raises(self):
        session = Mock()
        session.get.return_value.raise_for_status.side_effect = requests.HTTPError("503 Service Unavailable")
        client = LcdClient("http://lcd:1317", session=session)

        with pytest.raises(ChainClientError, match="503"):
            client.proposals()

    def test_malformed_proposal_raises(self):
        client, _ = lcd_returning([{"type": "gov/TextProposal"}])

        with pytest.raises(ChainClientError):
            client.proposals()

    def test_missing_submit_block_defaults_to_zero(self):
        item = lcd_proposal()
        del item["value"]["submit_block"]

        assert parse_proposal(item).height == 0


@pytest.mark.django_db
class TestProposalStore:

    def test_second_poll_refreshes_status_only(self, proposal_store):
        client, _ = lcd_returning(
            [lcd_proposal("5", ProposalStatus.VOTING_PERIOD, title="Original title")],
            [lcd_proposal("5", ProposalStatus.PASSED, title="Edited title")],
        )
        governance = GovernanceSync(client, proposal_store)

        assert governance.sync() == 1
        Proposal.objects.filter(id="5").update(alerted=True)
        assert governance.sync() == 1

        proposal = Proposal.objects.get()
        assert proposal.id == "5"
        assert proposal.proposal_status == ProposalStatus.PASSED
        assert proposal.title == "Original title"
        assert proposal.alerted is True

    def test_new_proposals_start_unalerted(self, proposal_store):
        ProposalFactory(id="1", alerted=True)

        proposal_store.upsert([parse_proposal(lcd_proposal("1")), parse_proposal(lcd_proposal("2"))])

        assert dict(Proposal.objects.values_list('id', 'alerted')) == {"1": True, "2": False}

    def test_new_actionable_status_unflags_proposal(self, proposal_store, recording_sink, chain_store):
        scanner = AlertScanner(recording_sink, chain_store, proposal_store)
        client, _ = lcd_returning(
            [lcd_proposal("6", ProposalStatus.DEPOSIT_PERIOD)],
            [lcd_proposal("6", ProposalStatus.DEPOSIT_PERIOD)],
            [lcd_proposal("6", ProposalStatus.VOTING_PERIOD)],
        )
        governance = GovernanceSync(client, proposal_store)

        governance.sync()
        assert scanner.alert_governance() == 1
        governance.sync()
        assert scanner.alert_governance() == 0
        governance.sync()
        assert scanner.alert_governance() == 1

        assert len(recording_sink.sent) == 2
        assert Proposal.objects.get(id="6").alerted is True

    def test_terminal_status_keeps_flag(self, proposal_store):
        ProposalFactory(id="4", alerted=True, proposal_status=ProposalStatus.VOTING_PERIOD)

        proposal_store.upsert([parse_proposal(lcd_proposal("4", ProposalStatus.REJECTED))])

        assert Proposal.objects.get(id="4").alerted is True

    def test_empty_upsert(self, proposal_store):
        assert proposal_store.upsert([]) == 0
        assert Proposal.objects.count() == 0

    def test_unalerted_and_mark(self, proposal_store):
        ProposalFactory(id="1", height=20)
        ProposalFactory(id="2", height=10)
        ProposalFactory(id="3", alerted=True)

        assert [p.id for p in proposal_store.unalerted()] == ["2", "1"]
        assert proposal_store.mark_alerted("2") is True
        assert proposal_store.mark_alerted("2") is False
        assert [p.id for p in proposal_store.unalerted()] == ["1"]
