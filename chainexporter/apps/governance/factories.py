import factory

from .models import Proposal, ProposalStatus


class ProposalFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Proposal

    id = factory.Sequence(lambda n: str(n + 1))
    type = "gov/TextProposal"
    height = factory.Sequence(lambda n: 1000 + n)
    alerted = False
    title = factory.Sequence(lambda n: f"Proposal {n + 1}")
    description = "Increase the max validator count"
    proposal_type = "Text"
    proposal_status = ProposalStatus.VOTING_PERIOD
    voting_start_block = factory.LazyAttribute(lambda o: str(o.height + 10))
