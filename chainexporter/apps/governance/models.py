from django.db import models


class ProposalStatus:
    DEPOSIT_PERIOD = 'DepositPeriod'
    VOTING_PERIOD = 'VotingPeriod'
    ACTIVE = 'Active'
    PASSED = 'Passed'
    REJECTED = 'Rejected'
    FAILED = 'Failed'

    ACTIONABLE = (ACTIVE, DEPOSIT_PERIOD, VOTING_PERIOD)
    TERMINAL = (PASSED, REJECTED, FAILED)


class Proposal(models.Model):
    id = models.CharField(max_length=64, primary_key=True)
    type = models.CharField(max_length=255, blank=True)
    height = models.BigIntegerField(db_index=True)
    alerted = models.BooleanField(default=False, db_index=True)
    title = models.TextField(blank=True)
    description = models.TextField(blank=True)
    proposal_type = models.CharField(max_length=255, blank=True)
    proposal_status = models.CharField(max_length=64, blank=True)
    voting_start_block = models.CharField(max_length=64, blank=True)

    class Meta:
        db_table = 'proposals'
        ordering = ['height', 'id']
        verbose_name = 'Governance Proposal'
        verbose_name_plural = 'Governance Proposals'

    def __str__(self):
        return f"Proposal #{self.id}: {self.title} [{self.proposal_status}]"
