from django.db import models


class BlockInfo(models.Model):
    block_id = models.CharField(max_length=200)
    height = models.BigIntegerField(unique=True)
    proposer = models.CharField(max_length=64)
    time = models.DateTimeField()

    class Meta:
        db_table = 'block_infos'
        ordering = ['-height']
        verbose_name = 'Block'
        verbose_name_plural = 'Blocks'

    def __str__(self):
        return f"Block {self.height} proposed by {self.proposer}"


class MissInfo(models.Model):
    address = models.CharField(max_length=64)
    height = models.BigIntegerField(db_index=True)
    alerted = models.BooleanField(default=False)
    proposer = models.CharField(max_length=64)
    time = models.DateTimeField()

    class Meta:
        db_table = 'miss_infos'
        ordering = ['height', 'id']
        verbose_name = 'Missed Signature'
        verbose_name_plural = 'Missed Signatures'
        indexes = [
            models.Index(fields=['alerted', 'address'], name='miss_infos_alerted_idx'),
        ]

    def __str__(self):
        return f"Miss by {self.address} at {self.height}"


class EvidenceInfo(models.Model):
    address = models.CharField(max_length=64, db_index=True)
    height = models.BigIntegerField(db_index=True)

    class Meta:
        db_table = 'evidence_infos'
        ordering = ['height']
        verbose_name = 'Evidence'
        verbose_name_plural = 'Evidence'

    def __str__(self):
        return f"Evidence against {self.address} at {self.height}"
