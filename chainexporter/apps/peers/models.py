from django.db import models


class PeerInfo(models.Model):
    timestamp = models.DateTimeField(db_index=True)
    node = models.CharField(max_length=255, db_index=True)

    peer_id = models.CharField(max_length=64)
    listen_addr = models.CharField(max_length=255, blank=True)
    network = models.CharField(max_length=64, blank=True)
    version = models.CharField(max_length=64, blank=True)
    channels = models.CharField(max_length=64, blank=True)
    moniker = models.CharField(max_length=255, blank=True)
    is_outbound = models.BooleanField(default=False)

    send_data = models.JSONField(default=dict, blank=True)
    recv_data = models.JSONField(default=dict, blank=True)
    channel_data = models.JSONField(default=list, blank=True)

    class Meta:
        db_table = 'peer_infos'
        ordering = ['-timestamp', 'node']
        verbose_name = 'Peer Snapshot'
        verbose_name_plural = 'Peer Snapshots'
        indexes = [
            models.Index(fields=['node', '-timestamp'], name='peer_infos_node_ts_idx'),
        ]

    def __str__(self):
        return f"{self.node} -> {self.moniker or self.peer_id} @ {self.timestamp:%Y-%m-%d %H:%M}"
