import concurrent.futures
import logging
from typing import Dict

from django.db import DatabaseError, close_old_connections
from django.utils import timezone

from chainexporter.apps.chain.client import ChainClient

from .models import PeerInfo

logger = logging.getLogger(__name__)


class NetInfoExporter:
    """Snapshots the peers of several nodes, one worker per node"""

    def __init__(self, clients: Dict[str, ChainClient], max_workers: int = 8):
        self.clients = clients
        self.max_workers = max_workers

    def sync(self) -> Dict[str, bool]:
        """Capture every node's peers; a failing node never affects the others"""
        results = {}
        with concurrent.futures.ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures = {
                executor.submit(self._capture_isolated, name, client): name
                for name, client in self.clients.items()
            }
            for future in concurrent.futures.as_completed(futures):
                results[futures[future]] = future.result()
        return results

    def _capture_isolated(self, name: str, client: ChainClient) -> bool:
        try:
            count = self.capture(name, client)
        except Exception as e:
            logger.error(f"error parsing netData for {name}: {e}")
            return False
        finally:
            close_old_connections()

        logger.info(f"parsed netData for {name} ({count} peers)")
        return True

    def capture(self, name: str, client: ChainClient) -> int:
        """Store one row per current peer of a node, returns rows stored"""
        peers = client.net_info()

        # One timestamp per snapshot so rows can be grouped
        timestamp = timezone.now()
        stored = 0
        for peer in peers:
            try:
                PeerInfo.objects.create(
                    timestamp=timestamp,
                    node=name,
                    peer_id=peer.peer_id,
                    listen_addr=peer.listen_addr,
                    network=peer.network,
                    version=peer.version,
                    channels=peer.channels,
                    moniker=peer.moniker,
                    is_outbound=peer.is_outbound,
                    send_data=peer.send_data,
                    recv_data=peer.recv_data,
                    channel_data=peer.channel_data,
                )
            except DatabaseError as e:
                logger.error(f"error inserting netData for {name}: {e}")
                continue
            stored += 1

        return stored
