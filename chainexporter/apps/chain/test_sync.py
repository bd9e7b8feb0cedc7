import pytest

from chainexporter.apps.chain.exceptions import ChainClientError
from chainexporter.apps.chain.factories import BlockInfoFactory
from chainexporter.apps.chain.models import BlockInfo, MissInfo
from chainexporter.apps.chain.progress import ProgressTracker


def stored_heights():
    return list(BlockInfo.objects.order_by('height').values_list('height', flat=True))


@pytest.mark.django_db
class TestProgressTracker:

    def test_empty_store_starts_at_floor(self, fake_node, chain_store):
        tracker = ProgressTracker(fake_node, chain_store, start_height=2)
        assert tracker.next_heights() == (2, 5)

    def test_custom_floor(self, fake_node, chain_store):
        tracker = ProgressTracker(fake_node, chain_store, start_height=4)
        assert tracker.next_heights() == (4, 5)

    def test_resumes_after_best_height(self, fake_node, chain_store):
        BlockInfoFactory(height=2)
        BlockInfoFactory(height=3)

        tracker = ProgressTracker(fake_node, chain_store, start_height=2)
        assert tracker.next_heights() == (4, 5)

    def test_caught_up_range_is_empty(self, fake_node, chain_store):
        BlockInfoFactory(height=5)

        start, end = ProgressTracker(fake_node, chain_store).next_heights()
        assert start > end

    def test_node_errors_propagate(self, fake_node, chain_store):
        def unavailable():
            raise ChainClientError("node down")

        fake_node.status = unavailable

        with pytest.raises(ChainClientError):
            ProgressTracker(fake_node, chain_store).next_heights()


@pytest.mark.django_db
class TestSyncDriver:

    def test_syncs_contiguous_range(self, sync_driver):
        result = sync_driver.sync()

        assert result.error is None
        assert result.synced == 4
        assert stored_heights() == [2, 3, 4, 5]

    def test_stops_at_first_error_and_resumes(self, fake_node, sync_driver):
        fake_node.failures[4] = ChainClientError("timeout")

        first = sync_driver.sync()

        assert isinstance(first.error, ChainClientError)
        assert first.synced == 2
        assert stored_heights() == [2, 3]

        second = sync_driver.sync()

        assert second.error is None
        assert second.start == 4
        assert stored_heights() == [2, 3, 4, 5]

    def test_contiguity_across_interrupted_cycles(self, fake_node, sync_driver):
        fake_node.latest_height = 3
        fake_node.failures[3] = ChainClientError("reset by peer")

        sync_driver.sync()
        sync_driver.sync()
        fake_node.latest_height = 8
        fake_node.failures[7] = ChainClientError("reset by peer")
        sync_driver.sync()
        sync_driver.sync()

        assert stored_heights() == list(range(2, 9))

    def test_second_run_without_new_blocks_is_a_no_op(self, fake_node, sync_driver):
        fake_node.missing[3] = {2}
        sync_driver.sync()
        blocks, misses = BlockInfo.objects.count(), MissInfo.objects.count()

        result = sync_driver.sync()

        assert result.error is None
        assert result.caught_up
        assert result.synced == 0
        assert (BlockInfo.objects.count(), MissInfo.objects.count()) == (blocks, misses)

    def test_status_failure_is_reported_not_raised(self, fake_node, sync_driver):
        def unavailable():
            raise ChainClientError("node down")

        fake_node.status = unavailable

        result = sync_driver.sync()

        assert isinstance(result.error, ChainClientError)
        assert result.synced == 0
        assert BlockInfo.objects.count() == 0
