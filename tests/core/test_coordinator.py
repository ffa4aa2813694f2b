import threading

import pytest

from quotator_crawler.core.catalog import generate_flavors
from quotator_crawler.core.coordinator import RefreshCoordinator, RefreshState, RefreshStatus
from quotator_crawler.db.repository import Repository


class BlockingRepository:
    """Holds the first flavor write until released and records overlap."""

    def __init__(self):
        self.started = threading.Event()
        self.release = threading.Event()
        self.active = 0
        self.max_active = 0
        self.flavor_writes = []
        self.disk_writes = []
        self._lock = threading.Lock()

    def upsert_flavor(self, flavor):
        with self._lock:
            self.active += 1
            self.max_active = max(self.max_active, self.active)
        try:
            self.started.set()
            self.release.wait(timeout=5)
            self.flavor_writes.append(flavor.id)
        finally:
            with self._lock:
                self.active -= 1

    def upsert_disk_type(self, disk_type):
        self.disk_writes.append(disk_type.id)


class FlakyRepository:
    def __init__(self, failing_ids):
        self.failing_ids = set(failing_ids)

    def upsert_flavor(self, flavor):
        if flavor.id in self.failing_ids:
            raise ValueError(f"Error saving flavor '{flavor.id}': disk I/O error")

    def upsert_disk_type(self, disk_type):
        if disk_type.id in self.failing_ids:
            raise ValueError(f"Error saving disk type '{disk_type.id}': disk I/O error")


class TestRefreshCoordinator:
    def test_initial_status_is_idle(self, coordinator: RefreshCoordinator):
        status = coordinator.current_status()

        assert status == RefreshStatus()
        assert status.to_dict() == {
            'status': 'idle',
            'last_crawl': None,
            'flavors_count': 0,
            'disks_count': 0,
        }

    def test_refresh_persists_full_catalog(self, coordinator: RefreshCoordinator, repository: Repository):
        status = coordinator.refresh()

        assert status.status == RefreshState.COMPLETED
        assert status.flavors_count == 24
        assert status.disks_count == 5
        assert status.error is None
        assert status.last_crawl is not None
        assert coordinator.current_status() == status
        assert len(repository.list_flavors()) == 24
        assert len(repository.list_disk_types()) == 5

    def test_second_refresh_replaces_rows(self, coordinator: RefreshCoordinator, repository: Repository):
        coordinator.refresh()
        coordinator.refresh()

        assert len(repository.list_flavors()) == 24
        assert coordinator.current_status().flavors_count == 24

    def test_triggered_refresh_runs_in_background(self, coordinator: RefreshCoordinator):
        thread = coordinator.trigger_refresh()

        assert coordinator.wait(timeout=5)
        assert not thread.is_alive()
        assert coordinator.current_status().status == RefreshState.COMPLETED

    def test_overlapping_triggers_run_once(self):
        repo = BlockingRepository()
        coordinator = RefreshCoordinator(repo)

        first = coordinator.trigger_refresh()
        assert repo.started.wait(timeout=5)
        assert coordinator.is_running()
        assert coordinator.current_status().status == RefreshState.RUNNING

        # Dropped without waiting for the first run
        second = coordinator.trigger_refresh()
        second.join(timeout=5)
        assert not second.is_alive()
        assert coordinator.refresh() is None

        repo.release.set()
        first.join(timeout=5)

        assert repo.max_active == 1
        assert len(repo.flavor_writes) == 24
        assert len(repo.disk_writes) == 5
        assert coordinator.current_status().status == RefreshState.COMPLETED
        assert not coordinator.is_running()

    def test_wait_blocks_while_run_in_flight_after_dropped_trigger(self):
        repo = BlockingRepository()
        coordinator = RefreshCoordinator(repo)

        first = coordinator.trigger_refresh()
        assert repo.started.wait(timeout=5)
        dropped = coordinator.trigger_refresh()
        dropped.join(timeout=5)
        assert not dropped.is_alive()

        assert coordinator.wait(timeout=0.5) is False
        assert first.is_alive()

        repo.release.set()
        assert coordinator.wait(timeout=5) is True
        first.join(timeout=5)
        assert coordinator.current_status().status == RefreshState.COMPLETED

    def test_wait_covers_refresh_started_outside_trigger(self):
        repo = BlockingRepository()
        coordinator = RefreshCoordinator(repo)

        runner = threading.Thread(target=coordinator.refresh, daemon=True)
        runner.start()
        assert repo.started.wait(timeout=5)

        assert coordinator.wait(timeout=0.2) is False

        repo.release.set()
        assert coordinator.wait(timeout=5) is True
        runner.join(timeout=5)

    def test_partial_failure_still_completes(self):
        coordinator = RefreshCoordinator(FlakyRepository({'s6.small.1', 'essd'}))

        status = coordinator.refresh()

        assert status.status == RefreshState.COMPLETED
        assert status.flavors_count == 23
        assert status.disks_count == 4
        assert status.error.startswith('2 record(s) failed to save')
        assert "s6.small.1" in status.error
        assert "essd" in status.error

    def test_unexpected_error_marks_failed_and_releases_lock(self, repository: Repository):
        def broken_disk_types():
            raise RuntimeError('catalog unavailable')

        coordinator = RefreshCoordinator(repository, disk_type_source=broken_disk_types)

        status = coordinator.refresh()

        assert status.status == RefreshState.FAILED
        assert status.error == 'catalog unavailable'
        assert status.to_dict()['error'] == 'catalog unavailable'
        assert not coordinator.is_running()

        # Recovers on the next trigger
        coordinator.disk_type_source = lambda: []
        assert coordinator.refresh().status == RefreshState.COMPLETED

    def test_custom_flavor_source(self, repository: Repository):
        coordinator = RefreshCoordinator(repository, flavor_source=lambda: generate_flavors()[:3])

        status = coordinator.refresh()

        assert status.flavors_count == 3
        assert [f.id for f in repository.list_flavors()] == sorted(f.id for f in generate_flavors()[:3])

    def test_wait_without_trigger(self, coordinator: RefreshCoordinator):
        assert coordinator.wait(timeout=0) is True

    def test_status_snapshot_is_immutable(self, coordinator: RefreshCoordinator):
        status = coordinator.current_status()

        with pytest.raises(AttributeError):
            status.status = RefreshState.RUNNING
