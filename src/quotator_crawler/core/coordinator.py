import threading
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any

import pytz

from quotator_crawler.db.repository import Repository

from .catalog import generate_disk_types, generate_flavors
from .pricing_types import DiskType, Flavor
from .utils import setup_logger

logger = setup_logger(name="core.coordinator")


class RefreshState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(frozen=True)
class RefreshStatus:
    status: RefreshState = RefreshState.IDLE
    last_crawl: datetime | None = None
    flavors_count: int = 0
    disks_count: int = 0
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize for the status endpoint; error is only present when set."""
        data: dict[str, Any] = {
            "status": self.status.value,
            "last_crawl": self.last_crawl.isoformat() if self.last_crawl else None,
            "flavors_count": self.flavors_count,
            "disks_count": self.disks_count,
        }
        if self.error:
            data["error"] = self.error
        return data


class RefreshCoordinator:
    """
    Runs catalog refreshes one at a time and keeps the last status.

    The refresh lock is taken inside the refresh itself, so a trigger never
    waits for a run in progress: overlapping triggers are dropped.
    """

    def __init__(
        self,
        repository: Repository,
        flavor_source: Callable[[], Sequence[Flavor]] = generate_flavors,
        disk_type_source: Callable[[], Sequence[DiskType]] = generate_disk_types,
    ):
        self.repository = repository
        self.flavor_source = flavor_source
        self.disk_type_source = disk_type_source

        self._refresh_lock = threading.Lock()
        self._status_lock = threading.Lock()
        self._status = RefreshStatus()
        # Guards _pending; notified whenever a run or a triggered thread finishes
        self._idle = threading.Condition()
        self._pending = 0

    def current_status(self) -> RefreshStatus:
        with self._status_lock:
            return self._status

    def is_running(self) -> bool:
        return self._refresh_lock.locked()

    def trigger_refresh(self) -> threading.Thread:
        """Start a refresh on a background thread and return without waiting."""
        thread = threading.Thread(target=self._refresh_in_background, name="catalog-refresh", daemon=True)
        with self._idle:
            self._pending += 1
        thread.start()
        return thread

    def wait(self, timeout: float | None = None) -> bool:
        """
        Wait until no refresh is running and no triggered refresh is pending.

        Returns:
            True if the coordinator went idle before the timeout
        """
        with self._idle:
            return self._idle.wait_for(
                lambda: self._pending == 0 and not self._refresh_lock.locked(), timeout
            )

    def refresh(self) -> RefreshStatus | None:
        """
        Regenerate the catalog and write it to the store.

        Returns:
            The final status, or None when another refresh was already running
        """
        if not self._refresh_lock.acquire(blocking=False):
            logger.info("Refresh already in progress, ignoring trigger")
            return None
        try:
            return self._run()
        finally:
            self._refresh_lock.release()
            with self._idle:
                self._idle.notify_all()

    def _refresh_in_background(self) -> None:
        try:
            self.refresh()
        finally:
            with self._idle:
                self._pending -= 1
                self._idle.notify_all()

    def _run(self) -> RefreshStatus:
        logger.info("Starting pricing catalog refresh")
        self._set_status(RefreshStatus(status=RefreshState.RUNNING, last_crawl=_now()))

        failures: list[str] = []
        flavors_saved = 0
        disks_saved = 0
        try:
            flavors = self.flavor_source()
            disk_types = self.disk_type_source()

            flavors_saved = self._persist(flavors, self.repository.upsert_flavor, failures)
            disks_saved = self._persist(disk_types, self.repository.upsert_disk_type, failures)
        except Exception as e:
            logger.error(f"Refresh failed: {e!s}", exc_info=True)
            status = RefreshStatus(
                status=RefreshState.FAILED,
                last_crawl=_now(),
                flavors_count=flavors_saved,
                disks_count=disks_saved,
                error=str(e),
            )
            self._set_status(status)
            return status

        error = None
        if failures:
            error = f"{len(failures)} record(s) failed to save: " + "; ".join(failures)

        status = RefreshStatus(
            status=RefreshState.COMPLETED,
            last_crawl=_now(),
            flavors_count=flavors_saved,
            disks_count=disks_saved,
            error=error,
        )
        self._set_status(status)
        logger.info(f"Refresh completed: {flavors_saved} flavors, {disks_saved} disk types saved")
        return status

    def _persist(self, records: Sequence, save: Callable, failures: list[str]) -> int:
        saved = 0
        for record in records:
            try:
                save(record)
            except ValueError as e:
                logger.warning(str(e))
                failures.append(str(e))
            else:
                saved += 1
        return saved

    def _set_status(self, status: RefreshStatus) -> None:
        with self._status_lock:
            self._status = status


def _now() -> datetime:
    return datetime.now(pytz.UTC)
