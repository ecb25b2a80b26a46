"""Refresh scheduler: fetch, parse, swap and persist, on startup and on an interval."""

from __future__ import annotations

import asyncio
from enum import Enum
from pathlib import Path
from typing import Optional

from app.core.errors import SanctionsError
from app.core.logging import get_logger
from app.core.persistence import SnapshotStore
from app.ingestion.base import BaseSource
from app.services.dataset_cache import DatasetCache, DatasetSnapshot, utc_timestamp

log = get_logger("refresh_service")


class RefreshState(str, Enum):
    IDLE = "idle"
    FETCHING = "fetching"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class RefreshScheduler:
    """Owns writes to one dataset's cache.

    Responsibilities:
    - Restore the persisted snapshot at startup
    - Run refresh cycles, one at a time per dataset
    - Keep the previous snapshot when a cycle fails
    - Re-run the cycle every ``interval`` seconds until stopped
    """

    def __init__(
        self,
        source: BaseSource,
        cache: DatasetCache,
        store: SnapshotStore,
        cache_file: Path,
        interval: float,
    ):
        self.source = source
        self.cache = cache
        self.store = store
        self.cache_file = Path(cache_file)
        self.interval = interval

        self.state = RefreshState.IDLE
        self.last_status: Optional[RefreshState] = None
        self.last_error: Optional[str] = None
        self.last_attempt_at: Optional[str] = None

        self._lock = asyncio.Lock()
        self._task: Optional[asyncio.Task] = None

    @property
    def name(self) -> str:
        return self.source.name

    @property
    def in_flight(self) -> bool:
        return self._lock.locked()

    def load_persisted(self) -> bool:
        """Restore the cache from disk; False when there is nothing usable."""
        snapshot = self.store.load(self.cache_file)
        if snapshot is None:
            return False
        self.cache.restore(snapshot)
        return True

    async def refresh(self) -> DatasetSnapshot:
        """Run one full refresh cycle and return the new snapshot.

        Waits for an in-flight cycle of the same dataset to finish first.
        Errors propagate; the cache is only touched after a successful parse.
        ``state`` stays at SUCCEEDED or FAILED until the next cycle starts.
        """
        async with self._lock:
            self.state = RefreshState.FETCHING
            self.last_attempt_at = utc_timestamp()
            log.info(f"Refreshing {self.name} from {self.source.url}")
            try:
                records = await self.source.fetch()
                snapshot = self.cache.replace(records)
            except BaseException as exc:
                self._finish(RefreshState.FAILED, f"{exc.__class__.__name__}: {exc}")
                raise

            self._finish(RefreshState.SUCCEEDED, None)
            log.info(f"Refreshed {self.name}: {snapshot.count} records")

            await asyncio.to_thread(self.store.save, snapshot, self.cache_file)
            return snapshot

    def _finish(self, outcome: RefreshState, error: Optional[str]) -> None:
        self.state = outcome
        self.last_status = outcome
        self.last_error = error

    async def run_once(self) -> bool:
        """Scheduled trigger: skip when a cycle is in flight, never raise."""
        if self.in_flight:
            log.warning(f"Refresh for {self.name} already in flight; skipping trigger")
            return False

        try:
            await self.refresh()
        except SanctionsError as exc:
            log.error(f"Refresh failed for {self.name}, keeping previous snapshot: {exc}")
            return False
        except Exception as exc:  # noqa: BLE001
            log.exception(f"Unexpected error refreshing {self.name}: {exc}")
            return False
        return True

    def start(self) -> None:
        if self._task is None or self._task.done():
            self._task = asyncio.create_task(self._loop(), name=f"refresh-{self.name}")

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None

    async def _loop(self) -> None:
        log.info(f"Scheduled refresh for {self.name} started (interval: {self.interval}s)")
        while True:
            try:
                await asyncio.sleep(self.interval)
                await self.run_once()
            except asyncio.CancelledError:
                log.info(f"Scheduled refresh for {self.name} cancelled")
                raise
