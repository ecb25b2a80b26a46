"""Query service - read-only list and search over one dataset."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional, Sequence

from app.core.config import settings
from app.core.errors import DatasetUnavailableError, ValidationError
from app.core.logging import get_logger
from app.schemas.normalized import SanctionRecord
from app.services.dataset_cache import DatasetSnapshot
from app.services.refresh_service import RefreshScheduler

log = get_logger("data_service")

STALE_WARNING = "Failed to fetch fresh data - serving cached data"


@dataclass(frozen=True)
class ListResult:
    snapshot: DatasetSnapshot
    cached: bool
    warning: Optional[str] = None


@dataclass(frozen=True)
class SearchResult:
    records: List[SanctionRecord]
    count: int
    total: int


@dataclass(frozen=True)
class StatusResult:
    count: int
    last_updated: Optional[str]
    refreshing: bool
    last_status: Optional[str]
    last_error: Optional[str]
    last_attempt_at: Optional[str]


class DatasetQueryService:
    """Handles list/search for one dataset - reads snapshots only, writes go through the scheduler."""

    def __init__(
        self,
        scheduler: RefreshScheduler,
        search_fields: Sequence[str],
        default_limit: Optional[int] = None,
    ):
        self.scheduler = scheduler
        self.search_fields = tuple(search_fields)
        self.default_limit = default_limit or settings.SEARCH_DEFAULT_LIMIT

    @property
    def name(self) -> str:
        return self.scheduler.name

    def snapshot(self) -> DatasetSnapshot:
        return self.scheduler.cache.get()

    async def list(self, force_refresh: bool = False) -> ListResult:
        current = self.snapshot()
        if not force_refresh and not current.is_empty:
            return ListResult(snapshot=current, cached=True)

        try:
            fresh = await self.scheduler.refresh()
        except Exception as exc:  # noqa: BLE001
            fallback = self.snapshot()
            if fallback.is_empty:
                log.error(f"{self.name}: refresh failed and no cached data is available: {exc}")
                raise DatasetUnavailableError(str(exc)) from exc
            log.warning(f"{self.name}: refresh failed, serving cached data: {exc}")
            return ListResult(snapshot=fallback, cached=True, warning=STALE_WARNING)

        return ListResult(snapshot=fresh, cached=False)

    def search(self, query: Any, limit: Any = None) -> SearchResult:
        if not query or not isinstance(query, str):
            raise ValidationError("Search query is required and must be a string")
        if limit is None:
            limit = self.default_limit
        elif isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
            raise ValidationError("Limit must be a positive integer")

        snapshot = self.snapshot()
        needle = query.lower()
        matches: List[SanctionRecord] = []
        for record in snapshot.records:
            if self._matches(record, needle):
                matches.append(record)
                if len(matches) >= limit:
                    break

        return SearchResult(records=matches, count=len(matches), total=snapshot.count)

    def status(self) -> StatusResult:
        snapshot = self.snapshot()
        scheduler = self.scheduler
        return StatusResult(
            count=snapshot.count,
            last_updated=snapshot.last_updated,
            refreshing=scheduler.in_flight,
            last_status=scheduler.last_status.value if scheduler.last_status else None,
            last_error=scheduler.last_error,
            last_attempt_at=scheduler.last_attempt_at,
        )

    def _matches(self, record: SanctionRecord, needle: str) -> bool:
        for field in self.search_fields:
            value = record.field_value(field)
            if value and needle in value.lower():
                return True
        return False
