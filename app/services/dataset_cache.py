"""In-memory holder of one dataset's current snapshot."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterable, Optional, Tuple

from app.schemas.normalized import SanctionRecord


def utc_timestamp() -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a ``Z`` suffix."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True)
class DatasetSnapshot:
    """Immutable, internally consistent view of a dataset."""

    records: Tuple[SanctionRecord, ...] = ()
    last_updated: Optional[str] = None
    count: int = field(default=0)

    def __post_init__(self) -> None:
        if self.count != len(self.records):
            raise ValueError(f"count={self.count} does not match {len(self.records)} records")

    @classmethod
    def build(cls, records: Iterable[SanctionRecord], last_updated: Optional[str]) -> "DatasetSnapshot":
        frozen = tuple(records)
        return cls(records=frozen, last_updated=last_updated, count=len(frozen))

    @property
    def is_empty(self) -> bool:
        return not self.records


class DatasetCache:
    """Swappable snapshot reference.

    Writers replace the whole snapshot in one assignment, so readers holding
    the result of ``get()`` keep a consistent triple no matter what happens to
    the cache afterwards.
    """

    def __init__(self, name: str):
        self.name = name
        self._snapshot = DatasetSnapshot()

    def get(self) -> DatasetSnapshot:
        return self._snapshot

    def replace(self, records: Iterable[SanctionRecord]) -> DatasetSnapshot:
        snapshot = DatasetSnapshot.build(records, utc_timestamp())
        self._snapshot = snapshot
        return snapshot

    def restore(self, snapshot: DatasetSnapshot) -> None:
        self._snapshot = snapshot

    def is_empty(self) -> bool:
        return self._snapshot.is_empty
