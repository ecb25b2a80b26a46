"""Snapshot persistence to JSON files"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Optional, Union

import pydantic

from app.core.errors import PersistenceError
from app.core.logging import get_logger
from app.schemas.normalized import PersistedDataset
from app.services.dataset_cache import DatasetSnapshot

log = get_logger("persistence")

PathLike = Union[str, Path]


class SnapshotStore:
    """Saves and loads dataset snapshots; failures are logged, never raised."""

    def save(self, snapshot: DatasetSnapshot, file_path: PathLike) -> bool:
        """Write the snapshot to ``file_path``; returns False on failure."""
        path = Path(file_path)
        try:
            self._write(snapshot, path)
        except PersistenceError as exc:
            log.error(f"Failed to save snapshot to {path}: {exc}")
            return False
        log.info(f"Saved {snapshot.count} records to {path}")
        return True

    def load(self, file_path: PathLike) -> Optional[DatasetSnapshot]:
        """Read a snapshot back; None when the file is missing or corrupt."""
        path = Path(file_path)
        if not path.exists():
            log.info(f"No snapshot file at {path}")
            return None

        try:
            snapshot = self._read(path)
        except PersistenceError as exc:
            log.warning(f"Ignoring unusable snapshot file {path}: {exc}")
            return None

        log.info(f"Loaded {snapshot.count} records from {path}")
        return snapshot

    @staticmethod
    def _write(snapshot: DatasetSnapshot, path: Path) -> None:
        payload = PersistedDataset(
            records=list(snapshot.records),
            last_updated=snapshot.last_updated,
            count=snapshot.count,
        ).model_dump(by_alias=True)

        tmp_name: Optional[str] = None
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(payload, f, ensure_ascii=False, indent=2)
            os.replace(tmp_name, path)
        except OSError as exc:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise PersistenceError(str(exc)) from exc

    @staticmethod
    def _read(path: Path) -> DatasetSnapshot:
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
            stored = PersistedDataset.model_validate(data)
            return DatasetSnapshot(
                records=tuple(stored.records),
                last_updated=stored.last_updated,
                count=stored.count,
            )
        except (OSError, json.JSONDecodeError, pydantic.ValidationError, ValueError) as exc:
            raise PersistenceError(str(exc)) from exc
