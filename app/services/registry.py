"""Wiring of the two sanctions datasets: source, cache, scheduler and query service."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

from app.core.config import Settings, settings as default_settings
from app.core.persistence import SnapshotStore
from app.ingestion.base import BaseSource
from app.ingestion.eu_source import EUSanctionsSource
from app.ingestion.ofac_source import OFACSource
from app.services.data_service import DatasetQueryService
from app.services.dataset_cache import DatasetCache
from app.services.refresh_service import RefreshScheduler

OFAC = "ofac"
EU = "eu"

SEARCH_FIELDS = {
    OFAC: ("name", "id", "countries", "programs"),
    EU: ("name", "type", "programme", "regulation"),
}


@dataclass
class Dataset:
    name: str
    cache: DatasetCache
    scheduler: RefreshScheduler
    query: DatasetQueryService


def build_dataset(
    source: BaseSource,
    cache_file: Path,
    cfg: Settings = default_settings,
    store: Optional[SnapshotStore] = None,
) -> Dataset:
    cache = DatasetCache(source.name)
    scheduler = RefreshScheduler(
        source=source,
        cache=cache,
        store=store or SnapshotStore(),
        cache_file=cache_file,
        interval=cfg.REFRESH_INTERVAL_SECONDS,
    )
    query = DatasetQueryService(
        scheduler,
        search_fields=SEARCH_FIELDS[source.name],
        default_limit=cfg.SEARCH_DEFAULT_LIMIT,
    )
    return Dataset(name=source.name, cache=cache, scheduler=scheduler, query=query)


def build_datasets(cfg: Settings = default_settings) -> Dict[str, Dataset]:
    """Create both datasets with an empty cache each."""
    ofac = OFACSource(url=cfg.OFAC_URL, timeout=cfg.FETCH_TIMEOUT_SECONDS)
    eu = EUSanctionsSource(url=cfg.EU_SANCTIONS_URL, timeout=cfg.FETCH_TIMEOUT_SECONDS)
    return {
        OFAC: build_dataset(ofac, cfg.ofac_cache_path, cfg),
        EU: build_dataset(eu, cfg.eu_cache_path, cfg),
    }
