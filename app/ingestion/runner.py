"""Orchestration logic for refreshing several datasets at once."""

from __future__ import annotations

import asyncio
from typing import Dict, List

from app.core.logging import get_logger
from app.services.refresh_service import RefreshScheduler

log = get_logger("ingestion.runner")


class IngestionRunner:
    """Runs one refresh cycle per dataset concurrently; one failure never blocks another."""

    def __init__(self, schedulers: List[RefreshScheduler]):
        self.schedulers = schedulers

    async def run(self) -> Dict[str, bool]:
        outcomes = await asyncio.gather(*(s.run_once() for s in self.schedulers))
        results: Dict[str, bool] = {}
        for scheduler, ok in zip(self.schedulers, outcomes):
            results[scheduler.name] = ok
            log.info(f"Source={scheduler.name} refreshed={ok} records={scheduler.cache.get().count}")
        return results
