"""Refresh entrypoint - Standalone script for refreshing the persisted snapshots.

Usage:
    python -m app.refresh_entrypoint            # Refresh both datasets
    python -m app.refresh_entrypoint ofac       # Refresh the OFAC SDN list
    python -m app.refresh_entrypoint eu         # Refresh the EU sanctions list
"""

import asyncio
import sys
from typing import Dict, List, Optional

from app.core.logging import get_logger
from app.ingestion.runner import IngestionRunner
from app.services.registry import EU, OFAC, build_datasets

logger = get_logger("refresh_entrypoint")


async def run_refresh(names: Optional[List[str]] = None) -> Dict[str, bool]:
    """Refresh the selected datasets (all by default) and persist each one."""
    datasets = build_datasets()
    selected = [datasets[name].scheduler for name in (names or list(datasets))]
    return await IngestionRunner(selected).run()


def main(argv: Optional[List[str]] = None) -> Dict[str, bool]:
    args = sys.argv[1:] if argv is None else argv
    known = (OFAC, EU)

    for name in args:
        if name not in known:
            logger.error(f"Invalid dataset: {name}. Must be one of: {', '.join(known)}")
            sys.exit(2)

    logger.info("Refresh starting...")
    results = asyncio.run(run_refresh(args or None))
    logger.info(f"Refresh completed: {results}")

    if not all(results.values()):
        sys.exit(1)
    return results


if __name__ == "__main__":
    main()
