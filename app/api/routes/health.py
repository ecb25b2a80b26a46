"""Health routes - process liveness and per-dataset freshness."""

from typing import Dict

from fastapi import APIRouter, Depends

from app.api.deps import get_datasets
from app.schemas.api import DatasetHealth, HealthResponse
from app.services.registry import Dataset

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
def health(datasets: Dict[str, Dataset] = Depends(get_datasets)):
    """
    Health check endpoint for load balancers.

    Always 200 while the process is up; `status` is "degraded" when any
    dataset has no data to serve.
    """
    report: Dict[str, DatasetHealth] = {}
    for name, dataset in datasets.items():
        status = dataset.query.status()
        report[name] = DatasetHealth(
            count=status.count,
            last_updated=status.last_updated,
            last_refresh=status.last_status,
            refreshing=status.refreshing,
        )

    degraded = any(entry.count == 0 for entry in report.values())
    return HealthResponse(status="degraded" if degraded else "ok", datasets=report)
