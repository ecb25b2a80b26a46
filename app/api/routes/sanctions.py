"""Sanctions routes - list, search and connection check for one dataset."""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Query

from app.api.deps import get_datasets
from app.schemas.api import ConnectionResponse, ErrorResponse, ListResponse, SearchResponse
from app.services.data_service import DatasetQueryService
from app.services.registry import EU, OFAC, Dataset


def build_router(prefix: str, dataset_name: str, tag: str) -> APIRouter:
    """Create the list/search/test-connection routes bound to one dataset."""
    router = APIRouter(prefix=prefix, tags=[tag])

    def get_query_service(datasets: Dict[str, Dataset] = Depends(get_datasets)) -> DatasetQueryService:
        return datasets[dataset_name].query

    @router.get(
        "/list",
        response_model=ListResponse,
        response_model_exclude_none=True,
        responses={500: {"model": ErrorResponse}},
    )
    async def list_entries(
        force: bool = Query(False, description="Refresh from the source before answering"),
        service: DatasetQueryService = Depends(get_query_service),
    ):
        """
        Return the full normalized list.

        Served from cache unless `force=true` or the cache is empty. When a
        refresh fails the last good snapshot is returned with `_warning`;
        500 only if no data was ever loaded.
        """
        result = await service.list(force_refresh=force)
        snapshot = result.snapshot
        return ListResponse(
            data=list(snapshot.records),
            last_updated=snapshot.last_updated,
            count=snapshot.count,
            cached=result.cached,
            warning=result.warning,
        )

    @router.post("/search", response_model=SearchResponse, responses={400: {"model": ErrorResponse}})
    def search_entries(
        payload: Optional[Dict[str, Any]] = Body(
            None,
            examples=[{"query": "john", "limit": 10}],
        ),
        service: DatasetQueryService = Depends(get_query_service),
    ):
        """Case-insensitive substring search; `total` is the dataset size, not the match count."""
        payload = payload or {}
        result = service.search(payload.get("query"), payload.get("limit"))
        return SearchResponse(data=result.records, count=result.count, total=result.total)

    @router.get("/test-connection", response_model=ConnectionResponse)
    def test_connection(service: DatasetQueryService = Depends(get_query_service)):
        """Liveness plus current snapshot size; always 200."""
        status = service.status()
        return ConnectionResponse(
            last_updated=status.last_updated,
            entry_count=status.count,
            status="refreshing" if status.refreshing else (status.last_status or "idle"),
            last_error=status.last_error,
        )

    return router


ofac_router = build_router("/api/sanctions", OFAC, "ofac")
eu_router = build_router("/api/eu-sanctions", EU, "eu-sanctions")
