from contextlib import asynccontextmanager
from typing import Callable, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.api.routes import eu_router, health_router, ofac_router
from app.core.config import settings
from app.core.errors import DatasetUnavailableError, ValidationError
from app.core.logging import get_logger
from app.ingestion.runner import IngestionRunner
from app.services.registry import Dataset, build_datasets

log = get_logger("app")

DatasetFactory = Callable[[], Dict[str, Dataset]]


def create_app(
    dataset_factory: DatasetFactory = build_datasets,
    refresh_on_startup: Optional[bool] = None,
    schedule_refresh: Optional[bool] = None,
) -> FastAPI:
    """Build the API; datasets are created and populated inside the lifespan."""
    if refresh_on_startup is None:
        refresh_on_startup = settings.REFRESH_ON_STARTUP
    if schedule_refresh is None:
        schedule_refresh = settings.REFRESH_ENABLED

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        log.info(f"Starting application in {settings.ENV.upper()} mode")

        datasets = dataset_factory()
        app.state.datasets = datasets
        schedulers = [dataset.scheduler for dataset in datasets.values()]

        for scheduler in schedulers:
            if not scheduler.load_persisted():
                log.info(f"{scheduler.name}: starting without a persisted snapshot")

        if refresh_on_startup:
            log.info("Running initial refresh for all datasets...")
            results = await IngestionRunner(schedulers).run()
            for name, ok in results.items():
                if not ok and datasets[name].cache.is_empty():
                    log.error(f"{name}: no data available - serving an empty dataset")

        if schedule_refresh:
            log.info("Starting scheduled refresh tasks...")
            for scheduler in schedulers:
                scheduler.start()
        else:
            log.info("Scheduled refresh is disabled (REFRESH_ENABLED=false)")

        yield

        log.info("Shutting down services...")
        for scheduler in schedulers:
            await scheduler.stop()
        log.info("Application shutdown complete")

    app = FastAPI(
        title="Sanctions Feed",
        description="Cached OFAC SDN and EU financial sanctions lists",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs" if settings.docs_enabled else None,
        redoc_url="/redoc" if settings.docs_enabled else None,
        openapi_url="/openapi.json" if settings.docs_enabled else None,
        debug=settings.debug_enabled,
    )

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError):
        return JSONResponse(
            status_code=400,
            content={"success": False, "error": "Invalid request", "message": str(exc)},
        )

    @app.exception_handler(DatasetUnavailableError)
    async def unavailable_error_handler(request: Request, exc: DatasetUnavailableError):
        return JSONResponse(
            status_code=500,
            content={"success": False, "error": "Failed to fetch sanctions data", "message": str(exc)},
        )

    app.include_router(ofac_router)
    app.include_router(eu_router)
    app.include_router(health_router)
    return app


app = create_app()
