"""
FastAPI app assembly: middleware, error mapping, catalog routes and the
operational endpoints (health, metrics).
"""

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from typing import Any

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from src.platform.config.core_setting import Settings, settings
from src.platform.config.di import container
from src.platform.constant.route_constant import HEALTH, METRICS
from src.platform.exception.exception_handlers import register_exception_handlers
from src.platform.observability.tracing import TracingConfig
from src.service.catalog.driving_adapter.http_controller.event_controller import (
    router as event_router,
)


ops_router = APIRouter(tags=['ops'])


@ops_router.get(HEALTH)
async def health_check() -> dict[str, Any]:
    """Liveness plus the size of the catalog this process is serving."""
    store = container.catalog_store()
    return {
        'status': 'healthy',
        'service': container.config_service().SERVICE_NAME,
        'events': store.event_count,
        'spots': store.spot_count,
    }


@ops_router.get(METRICS)
async def get_metrics() -> PlainTextResponse:
    return PlainTextResponse(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)


def create_app(
    *,
    lifespan: Callable[[FastAPI], AbstractAsyncContextManager[Any]],
    config: Settings = settings,
) -> FastAPI:
    app = FastAPI(
        title=config.PROJECT_NAME,
        description='Event catalog and all-or-nothing spot reservation',
        version=config.VERSION,
        lifespan=lifespan,
    )

    # Must run before routes are mounted
    TracingConfig.instrument_fastapi(app=app)

    app.add_middleware(
        CORSMiddleware,  # type: ignore
        allow_origins=config.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=['*'],
        allow_headers=['*'],
    )

    register_exception_handlers(app)

    app.include_router(event_router, tags=['event'])
    app.include_router(ops_router)

    return app
