"""
Spot reservation service entrypoint.

Startup loads the catalog file once; if it cannot be loaded the process
does not start. Reservations live in memory until shutdown.
Run with: granian --interface asgi src.main:app
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from src.platform.app_factory import create_app
from src.platform.config.di import container
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.logging.loguru_io import Logger


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    config = container.config_service()
    Logger.base.info(f'🚀 [{config.SERVICE_NAME}] Starting ({config.DEPLOY_ENV})')

    tracing = container.tracing()
    tracing.setup()
    if tracing.is_exporting:
        Logger.base.info(f'📊 [{config.SERVICE_NAME}] Exporting traces')

    container.wire(modules=WIRE_MODULES)

    store = container.catalog_store()
    Logger.base.info(
        f'📂 [{config.SERVICE_NAME}] Catalog {config.CATALOG_DATA_PATH.name}: '
        f'{store.event_count} events, {store.spot_count} spots'
    )

    yield

    Logger.base.info(f'🛑 [{config.SERVICE_NAME}] Shutting down')
    tracing.shutdown()
    # Dropping the singletons discards every reservation made by this process
    container.reset_singletons()
    container.unwire()


app = create_app(lifespan=lifespan)


@app.get('/', include_in_schema=False)
async def root() -> RedirectResponse:
    return RedirectResponse(url='/docs')
