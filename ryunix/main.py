import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from importlib.metadata import version as pkg_version

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ryunix.api import (
    admin_router,
    banlist_router,
    catalog_router,
    collection_router,
    gacha_router,
    health_router,
)
from ryunix.config import settings
from ryunix.db.database import async_session_factory, init_db
from ryunix.models.failure import KnownError
from ryunix.services.registry import build_services

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    await init_db()
    services = build_services(async_session_factory)
    await services.start()
    app.state.services = services
    yield
    await services.stop()


app = FastAPI(
    title=settings.app_name,
    version=pkg_version("ryunix"),
    lifespan=lifespan,
)


@app.exception_handler(KnownError)
async def known_error_handler(_request: Request, exc: KnownError) -> JSONResponse:
    """Render classified failures in the ApiResponse envelope."""
    logger.info("Known failure (%s): %s", exc.kind.value, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_response().model_dump(mode="json"),
    )


app.include_router(admin_router)
app.include_router(banlist_router)
app.include_router(catalog_router)
app.include_router(collection_router)
app.include_router(gacha_router)
app.include_router(health_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Tighten in production
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)
