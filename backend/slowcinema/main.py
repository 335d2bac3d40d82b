from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.routing import APIRoute
from starlette.middleware.cors import CORSMiddleware

from slowcinema.api.main import api_router, site_router
from slowcinema.core.config import settings
from slowcinema.core.db import StoreGateway
from slowcinema.core.render_cache import RenderCache
from slowcinema.exceptions.handlers import register_exception_handlers
from slowcinema.logging_.logger import setup_logger
from slowcinema.scheduler import create_revalidation_scheduler


def custom_generate_unique_id(route: APIRoute) -> str:
    tag = route.tags[0] if route.tags else "default"
    return f"{tag}-{route.name}"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    logger = setup_logger("api")
    store = StoreGateway.from_settings(settings)
    cache = RenderCache(max_entries=settings.RENDER_CACHE_MAX_ENTRIES)
    app.state.store = store
    app.state.render_cache = cache

    scheduler = None
    if settings.REVALIDATION_WORKER_ENABLED:
        scheduler = create_revalidation_scheduler(
            store=store,
            cache=cache,
            interval_seconds=settings.REVALIDATION_INTERVAL_SECONDS,
        )
        scheduler.start()
    logger.info("{} started", settings.PROJECT_NAME)
    try:
        yield
    finally:
        if scheduler is not None:
            scheduler.shutdown(wait=False)
        store.shutdown()
        logger.info("{} stopped", settings.PROJECT_NAME)


app = FastAPI(
    title=settings.PROJECT_NAME,
    openapi_url=f"{settings.API_PREFIX}/openapi.json",
    generate_unique_id_function=custom_generate_unique_id,
    lifespan=lifespan,
)

if settings.all_cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.all_cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

register_exception_handlers(app)
app.include_router(api_router)
app.include_router(site_router)
