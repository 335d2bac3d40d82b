from apscheduler.schedulers.background import (  # type: ignore[import-untyped]
    BackgroundScheduler,
)
from apscheduler.triggers.interval import IntervalTrigger  # type: ignore[import-untyped]
from loguru import logger

from slowcinema.core.db import StoreGateway
from slowcinema.core.render_cache import RenderCache
from slowcinema.services import revalidation as revalidation_service


def apply_pending_revalidations(store: StoreGateway, cache: RenderCache) -> int:
    with store.session() as session:
        events = revalidation_service.apply_pending(session=session, cache=cache)
    return len(events)


def create_revalidation_scheduler(
    *,
    store: StoreGateway,
    cache: RenderCache,
    interval_seconds: int,
) -> BackgroundScheduler:
    scheduler = BackgroundScheduler()
    scheduler.add_job(
        func=apply_pending_revalidations,
        kwargs={"store": store, "cache": cache},
        trigger=IntervalTrigger(seconds=interval_seconds),
        id="apply_pending_revalidations",
        max_instances=1,
        coalesce=True,
    )
    logger.info("Revalidation worker scheduled every {}s", interval_seconds)
    return scheduler
