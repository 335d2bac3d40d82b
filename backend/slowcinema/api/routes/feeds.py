from fastapi import APIRouter, Response

from slowcinema.api.deps import RenderCacheDep, SessionDep
from slowcinema.schemas.sitemap import SitemapEntry
from slowcinema.services import feeds as feeds_service
from slowcinema.services.revalidation import MOVIES_TAG

router = APIRouter(tags=["feeds"])
api_router = APIRouter(tags=["feeds"])

FEED_REVALIDATE_SECONDS = 3600
SITEMAP_REVALIDATE_SECONDS = 60
FEED_CACHE_CONTROL = "public, max-age=3600, s-maxage=3600, stale-while-revalidate=86400"


@router.get("/feed.xml", response_class=Response)
def rss_feed(session: SessionDep, cache: RenderCacheDep) -> Response:
    feed = cache.get_or_compute(
        "document:/feed.xml",
        lambda: feeds_service.build_rss_feed(session=session),
        tags=[MOVIES_TAG],
        path="/feed.xml",
        ttl=FEED_REVALIDATE_SECONDS,
    )
    return Response(
        content=feed,
        media_type="application/xml",
        headers={"Cache-Control": FEED_CACHE_CONTROL},
    )


def _sitemap_entries(session: SessionDep, cache: RenderCacheDep) -> list[SitemapEntry]:
    return cache.get_or_compute(
        "document:/sitemap",
        lambda: feeds_service.get_sitemap_entries(session=session),
        tags=[MOVIES_TAG],
        path="/sitemap.xml",
        ttl=SITEMAP_REVALIDATE_SECONDS,
    )


@router.get("/sitemap.xml", response_class=Response)
def sitemap_xml(session: SessionDep, cache: RenderCacheDep) -> Response:
    entries = _sitemap_entries(session, cache)
    return Response(
        content=feeds_service.render_sitemap(entries),
        media_type="application/xml",
        headers={"Cache-Control": f"public, s-maxage={SITEMAP_REVALIDATE_SECONDS}"},
    )


@api_router.get("/sitemap", response_model=list[SitemapEntry])
def sitemap_entries(session: SessionDep, cache: RenderCacheDep) -> list[SitemapEntry]:
    return _sitemap_entries(session, cache)
