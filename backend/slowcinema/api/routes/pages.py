from typing import Annotated

from fastapi import APIRouter, Depends, Response

from slowcinema.api.deps import RenderCacheDep, SessionDep
from slowcinema.inputs.movie import ReviewsPageParams, get_reviews_page_params
from slowcinema.schemas.pages import HomePage, ReviewPage, ReviewsPage
from slowcinema.services import movies as movies_service
from slowcinema.services.revalidation import MOVIES_TAG, movie_tag

router = APIRouter(tags=["pages"])

HOME_REVALIDATE_SECONDS = 3600
REVIEWS_REVALIDATE_SECONDS = 3600
REVIEW_REVALIDATE_SECONDS = 60


def _cache_control(seconds: int) -> str:
    return f"public, s-maxage={seconds}, stale-while-revalidate={seconds * 24}"


@router.get("/", response_model=HomePage)
def home_page(session: SessionDep, cache: RenderCacheDep, response: Response) -> HomePage:
    page = cache.get_or_compute(
        "page:/",
        lambda: movies_service.get_home_page(session=session),
        tags=[MOVIES_TAG],
        path="/",
        ttl=HOME_REVALIDATE_SECONDS,
    )
    response.headers["Cache-Control"] = _cache_control(HOME_REVALIDATE_SECONDS)
    return page


@router.get("/reviews", response_model=ReviewsPage)
def reviews_page(
    session: SessionDep,
    cache: RenderCacheDep,
    response: Response,
    params: Annotated[ReviewsPageParams, Depends(get_reviews_page_params)],
) -> ReviewsPage:
    page = cache.get_or_compute(
        f"page:/reviews:{params.sort.value}:{params.limit}:{params.skip}",
        lambda: movies_service.get_reviews_page(
            session=session,
            sort=params.sort,
            limit=params.limit,
            skip=params.skip,
        ),
        tags=[MOVIES_TAG],
        path="/reviews",
        ttl=REVIEWS_REVALIDATE_SECONDS,
    )
    response.headers["Cache-Control"] = _cache_control(REVIEWS_REVALIDATE_SECONDS)
    return page


@router.get("/reviews/{slug}", response_model=ReviewPage)
def review_page(
    session: SessionDep,
    cache: RenderCacheDep,
    response: Response,
    slug: str,
) -> ReviewPage:
    path = f"/reviews/{slug}"
    page = cache.get_or_compute(
        f"page:{path}",
        lambda: movies_service.get_review_page(session=session, slug=slug),
        tags=[MOVIES_TAG, movie_tag(slug.lower())],
        path=path,
        ttl=REVIEW_REVALIDATE_SECONDS,
    )
    response.headers["Cache-Control"] = _cache_control(REVIEW_REVALIDATE_SECONDS)
    return page
