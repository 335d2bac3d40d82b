from typing import Annotated

from fastapi import APIRouter, Query

from slowcinema.api.deps import RenderCacheDep, SessionDep
from slowcinema.schemas.revalidation import RevalidationResult
from slowcinema.services import revalidation as revalidation_service

router = APIRouter(prefix="/revalidate", tags=["revalidate"])


@router.post("", response_model=RevalidationResult)
def revalidate(
    session: SessionDep,
    cache: RenderCacheDep,
    tag: Annotated[str | None, Query()] = None,
    movie_slug: Annotated[str | None, Query(alias="movieSlug")] = None,
    path: Annotated[str | None, Query()] = None,
) -> RevalidationResult:
    return revalidation_service.revalidate(
        session=session,
        cache=cache,
        tag=tag,
        movie_slug=movie_slug,
        path=path,
    )
