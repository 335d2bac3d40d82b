from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Response

from slowcinema.api.deps import SessionDep
from slowcinema.inputs.movie import ListParams, get_list_params
from slowcinema.schemas.movie import MovieDetail, MovieList
from slowcinema.services import movies as movies_service

router = APIRouter(prefix="/movies", tags=["movies"])

CACHE_CONTROL = "public, s-maxage=3600, stale-while-revalidate=86400"


@router.get("", response_model=MovieList)
def read_movies(
    session: SessionDep,
    response: Response,
    params: Annotated[ListParams, Depends(get_list_params)],
) -> MovieList:
    movies = movies_service.list_movies(
        session=session,
        limit=params.limit,
        skip=params.skip,
        sort=params.sort,
        order=params.order,
    )
    response.headers["Cache-Control"] = CACHE_CONTROL
    return movies


@router.get("/{movie_id}", response_model=MovieDetail)
def read_movie(
    *,
    session: SessionDep,
    response: Response,
    movie_id: UUID,
) -> MovieDetail:
    movie = movies_service.get_movie_by_id(session=session, movie_id=movie_id)
    response.headers["Cache-Control"] = CACHE_CONTROL
    return movie
