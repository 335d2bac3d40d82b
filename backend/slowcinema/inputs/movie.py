# slowcinema/inputs/movie.py

from typing import Annotated

from fastapi import Query
from pydantic import BaseModel

from slowcinema.core.enums import MovieSortField, ReviewListSort, SortOrder
from slowcinema.exceptions.movie_exceptions import InvalidPaginationError
from slowcinema.services.movies import parse_sort_field, validate_window

DEFAULT_LIMIT = 50


class ListParams(BaseModel):
    limit: int = DEFAULT_LIMIT
    skip: int = 0
    sort: MovieSortField = MovieSortField.UPDATED_AT
    order: SortOrder = SortOrder.DESC


class ReviewsPageParams(BaseModel):
    limit: int = DEFAULT_LIMIT
    skip: int = 0
    sort: ReviewListSort = ReviewListSort.ADDED


def parse_int_param(name: str, value: str | None, default: int) -> int:
    """
    Parse an integer query parameter.

    Raises:
        InvalidPaginationError: If the value is not an integer.
    """
    if value is None or value.strip() == "":
        return default
    try:
        return int(value.strip())
    except ValueError:
        raise InvalidPaginationError(
            f"Invalid {name} parameter. Must be an integer."
        ) from None


def parse_window(limit_raw: str | None, skip_raw: str | None) -> tuple[int, int]:
    limit = parse_int_param("limit", limit_raw, DEFAULT_LIMIT)
    skip = parse_int_param("skip", skip_raw, 0)
    validate_window(limit=limit, skip=skip)
    return limit, skip


def get_list_params(
    limit: Annotated[str | None, Query(description="Page size, 1 to 100")] = None,
    skip: Annotated[str | None, Query(description="Number of movies to skip")] = None,
    sort: Annotated[
        str | None,
        Query(description="updated_at, title, year, duration or rating"),
    ] = None,
    order: Annotated[str | None, Query(description="asc or desc")] = None,
) -> ListParams:
    parsed_limit, parsed_skip = parse_window(limit, skip)
    return ListParams(
        limit=parsed_limit,
        skip=parsed_skip,
        sort=parse_sort_field(sort),
        order=SortOrder.ASC if order == "asc" else SortOrder.DESC,
    )


def get_reviews_page_params(
    sort: Annotated[ReviewListSort, Query()] = ReviewListSort.ADDED,
    limit: Annotated[str | None, Query()] = None,
    skip: Annotated[str | None, Query()] = None,
) -> ReviewsPageParams:
    parsed_limit, parsed_skip = parse_window(limit, skip)
    return ReviewsPageParams(limit=parsed_limit, skip=parsed_skip, sort=sort)
