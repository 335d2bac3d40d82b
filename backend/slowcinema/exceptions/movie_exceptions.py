from uuid import UUID

from fastapi import status

from .base import AppError


class MovieNotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, *, slug: str | None = None, movie_id: UUID | None = None):
        self.slug = slug
        self.movie_id = movie_id
        if slug is not None:
            detail = f"Movie with slug '{slug}' not found."
        elif movie_id is not None:
            detail = f"Movie with ID {movie_id} not found."
        else:
            detail = "Movie not found."
        super().__init__(detail)


class InvalidPaginationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST


class InvalidSortFieldError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, sort: str, allowed: list[str]):
        self.sort = sort
        detail = (
            f"Invalid sort parameter '{sort}'. Must be one of: {', '.join(allowed)}."
        )
        super().__init__(detail)


class MovieSlugError(AppError):
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY

    def __init__(self, title: str):
        detail = f"Cannot derive a slug for movie '{title}'."
        super().__init__(detail)


class MovieSlugConflictError(AppError):
    """Two movies slugify to the same value; which one wins is not decided here."""

    status_code = status.HTTP_409_CONFLICT

    def __init__(self, slug: str):
        self.slug = slug
        detail = f"Another movie already uses the slug '{slug}'."
        super().__init__(detail)
