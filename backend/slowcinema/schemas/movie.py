from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from slowcinema.models.movie import MovieBase

__all__ = [
    "MovieSummary",
    "MovieFeatured",
    "MovieDetail",
    "Pagination",
    "MovieList",
]


class MovieSummary(BaseModel):
    """Display fields used by listings and the homepage."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    slug: str | None = None
    image_preview_url: str | None = None
    director: str | None = None
    year: int | None = None
    description: str = ""
    rating: float = 0
    updated_at: datetime | None = None
    url: str | None = None
    language: str | None = None
    duration: int | None = None


class MovieFeatured(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    slug: str | None = None
    image_url: str | None = None
    image_preview_url: str | None = None
    director: str | None = None
    year: int | None = None
    url: str | None = None
    language: str | None = None


class MovieDetail(MovieBase):
    id: UUID
    slug: str | None = None
    updated_at: datetime | None = None


class Pagination(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    total: int
    limit: int
    skip: int
    has_more: bool


class MovieList(BaseModel):
    movies: list[MovieSummary]
    pagination: Pagination
