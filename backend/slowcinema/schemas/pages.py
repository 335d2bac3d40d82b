from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from slowcinema.core.enums import ReviewListSort
from slowcinema.schemas.movie import MovieDetail, MovieFeatured, MovieSummary, Pagination

__all__ = [
    "HomePage",
    "ReviewsPage",
    "OpenGraphImage",
    "PageMetadata",
    "ReviewPage",
]


class HomePage(BaseModel):
    latest: list[MovieSummary]
    featured: list[MovieFeatured]


class ReviewsPage(BaseModel):
    sort: ReviewListSort
    movies: list[MovieSummary]
    pagination: Pagination


class OpenGraphImage(BaseModel):
    url: str
    width: int = 1200
    height: int = 800
    alt: str


class PageMetadata(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    title: str
    description: str
    keywords: list[str]
    canonical_url: str
    published_time: str
    images: list[OpenGraphImage]


class ReviewPage(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    movie: MovieDetail
    language_display: str
    cast: list[str]
    metadata: PageMetadata
    structured_data: dict[str, Any]
