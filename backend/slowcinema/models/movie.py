import uuid
from datetime import datetime

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel

__all__ = [
    "MovieBase",
    "MovieCreate",
    "MovieUpdate",
    "Movie",
]


# Shared properties
class MovieBase(SQLModel):
    title: str = Field(min_length=1, max_length=512)
    director: str | None = None
    cast: str | None = Field(default=None, description="Comma-separated names")
    year: int | None = None
    duration: int | None = Field(default=None, description="Runtime in minutes")
    language: str | None = Field(
        default=None, description="One or more comma-joined labels or ISO codes"
    )
    rating: float = Field(default=0, ge=0, le=10)
    vote_count: int = Field(default=0, ge=0)
    description: str = ""
    image_preview_url: str | None = None
    image_url: str | None = None
    url: str | None = Field(default=None, description="Canonical source URL")


# Properties received from the ingestion process
class MovieCreate(MovieBase):
    updated_at: datetime | None = None


# Properties to receive on update, all are optional
class MovieUpdate(SQLModel):
    title: str | None = Field(default=None, min_length=1, max_length=512)
    director: str | None = None
    cast: str | None = None
    year: int | None = None
    duration: int | None = None
    language: str | None = None
    rating: float | None = Field(default=None, ge=0, le=10)
    vote_count: int | None = Field(default=None, ge=0)
    description: str | None = None
    image_preview_url: str | None = None
    image_url: str | None = None
    url: str | None = None


# Database model, database table inferred from class name
class Movie(MovieBase, table=True):
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    title: str = Field(index=True)
    slug: str | None = Field(default=None, unique=True, index=True)
    updated_at: datetime | None = Field(
        default=None,
        sa_type=DateTime(timezone=True),  # type: ignore[call-overload]
        index=True,
    )
