import uuid

from sqlmodel import Field, SQLModel

__all__ = [
    "ReviewBase",
    "ReviewCreate",
    "ReviewUpdate",
    "Review",
]


# Shared properties
class ReviewBase(SQLModel):
    title: str = Field(min_length=1, max_length=512)
    content: str | None = None
    film_title: str | None = None
    director: str | None = None
    year: int | None = None
    rating: float | None = Field(default=None, ge=0, le=10)
    slug: str | None = None
    author_id: str | None = None


# Properties to receive via API on creation
class ReviewCreate(ReviewBase):
    pass


# Properties to receive via API on update, all are optional
class ReviewUpdate(ReviewBase):
    title: str | None = Field(default=None, min_length=1, max_length=512)  # type: ignore


# Database model, database table inferred from class name
class Review(ReviewBase, table=True):
    pk: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    id: int = Field(unique=True, index=True, description="Legacy sequence id")
    slug: str = Field(index=True)
    created_at: str = Field(description="ISO-8601 creation time")
    updated_at: str | None = Field(default=None, description="ISO-8601 update time")
