from uuid import UUID

from sqlmodel import SQLModel

from slowcinema.models.review import ReviewBase

__all__ = [
    "ReviewPublic",
    "ReviewDeleted",
]


class ReviewPublic(ReviewBase):
    pk: UUID
    id: int
    slug: str
    created_at: str
    updated_at: str | None = None


class ReviewDeleted(SQLModel):
    success: bool = True
