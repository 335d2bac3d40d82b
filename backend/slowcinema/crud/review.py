from uuid import UUID

from sqlalchemy import func, select
from sqlmodel import Session, col

from slowcinema.models.review import Review, ReviewUpdate


def get_reviews(*, session: Session) -> list[Review]:
    stmt = select(Review).order_by(col(Review.id))
    result = session.execute(stmt)
    reviews: list[Review] = list(result.scalars().all())
    return reviews


def get_review_by_pk(*, session: Session, pk: UUID) -> Review | None:
    """
    Retrieve a review by its store-native identifier.

    Parameters:
        session (Session): The database session.
        pk (UUID): The store identifier of the review.
    Returns:
        Review | None: The review if found, otherwise None.
    """
    return session.get(Review, pk)


def get_review_by_legacy_id(*, session: Session, id: int) -> Review | None:
    """
    Retrieve a review by its legacy numeric id.

    Parameters:
        session (Session): The database session.
        id (int): The sequence id of the review.
    Returns:
        Review | None: The review if found, otherwise None.
    """
    stmt = select(Review).where(col(Review.id) == id)
    result = session.execute(stmt)
    review: Review | None = result.scalars().one_or_none()
    return review


def get_max_review_id(*, session: Session) -> int | None:
    stmt = select(func.max(col(Review.id)))
    return session.execute(stmt).scalar_one_or_none()


def create_review(*, session: Session, review: Review) -> Review:
    """
    Insert a review. Raises an IntegrityError if its id is already taken.

    Parameters:
        session (Session): The database session.
        review (Review): The review to insert, with its id assigned.
    Returns:
        Review: The inserted review.
    Raises:
        IntegrityError: If a review with the same id already exists.
    """
    session.add(review)
    session.flush()  # Check for Unique Violations
    return review


def update_review(*, db_review: Review, review_update: ReviewUpdate, updated_at: str) -> Review:
    review_data = review_update.model_dump(exclude_unset=True)
    # title and slug are required columns; an explicit null leaves them as is
    for key in ("title", "slug"):
        if review_data.get(key, "") is None:
            del review_data[key]
    review_data["updated_at"] = updated_at
    db_review.sqlmodel_update(review_data)
    return db_review


def delete_review(*, session: Session, db_review: Review) -> None:
    session.delete(db_review)
    session.flush()
