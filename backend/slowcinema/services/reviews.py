from uuid import UUID

from loguru import logger
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from slowcinema.converters import review as review_converters
from slowcinema.core.slugs import slugify
from slowcinema.crud import review as reviews_crud
from slowcinema.exceptions.base import AppError
from slowcinema.exceptions.review_exceptions import (
    ReviewIdConflictError,
    ReviewNotFoundError,
)
from slowcinema.models.review import Review, ReviewCreate, ReviewUpdate
from slowcinema.schemas.review import ReviewPublic
from slowcinema.services import revalidation as revalidation_service
from slowcinema.utils import isoformat_utc

MAX_ID_ATTEMPTS = 3


def get_reviews(*, session: Session) -> list[ReviewPublic]:
    return [
        review_converters.to_public(review)
        for review in reviews_crud.get_reviews(session=session)
    ]


def find_review(*, session: Session, review_id: str) -> Review | None:
    """
    Look a review up by either kind of identifier.

    A UUID string is tried as the store-native identifier, a string of
    digits as the legacy numeric id. Anything else matches nothing.
    """
    try:
        pk = UUID(review_id)
    except ValueError:
        pass
    else:
        review = reviews_crud.get_review_by_pk(session=session, pk=pk)
        if review is not None:
            return review
    if review_id.isascii() and review_id.isdigit():
        return reviews_crud.get_review_by_legacy_id(session=session, id=int(review_id))
    return None


def get_review(*, session: Session, review_id: str) -> ReviewPublic:
    """
    Raises:
        ReviewNotFoundError: If no review matches the identifier.
    """
    review = find_review(session=session, review_id=review_id)
    if review is None:
        raise ReviewNotFoundError(review_id)
    return review_converters.to_public(review)


def next_review_id(*, session: Session) -> int:
    current = reviews_crud.get_max_review_id(session=session)
    return (current or 0) + 1


def create_review(*, session: Session, review_create: ReviewCreate) -> ReviewPublic:
    """
    Create a review with the next free sequence id.

    The id is read as the current maximum plus one and inserted inside a
    savepoint. When a concurrent create takes the same id first, the unique
    constraint rejects the insert and the id is read again, up to
    ``MAX_ID_ATTEMPTS`` times.

    Parameters:
        session (Session): Database session.
        review_create (ReviewCreate): The review fields sent by the client.
    Returns:
        ReviewPublic: The stored review.
    Raises:
        ReviewIdConflictError: If every attempt hit an id conflict.
        AppError: If the insert fails for another reason.
    """
    data = review_create.model_dump()
    data["slug"] = data.get("slug") or slugify(review_create.title)
    created_at = isoformat_utc()

    review: Review | None = None
    for attempt in range(1, MAX_ID_ATTEMPTS + 1):
        new_id = next_review_id(session=session)
        candidate = Review(**data, id=new_id, created_at=created_at)
        try:
            with session.begin_nested():
                review = reviews_crud.create_review(session=session, review=candidate)
            break
        except IntegrityError:
            logger.warning("Review id {} already taken (attempt {})", new_id, attempt)
        except Exception as e:
            raise AppError from e
    if review is None:
        raise ReviewIdConflictError(MAX_ID_ATTEMPTS)

    session.commit()
    session.refresh(review)
    logger.info("Created review", review_id=review.id)
    revalidation_service.emit(
        session=session,
        keys=revalidation_service.invalidation_keys(review_id=review.id),
        reason="review created",
    )
    return review_converters.to_public(review)


def update_review(
    *,
    session: Session,
    review_id: str,
    review_update: ReviewUpdate,
) -> ReviewPublic:
    """
    Set the provided fields on a review and stamp ``updated_at``.

    Raises:
        ReviewNotFoundError: If no review matches the identifier.
        AppError: If the update fails.
    """
    review = find_review(session=session, review_id=review_id)
    if review is None:
        raise ReviewNotFoundError(review_id)

    try:
        reviews_crud.update_review(
            db_review=review,
            review_update=review_update,
            updated_at=isoformat_utc(),
        )
        session.commit()
    except Exception as e:
        session.rollback()
        raise AppError from e

    session.refresh(review)
    revalidation_service.emit(
        session=session,
        keys=revalidation_service.invalidation_keys(review_id=review.id),
        reason="review updated",
    )
    return review_converters.to_public(review)


def delete_review(*, session: Session, review_id: str) -> None:
    """
    Raises:
        ReviewNotFoundError: If no review matches the identifier.
        AppError: If the delete fails.
    """
    review = find_review(session=session, review_id=review_id)
    if review is None:
        raise ReviewNotFoundError(review_id)

    legacy_id = review.id
    try:
        reviews_crud.delete_review(session=session, db_review=review)
        session.commit()
    except Exception as e:
        session.rollback()
        raise AppError from e

    logger.info("Deleted review", review_id=legacy_id)
    revalidation_service.emit(
        session=session,
        keys=revalidation_service.invalidation_keys(review_id=legacy_id),
        reason="review deleted",
    )
