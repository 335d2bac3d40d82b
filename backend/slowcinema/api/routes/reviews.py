from fastapi import APIRouter, Response

from slowcinema.api.deps import SessionDep
from slowcinema.models.review import ReviewCreate, ReviewUpdate
from slowcinema.schemas.review import ReviewDeleted, ReviewPublic
from slowcinema.services import reviews as reviews_service

router = APIRouter(prefix="/reviews", tags=["reviews"])


@router.get("", response_model=list[ReviewPublic])
def read_reviews(session: SessionDep, response: Response) -> list[ReviewPublic]:
    reviews = reviews_service.get_reviews(session=session)
    response.headers["Cache-Control"] = "public, s-maxage=60, stale-while-revalidate=30"
    return reviews


@router.post("", response_model=ReviewPublic)
def create_review(session: SessionDep, review_create: ReviewCreate) -> ReviewPublic:
    return reviews_service.create_review(session=session, review_create=review_create)


@router.get("/{review_id}", response_model=ReviewPublic)
def read_review(session: SessionDep, response: Response, review_id: str) -> ReviewPublic:
    review = reviews_service.get_review(session=session, review_id=review_id)
    response.headers["Cache-Control"] = "public, s-maxage=30, stale-while-revalidate=10"
    return review


@router.put("/{review_id}", response_model=ReviewPublic)
def update_review(
    session: SessionDep,
    review_id: str,
    review_update: ReviewUpdate,
) -> ReviewPublic:
    return reviews_service.update_review(
        session=session,
        review_id=review_id,
        review_update=review_update,
    )


@router.delete("/{review_id}", response_model=ReviewDeleted)
def delete_review(session: SessionDep, review_id: str) -> ReviewDeleted:
    reviews_service.delete_review(session=session, review_id=review_id)
    return ReviewDeleted(success=True)
