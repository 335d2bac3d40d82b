from slowcinema.models.review import Review
from slowcinema.schemas.review import ReviewPublic


def to_public(review: Review) -> ReviewPublic:
    return ReviewPublic.model_validate(review)
