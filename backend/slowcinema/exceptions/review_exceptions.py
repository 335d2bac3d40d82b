from fastapi import status

from .base import AppError


class ReviewNotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, review_id: str | int):
        self.review_id = review_id
        super().__init__("Review not found")


class ReviewIdConflictError(AppError):
    status_code = status.HTTP_409_CONFLICT
    headers = {"Retry-After": "1"}

    def __init__(self, attempts: int):
        self.attempts = attempts
        detail = f"Could not assign a review id after {attempts} attempts."
        super().__init__(detail)
