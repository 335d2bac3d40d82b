from fastapi import status

from .base import AppError


class MissingRevalidationTargetError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Missing tag, movieSlug or path parameter"
