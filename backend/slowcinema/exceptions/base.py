from fastapi import status


class AppError(Exception):
    """Error that maps onto an HTTP response with a ``{"detail"}`` body."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    detail: str = "An unexpected error occurred"
    headers: dict[str, str] | None = None

    def __init__(self, detail: str | None = None, *, headers: dict[str, str] | None = None):
        if detail:
            self.detail = detail
        if headers is not None:
            self.headers = headers
        super().__init__(self.detail)

    @property
    def is_server_error(self) -> bool:
        return self.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR
