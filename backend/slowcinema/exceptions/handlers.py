from logging import getLogger

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from .base import AppError

logger = getLogger(__name__)

NO_STORE_HEADERS = {"Cache-Control": "no-store"}


def register_exception_handlers(app: FastAPI):
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        if exc.is_server_error:
            logger.error(f"{exc.status_code} Error on {request.url.path}: {exc.detail}")
            return JSONResponse(
                status_code=exc.status_code,
                content={"detail": "Internal Server Error"},
                headers=NO_STORE_HEADERS,
            )
        logger.warning(f" {exc.status_code} Error: {exc.detail}")
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail},
            headers=exc.headers,
        )

    @app.exception_handler(SQLAlchemyError)
    async def store_error_handler(request: Request, exc: SQLAlchemyError):
        logger.exception(f"Store failure on {request.url.path}", exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal Server Error"},
            headers=NO_STORE_HEADERS,
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.url.path}", exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "An unexpected error occurred."},
            headers=NO_STORE_HEADERS,
        )
