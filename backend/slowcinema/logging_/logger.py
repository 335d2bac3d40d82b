import inspect
import logging
import os
import sys
from datetime import datetime
from typing import Any

import pytz
from loguru import logger
from loguru._logger import Logger

from slowcinema.core.config import settings


def dynamic_formatter(record: Any) -> str:
    base = "[{time:HH:mm:ss}] [{level}] {module}:{function}:{line} - {message}"

    extras = record.get("extra", {})
    if extras:
        base += " ("
        for key, value in extras.items():
            base += f"{key}={value}, "
        base += ")\n"
    else:
        base += "\n"

    if record["exception"]:
        base += "{exception}"

    return base


def dynamic_console_formatter(record: Any) -> str:
    base = "[<green>{time:HH:mm:ss}</green>] <level>[{level}]</level> {module}:{function}:<blue>{line}</blue> - {message}\n"

    if record["exception"]:
        base += "{exception}"

    return base


class InterceptHandler(logging.Handler):
    """Route records from the standard ``logging`` module into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = inspect.currentframe(), 0
        while frame and (depth == 0 or frame.f_code.co_filename == logging.__file__):
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def setup_logger(name: str, log_dir: str | None = None) -> Logger:
    logger.remove()  # Remove default handler

    if settings.LOG_TO_FILES:
        today = datetime.now(pytz.timezone(settings.SITE_TIMEZONE)).strftime("%Y-%m-%d")
        log_path = os.path.join(log_dir or settings.LOG_DIR, today, name)
        os.makedirs(log_path, exist_ok=True)

        if settings.DEBUG:
            logger.add(
                os.path.join(log_path, "debug.log"),
                format=dynamic_formatter,
                level="DEBUG",
                rotation="00:00",  # Rotate daily at midnight
                compression="zip",  # Compress rotated logs
                enqueue=True,
                backtrace=True,
                diagnose=True,
                retention="7 days",
            )

        logger.add(
            os.path.join(log_path, "error.log"),
            format=dynamic_formatter,
            level="ERROR",
            rotation="00:00",
            compression="zip",
            enqueue=True,
            backtrace=True,
            diagnose=True,
            retention="30 days",
        )

        logger.add(
            os.path.join(log_path, "info.log"),
            format=dynamic_formatter,
            level="INFO",
            rotation="00:00",
            compression="zip",
            enqueue=True,
            backtrace=True,
            diagnose=True,
        )

    logger.add(
        sys.stderr,
        format=dynamic_console_formatter,
        level="DEBUG" if settings.DEBUG else "INFO",
        enqueue=True,
        backtrace=True,
        diagnose=settings.DEBUG,
        colorize=True,
    )

    logging.basicConfig(handlers=[InterceptHandler()], level=logging.INFO, force=True)
    for uvicorn_logger in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        std_logger = logging.getLogger(uvicorn_logger)
        std_logger.handlers = [InterceptHandler()]
        std_logger.propagate = False

    return logger  # type: ignore
