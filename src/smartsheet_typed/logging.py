"""Logging configuration.

The library logs through loguru and never configures sinks on import.
Applications (and the CLI) call configure_logging() once at startup.
"""

import logging
import sys

from loguru import logger


def configure_logging(log_level: str = "INFO") -> None:
    """Configure loguru with a human-readable stderr sink.

    Args:
        log_level: Minimum log level (TRACE, DEBUG, INFO, WARNING, ERROR, CRITICAL).
    """
    # Remove default handler
    logger.remove()

    logger.add(
        sys.stderr,
        level=log_level,
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
            "<level>{message}</level>"
        ),
        colorize=True,
        backtrace=False,
        diagnose=False,
    )

    _intercept_standard_logging(log_level)


class InterceptHandler(logging.Handler):
    """Route standard library log records to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        # Get corresponding loguru level
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller from where the logged message originated
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def _intercept_standard_logging(log_level: str) -> None:
    """Capture logs from httpx and httpcore."""
    for name in ["httpx", "httpcore"]:
        std_logger = logging.getLogger(name)
        std_logger.setLevel(log_level if log_level != "TRACE" else "DEBUG")
        std_logger.handlers = [InterceptHandler()]
        std_logger.propagate = False
