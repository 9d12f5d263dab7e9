"""
Logging configuration using Loguru.

Standard-library loggers (uvicorn, httpx, the OpenAI SDK) are forwarded into
loguru so the server writes one stream with one format.
"""

import inspect
import logging
import sys
from pathlib import Path

from loguru import logger

from synapse.config import LoggingConfig

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"

FORWARDED_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access", "fastapi", "httpx", "openai")


class InterceptHandler(logging.Handler):
    """Re-emit standard logging records through loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Report the caller of logging, not this handler
        frame, depth = inspect.currentframe(), 0
        while frame and (depth == 0 or frame.f_code.co_filename == logging.__file__):
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def setup_logging(config: LoggingConfig | None = None) -> None:
    """
    Configure loguru sinks and forward standard logging into them.

    Args:
        config: Logging configuration (default: LoggingConfig())
    """
    config = config or LoggingConfig()
    logger.remove()

    logger.add(sys.stderr, level=config.level, format=CONSOLE_FORMAT, colorize=True)

    if config.log_to_file:
        log_path = Path(config.log_dir)
        log_path.mkdir(parents=True, exist_ok=True)

        logger.add(
            log_path / "synapse_{time:YYYY-MM-DD}.log",
            level=config.level,
            format=FILE_FORMAT,
            rotation=config.file_rotation,
            retention=config.file_retention,
            compression=config.compression,
            serialize=config.serialize,
            enqueue=True,
        )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for name in FORWARDED_LOGGERS:
        std_logger = logging.getLogger(name)
        std_logger.handlers = [InterceptHandler()]
        std_logger.propagate = False


def get_logger(name: str):
    """Get a logger instance for a module."""
    return logger.bind(module=name)
