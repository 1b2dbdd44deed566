"""Centralized logging configuration for the NewTube application."""

import logging
import sys
from typing import Literal

from newtube.config import get_settings

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

DEFAULT_LEVELS: dict[str, LogLevel] = {
    "development": "DEBUG",
    "production": "INFO",
    "test": "WARNING",
}

# Collaborator clients log every request at INFO
NOISY_LOGGERS = ("httpx", "httpcore", "uvicorn.access", "asyncpg", "redis")


def setup_logging(level: LogLevel | None = None) -> None:
    """Configure logging for the application.

    Args:
        level: Override log level (default depends on ``APP_ENV``)
    """
    settings = get_settings()
    level = level or DEFAULT_LEVELS[settings.app_env]

    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    # SQL statements are only wanted when DB_ECHO is on
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.db_echo else logging.WARNING
    )


def get_logger(name: str) -> logging.Logger:
    """Get a logger with the given name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)


class LogContext:
    """Prefixes log messages with request correlation metadata."""

    def __init__(self, logger: logging.Logger, **context: str | None) -> None:
        """Initialize the log context.

        Args:
            logger: The logger to use
            **context: Key-value pairs to include in log messages (None values are skipped)
        """
        self.logger = logger
        self.context = {k: v for k, v in context.items() if v is not None}
        self.prefix = " ".join(f"[{k}={v}]" for k, v in self.context.items())

    def debug(self, msg: str, *args, **kwargs) -> None:
        self.logger.debug(f"{self.prefix} {msg}", *args, **kwargs)

    def info(self, msg: str, *args, **kwargs) -> None:
        self.logger.info(f"{self.prefix} {msg}", *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs) -> None:
        self.logger.warning(f"{self.prefix} {msg}", *args, **kwargs)

    def error(self, msg: str, *args, **kwargs) -> None:
        self.logger.error(f"{self.prefix} {msg}", *args, **kwargs)

    def exception(self, msg: str, *args, **kwargs) -> None:
        self.logger.exception(f"{self.prefix} {msg}", *args, **kwargs)
