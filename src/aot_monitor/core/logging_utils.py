"""
Logging utilities for the AOT account monitor.

Modules log through the standard library; setup_logging() routes those
records into loguru, which owns the console and rotating file sinks.
"""

import logging
import sys
from pathlib import Path
from typing import Any, Optional

from loguru import logger

DEFAULT_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[logger_name]}</cyan> - "
    "<level>{message}</level>"
)


class InterceptHandler(logging.Handler):
    """Forward standard library log records to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        logger.bind(logger_name=record.name).opt(exception=record.exc_info).log(
            level, record.getMessage()
        )


def get_logger(name: str, config: Optional[dict[str, Any]] = None) -> logging.Logger:
    """Get a named logger, optionally overriding its level.

    Args:
        name: Logger name (typically module or class name)
        config: Optional logging configuration; only ``level`` is read

    Returns:
        Logger instance

    Example:
        >>> logger = get_logger('monitor', {'level': 'DEBUG'})
        >>> logger.info('Refresh completed')
    """
    logger_instance = logging.getLogger(name)
    if config and config.get("level"):
        level = str(config["level"]).upper()
        logger_instance.setLevel(getattr(logging, level, logging.INFO))
    return logger_instance


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    rotation: str = "10 MB",
    retention: str = "1 week",
    format_string: Optional[str] = None,
) -> None:
    """Setup application logging using loguru.

    Args:
        level: Logging level
        log_file: Path to log file
        rotation: Loguru rotation setting for the file sink
        retention: Loguru retention setting for the file sink
        format_string: Custom loguru format string
    """
    level = level.upper()
    logger.remove()
    logger.configure(extra={"logger_name": "aot_monitor"})

    if format_string is None:
        format_string = DEFAULT_FORMAT

    logger.add(sys.stdout, format=format_string, level=level, colorize=True)

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            format=format_string,
            level=level,
            rotation=rotation,
            retention=retention,
            compression="zip",
        )

    logging.basicConfig(
        handlers=[InterceptHandler()],
        level=getattr(logging, level, logging.INFO),
        force=True,
    )


class LoggerMixin:
    """Mixin class to add logging capabilities to any class."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._logger: Optional[logging.Logger] = None

    @property
    def logger(self) -> logging.Logger:
        """Get logger for this class."""
        if getattr(self, "_logger", None) is None:
            config = getattr(self, "config", None)
            logging_config = config.get("logging", {}) if isinstance(config, dict) else {}
            self._logger = get_logger(self.__class__.__name__, logging_config)
        return self._logger
