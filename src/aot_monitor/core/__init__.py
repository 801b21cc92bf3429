"""
Core utilities for the AOT account monitor.
"""

from .config_manager import ConfigManager
from .logging_utils import LoggerMixin, get_logger, setup_logging
from .utils import format_currency, format_percentage, safe_float

__all__ = [
    "ConfigManager",
    "LoggerMixin",
    "setup_logging",
    "get_logger",
    "safe_float",
    "format_currency",
    "format_percentage",
]
