"""Core infrastructure: configuration and logging."""

from csv2json.core.config import StreamConfig, load_settings
from csv2json.core.logging import configure_logging, get_logger

__all__ = [
    "StreamConfig",
    "configure_logging",
    "get_logger",
    "load_settings",
]
