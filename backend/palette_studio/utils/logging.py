"""
Palette Studio Structured Logging
Configures the loguru sink once and binds request context as ``extra`` fields.
"""
import sys
from typing import Dict, Any, Optional

from loguru import logger

from palette_studio.config import config

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level} | {name} | {message} | {extra}"


class StructuredLogger:
    """Route-level logger; services log through loguru's ``logger`` directly."""

    def __init__(self, level: str = config.LOG_LEVEL):
        logger.remove()
        logger.add(sys.stdout, format=LOG_FORMAT, level=level)

    def _log(self, level: str, message: str, extra: Optional[Dict[str, Any]]):
        logger.bind(**(extra or {})).opt(depth=2).log(level, message)

    def info(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._log("INFO", message, extra)

    def warning(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._log("WARNING", message, extra)


_logger: Optional[StructuredLogger] = None


def get_logger() -> StructuredLogger:
    """Get or create the global logger, configuring the sink on first use."""
    global _logger
    if _logger is None:
        _logger = StructuredLogger()
    return _logger
