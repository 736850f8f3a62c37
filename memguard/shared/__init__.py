"""
Shared module - Cross-cutting concerns / Shared Layer

Constants, enums and logging helpers used by every layer of memguard.
It must not depend on Infrastructure or Frameworks beyond the logging stack.
"""

from .consts import (
    BYTES_PER_MB,
    DEFAULT_FALLBACK_LIMIT_MB,
    DEFAULT_HEAP_LIMIT_PERCENT,
    HIGH_LOAD_THRESHOLD_RATIO,
    PAGE_SIZE_BYTES,
    EnumEnvironment,
    EnumLogLevel,
)
from .logging import configure_logging, get_logger, update_logging_from_settings

__all__ = [
    "BYTES_PER_MB",
    "DEFAULT_FALLBACK_LIMIT_MB",
    "DEFAULT_HEAP_LIMIT_PERCENT",
    "HIGH_LOAD_THRESHOLD_RATIO",
    "PAGE_SIZE_BYTES",
    "EnumEnvironment",
    "EnumLogLevel",
    "configure_logging",
    "get_logger",
    "update_logging_from_settings",
]
