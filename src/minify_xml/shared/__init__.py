"""Shared utilities for XML minification.

This module provides the configuration, result and logging types used across
the pattern, transform and API layers.
"""

from .config import (
    STRICT,
    ConfigError,
    ConfigValidationError,
    MinifyOptions,
    is_strict,
    resolve_options,
)
from .logging import (
    CorrelationLogger,
    get_logger,
)
from .result import (
    MinifyResult,
    PassMetrics,
)

__all__ = [
    "STRICT",
    "ConfigError",
    "ConfigValidationError",
    "MinifyOptions",
    "is_strict",
    "resolve_options",
    "CorrelationLogger",
    "get_logger",
    "MinifyResult",
    "PassMetrics",
]
