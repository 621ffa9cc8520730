"""XML minifier.

Shrinks XML documents while preserving their meaning, using context-scoped
pattern rewriting instead of a DOM or token stream.

Progressive API Disclosure:
- Level 1: Simple functions - minify(), minify_file()
- Level 2: Configured minifier - XMLMinifier class with per-pass reports
"""

__version__ = "0.1.0"
__author__ = "minify-xml developers"

from .api import XMLMinifier, minify, minify_file
from .shared.config import ConfigError, ConfigValidationError, MinifyOptions
from .shared.result import MinifyResult, PassMetrics

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: Simple functions
    "minify",
    "minify_file",

    # Level 2: Configured minifier
    "XMLMinifier",

    # Configuration and results
    "MinifyOptions",
    "ConfigError",
    "ConfigValidationError",
    "MinifyResult",
    "PassMetrics",
]
