"""Public minification API."""

from .minifier import PASSES, MinifyPass, XMLMinifier, minify, minify_file, trim_document

__all__ = [
    "PASSES",
    "MinifyPass",
    "XMLMinifier",
    "minify",
    "minify_file",
    "trim_document",
]
