"""Command-line interface for minify-xml."""

from .main import main

__all__ = ["main"]
