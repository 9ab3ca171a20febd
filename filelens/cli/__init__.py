"""Command-line interfaces for FileLens."""

from .main import app, run

__all__ = ["app", "run"]
