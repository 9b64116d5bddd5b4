"""Command-line interface for Enharmonic."""

from .app import app

__all__ = ["app"]
