"""CLI module for bifslide.

Provides the command-line interface for inspecting Ventana slides.
"""

from __future__ import annotations

from bifslide.cli.main import app

__all__ = ["app"]
