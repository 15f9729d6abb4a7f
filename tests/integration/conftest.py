"""Fixtures writing small Ventana-style BigTIFF files with tifffile."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest
from fakes import VENTANA_LAYOUT, Layout, write_slide

SlideWriter = Callable[..., Path]


@pytest.fixture
def slide_writer(tmp_path: Path) -> SlideWriter:
    """Return a function writing a slide into tmp_path."""

    def _write(
        layout: Layout | None = None,
        *,
        name: str = "slide.bif",
        tiled: bool = True,
    ) -> Path:
        if layout is None:
            layout = VENTANA_LAYOUT
        return write_slide(tmp_path / name, layout, tiled=tiled)

    return _write


@pytest.fixture
def ventana_slide_path(slide_writer: SlideWriter) -> Path:
    """A small, well-formed Ventana slide."""
    return slide_writer()
