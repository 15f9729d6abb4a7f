"""Ordering of accumulated pyramid levels."""

from __future__ import annotations

from bifslide.ventana.exceptions import BadDataError
from bifslide.ventana.types import Level


def level_sort_key(level: Level) -> tuple[int, int]:
    """Sort key: widest first, then lowest directory index."""
    return (-level.width, level.directory)


def order_levels(levels: list[Level]) -> list[int]:
    """Return the directories of ``levels`` ordered by non-increasing width.

    Equal widths are ordered by ascending directory index. ``levels`` is
    consumed: it is empty when this function returns.

    Raises:
        BadDataError: If ``levels`` is empty.
    """
    if not levels:
        raise BadDataError("No pyramid levels found")

    ordered = sorted(levels, key=level_sort_key)
    levels.clear()
    return [level.directory for level in ordered]
