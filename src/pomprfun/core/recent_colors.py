"""Bounded most-recent-first history of pattern colours."""

from __future__ import annotations

from collections.abc import Sequence

from .phrases import is_valid_hex

MAX_RECENT_COLORS = 5


def remember_color(history: Sequence[str], hex_color: str) -> list[str]:
    """Return a new history with ``hex_color`` moved to the front.

    Any existing occurrence is removed first, so the history never holds
    duplicates, and the result is truncated to ``MAX_RECENT_COLORS``.
    Invalid colours leave the history unchanged.

    Args:
        history: Current history, most recent first.
        hex_color: Colour to record (``#RRGGBB``).

    Returns:
        A new list; ``history`` itself is not modified.

    Examples:
        >>> remember_color(["#000000", "#FFFFFF"], "#FFFFFF")
        ['#FFFFFF', '#000000']
    """
    if not is_valid_hex(hex_color):
        return list(history)

    updated = [color for color in history if color != hex_color]
    updated.insert(0, hex_color)
    return updated[:MAX_RECENT_COLORS]
