"""Phrase rules used by the prompt compiler and the randomizer.

Every function here is pure and total: it accepts any string (or integer
scale) and never raises.  The rules cover four concerns:

- **Hex colours**: ``#RRGGBB`` format checking.
- **Pattern scale**: a 0-100 slider value mapped onto five fixed size words.
- **Chroma backgrounds**: solid keying backdrops (blue/green/white) that
  replace the background text with canonical wording and lock out patterns.
- **Locational scenes**: scenes that already name a place, for which the
  randomizer never adds a background.

Chroma Detection
----------------
Two predicates exist.  The *literal* predicate matches only the four named
chroma modes.  The *canonical* predicate matches any background containing
``"chroma"`` or ``"white screen"``; it is a superset of the literal one and
is the single rule applied by the compiler, the randomizer and the pattern
panel flag.  A background such as ``"red chroma"`` is therefore chroma with
no canonical phrase, and compiles to no background fragment at all.
"""

from __future__ import annotations

import re

# ---------------------------------------------------------------------------
# Vocabularies.
# ---------------------------------------------------------------------------

PATTERN_TYPES: tuple[str, ...] = (
    "houndstooth",
    "diagonal stripe",
    "dot",
    "grid",
    "chevron",
    "leopard",
    "wavy stripe",
    "windowpane plaid",
    "tartan plaid",
    "buffalo plaid",
    "madras plaid",
    "glen plaid",
)

CHROMA_MODES: tuple[str, ...] = ("blue chroma", "green chroma", "white screen", "white chroma")

LOCATIONAL_KEYWORDS: tuple[str, ...] = (
    "airport",
    "cafe",
    "beach",
    "corridor",
    "street",
    "room",
    "office",
    "classroom",
    "gate",
    "counter",
    "shoreline",
    "hallway",
    "station",
    "market",
    "alley",
    "platform",
    "terminal",
)

DEFAULT_PATTERN_SCALE = 40

_HEX_RE = re.compile(r"^#[0-9A-Fa-f]{6}$")

# Checked in order; the first colour word found wins.  White outranks green
# outranks blue, so "blue white chroma" reads as a white screen.
_CHROMA_PHRASES: tuple[tuple[str, str], ...] = (
    ("white", "against a seamless white screen background"),
    ("green", "against a seamless green chroma field"),
    ("blue", "against a seamless blue chroma field"),
)


def is_valid_hex(value: str) -> bool:
    """Return True iff ``value`` is ``#`` followed by exactly six hex digits."""
    if not isinstance(value, str):
        return False
    # fullmatch semantics: "$" alone would accept a trailing newline
    return _HEX_RE.fullmatch(value) is not None


def scale_phrase(scale: int) -> str:
    """Map a 0-100 pattern scale onto its size word.

    Thresholds are inclusive upper bounds: 20, 40, 60, 80.

    Examples:
        >>> scale_phrase(20)
        'tiny'
        >>> scale_phrase(75)
        'large'
    """
    if scale <= 20:
        return "tiny"
    if scale <= 40:
        return "small"
    if scale <= 60:
        return "medium"
    if scale <= 80:
        return "large"
    return "very large"


def is_chroma_background(background: str, *, literal: bool = False) -> bool:
    """Check whether a background is a chroma keying backdrop.

    Args:
        background: Background label (any case).
        literal: When True, match only the four named chroma modes.  The
            default canonical rule matches any ``"chroma"`` or
            ``"white screen"`` substring.

    Returns:
        True if the background is chroma under the selected rule.
    """
    if not background:
        return False
    bg = background.lower()
    if literal:
        return any(mode in bg for mode in CHROMA_MODES)
    return "chroma" in bg or "white screen" in bg


def chroma_phrase(background: str) -> str:
    """Return the canonical chroma wording for a background, or ``""``."""
    bg = (background or "").lower()
    for colour, phrase in _CHROMA_PHRASES:
        if colour in bg:
            return phrase
    return ""


def is_locational_scene(scene: str) -> bool:
    """Return True if the scene text already names a physical place."""
    if not scene:
        return False
    text = scene.lower()
    return any(keyword in text for keyword in LOCATIONAL_KEYWORDS)
