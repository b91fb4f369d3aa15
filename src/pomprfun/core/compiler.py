"""Prompt compilation: selection state to one canonical sentence.

The compiler turns a :class:`~pomprfun.core.selection.Selection` into a
single comma-separated sentence ending in a period.  It is pure, total and
deterministic: the same selection always yields the same bytes, so the live
editor preview and the final compile step can never disagree.

Sentence Structure
------------------
::

    [scene], [character], [action], [background phrase], [pattern phrase].

Each fragment is omitted when empty.  The background phrase is either the
background label verbatim or, for chroma backgrounds, the canonical chroma
wording.  The pattern phrase is only produced for non-chroma backgrounds::

    against a {size} {type} pattern[ in #RRGGBB]

An entirely empty selection compiles to ``""`` rather than ``"."``.

Usage
-----
::

    selection = Selection(scene="on a beach", character="a surfer", action="running")
    compile_prompt(selection)
    # 'on a beach, a surfer, running.'
"""

from __future__ import annotations

import logging
import re

from .phrases import chroma_phrase, is_chroma_background, is_valid_hex, scale_phrase
from .selection import Selection

logger = logging.getLogger(__name__)

_SPACE_BEFORE_COMMA_RE = re.compile(r"\s+,")
_REPEATED_COMMA_RE = re.compile(r",,+")
_REPEATED_PERIOD_RE = re.compile(r"\.\.+")


def normalize_punctuation(text: str) -> str:
    """Tidy accidental punctuation left over from joining fragments.

    Removes whitespace before commas, collapses repeated commas and
    repeated periods, then trims the ends.  Applying it twice gives the
    same result as applying it once.
    """
    text = _SPACE_BEFORE_COMMA_RE.sub(",", text)
    text = _REPEATED_COMMA_RE.sub(",", text)
    text = _REPEATED_PERIOD_RE.sub(".", text)
    return text.strip()


def background_phrase(background: str) -> str:
    """Return the background fragment for a background label.

    Chroma backgrounds are replaced by their canonical wording; a chroma
    background without a recognised colour word yields ``""``.
    """
    if is_chroma_background(background):
        return chroma_phrase(background)
    return background


def pattern_phrase(selection: Selection) -> str:
    """Return the pattern fragment, or ``""`` when no pattern applies."""
    pattern = selection.pattern
    if is_chroma_background(selection.background) or not pattern.type:
        return ""

    phrase = f"against a {scale_phrase(pattern.scale)} {pattern.type} pattern"
    if pattern.hex and is_valid_hex(pattern.hex):
        phrase += f" in {pattern.hex}"
    return phrase


def compile_prompt(selection: Selection) -> str:
    """Compile a selection into its canonical prompt sentence.

    Args:
        selection: Current selection state.  It is read, never modified.

    Returns:
        The normalized sentence, or ``""`` if nothing was selected.
    """
    parts: list[str] = []

    # --- Subject -----------------------------------------------------------
    # Scene, character and action are used verbatim in fixed order.
    for value in (selection.scene, selection.character, selection.action):
        if value:
            parts.append(value)

    # --- Background --------------------------------------------------------
    bg_phrase = background_phrase(selection.background)
    if bg_phrase:
        parts.append(bg_phrase)

    # --- Pattern (locked out by chroma backgrounds) ------------------------
    pat_phrase = pattern_phrase(selection)
    if pat_phrase:
        parts.append(pat_phrase)

    text = normalize_punctuation(", ".join(parts) + ".")
    if text == ".":
        text = ""

    logger.debug(f"Compiled {len(parts)} fragments: {text!r}")
    return text
