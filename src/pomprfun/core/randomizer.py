"""Randomix: produce a random but well-formed selection.

The randomizer draws scene, character and action uniformly from the loaded
option lists and then decides whether to add a background and a pattern:

1. Scenes that already name a place (see
   :func:`~pomprfun.core.phrases.is_locational_scene`) never get a
   background or pattern.
2. Otherwise a background is added with probability ``BACKGROUND_PROBABILITY``.
3. A pattern is only possible on a non-chroma background, and is added with
   probability ``PATTERN_PROBABILITY``.  It gets a random type, a random
   ``#RRGGBB`` colour and a random 0-100 scale; the colour is recorded in
   the recent-colour history.

The random source is injectable so runs can be reproduced with a seeded
:class:`random.Random`.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Sequence
from typing import TypeVar

from .phrases import PATTERN_TYPES, is_chroma_background, is_locational_scene
from .recent_colors import remember_color
from .selection import Option, OptionSet, Pattern, Selection

logger = logging.getLogger(__name__)

BACKGROUND_PROBABILITY = 0.58
PATTERN_PROBABILITY = 0.28

T = TypeVar("T")


def pick_random(items: Sequence[T], rng: random.Random) -> T | None:
    """Pick one element uniformly, or None for an empty sequence."""
    if not items:
        return None
    return rng.choice(items)


def _pick_name(options: Sequence[Option], rng: random.Random) -> str:
    option = pick_random(options, rng)
    return option.name if option else ""


def random_hex(rng: random.Random) -> str:
    """Return a uniformly random 24-bit colour as uppercase ``#RRGGBB``."""
    return f"#{rng.randrange(0x1000000):06X}"


def random_scale(rng: random.Random) -> int:
    """Return a uniformly random integer scale in [0, 100]."""
    return rng.randint(0, 100)


def randomize(
    options: OptionSet,
    rng: random.Random | None = None,
    recent: Sequence[str] = (),
) -> Selection:
    """Build a random selection from the available options.

    Args:
        options: Option lists to draw from.  Empty lists yield ``""``.
        rng: Random source (default: a fresh unseeded ``random.Random``).
        recent: Existing recent-colour history to carry into the result.

    Returns:
        A new Selection.  ``editor_locked`` keeps its default; callers that
        track lock state copy it over themselves.
    """
    rng = rng or random.Random()

    selection = Selection(
        scene=_pick_name(options.scenes, rng),
        character=_pick_name(options.characters, rng),
        action=_pick_name(options.actions, rng),
        pattern=Pattern(recent=list(recent)),
    )

    if is_locational_scene(selection.scene):
        logger.debug(f"Scene {selection.scene!r} is locational; skipping background")
        return selection

    if rng.random() < BACKGROUND_PROBABILITY:
        selection.background = _pick_name(options.backgrounds, rng)

        if (
            selection.background
            and not is_chroma_background(selection.background)
            and rng.random() < PATTERN_PROBABILITY
        ):
            pattern = selection.pattern
            pattern.type = pick_random(PATTERN_TYPES, rng) or ""
            pattern.hex = random_hex(rng)
            pattern.scale = random_scale(rng)
            pattern.recent = remember_color(pattern.recent, pattern.hex)
            logger.debug(f"Random pattern: {pattern.type} {pattern.hex} @ {pattern.scale}")

    return selection
