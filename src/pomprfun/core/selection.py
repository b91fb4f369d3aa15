"""Data model for the current prompt selection.

A :class:`Selection` is the structured record of user choices that the
compiler turns into text.  It carries no behaviour beyond defaults; the
invariants (valid hex only, bounded recent history) are enforced by the
session boundary and by :mod:`pomprfun.core.recent_colors`.
"""

from dataclasses import dataclass, field

from .phrases import DEFAULT_PATTERN_SCALE

OPTION_CATEGORIES = ("scenes", "characters", "actions", "backgrounds")


@dataclass(frozen=True)
class Option:
    """One entry of a curated option list (one CSV row)."""

    name: str
    desc: str = ""


@dataclass
class OptionSet:
    """Option lists for every category, in file order."""

    scenes: list[Option] = field(default_factory=list)
    characters: list[Option] = field(default_factory=list)
    actions: list[Option] = field(default_factory=list)
    backgrounds: list[Option] = field(default_factory=list)

    def get(self, category: str) -> list[Option]:
        """Return the options for a category name (empty for unknown names)."""
        if category not in OPTION_CATEGORIES:
            return []
        return getattr(self, category)

    def counts(self) -> dict[str, int]:
        """Number of options per category, for logging and the config endpoint."""
        return {category: len(self.get(category)) for category in OPTION_CATEGORIES}


@dataclass
class Pattern:
    """Decorative background pattern settings.

    Attributes
    ----------
    type : str
        Pattern name from ``PATTERN_TYPES`` or ``""`` for none
    hex : str
        ``""`` or a ``#RRGGBB`` colour
    scale : int
        Size slider value, 0-100
    recent : list[str]
        Recently used colours, most recent first, at most five
    """

    type: str = ""
    hex: str = ""
    scale: int = DEFAULT_PATTERN_SCALE
    recent: list[str] = field(default_factory=list)


@dataclass
class Selection:
    """Current scene/character/action/background/pattern choices.

    ``editor_locked`` decides who owns the editable text buffer: when True
    the compiler regenerates it after every change, when False the user's
    own text is used verbatim.
    """

    scene: str = ""
    character: str = ""
    action: str = ""
    background: str = ""
    pattern: Pattern = field(default_factory=Pattern)
    editor_locked: bool = True
