"""Data models for a POMPR-FUN editing session."""

import logging
from dataclasses import dataclass, field

from pomprfun.core.phrases import is_chroma_background
from pomprfun.core.selection import OptionSet, Selection

logger = logging.getLogger(__name__)


@dataclass
class SessionState:
    """Everything one user session needs between events.

    The selection is the only input to the compiler; the remaining fields
    are derived text and boundary flags reported back to the presentation
    layer.

    Attributes
    ----------
    selection : Selection
        Current choices
    options : OptionSet
        Option lists loaded at startup
    edit_content : str
        Editable prompt buffer (compiler-owned while the editor is locked)
    compiled : str
        Final compiled prompt, set only by the compile action
    hex_input : str
        Last hex text typed by the user, normalized for display
    hex_valid : bool
        Whether ``hex_input`` passed validation (drives input styling)
    """

    selection: Selection = field(default_factory=Selection)
    options: OptionSet = field(default_factory=OptionSet)
    edit_content: str = ""
    compiled: str = ""
    hex_input: str = ""
    hex_valid: bool = True

    @property
    def pattern_panel_enabled(self) -> bool:
        """Pattern controls are disabled while a chroma background is chosen."""
        return not is_chroma_background(self.selection.background)

    @property
    def recent_colors(self) -> list[str]:
        """Recent pattern colours for swatch rendering."""
        return list(self.selection.pattern.recent)

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"SessionState(locked={self.selection.editor_locked}, "
            f"options={self.options.counts()}, "
            f"compiled={self.compiled!r})"
        )
