"""Session controller: every inbound presentation event.

Each handler takes the :class:`~pomprfun.session.models.SessionState`,
updates the selection, regenerates derived text and returns the state.  A
handler finishes all of its work before returning, so two compilations can
never interleave.

Editor Modes
------------
- **Locked** (auto-compose): after every change the compiler rewrites the
  editable buffer.  The compile action reruns the compiler into
  ``compiled``; both passes produce identical text for identical state.
- **Unlocked** (manual override): the buffer belongs to the user and is
  never rewritten.  The compile action copies it verbatim into
  ``compiled``, refusing a blank buffer.

Re-locking the editor throws away manual edits and restores canonical text.
"""

import logging
import random
from collections.abc import Mapping
from typing import Any

from pomprfun.core.compiler import compile_prompt
from pomprfun.core.options import OptionSource
from pomprfun.core.phrases import DEFAULT_PATTERN_SCALE
from pomprfun.core.randomizer import randomize
from pomprfun.core.recent_colors import remember_color
from pomprfun.core.selection import Pattern, Selection

from .models import SessionState
from .validation import (
    ValidationError,
    clamp_scale,
    normalize_hex_input,
    validate_hex_color,
    validate_manual_prompt,
    validate_pattern_type,
)

logger = logging.getLogger(__name__)


def initialize_session_state(
    state: SessionState | None = None, option_source: OptionSource | None = None
) -> SessionState:
    """Create (or refresh) a session and load its option lists.

    Args:
        state: Existing SessionState or None
        option_source: Source of option lists; when None the options already
            on the state are kept

    Returns:
        Initialized SessionState with a fresh preview
    """
    if state is None:
        logger.info("Creating new SessionState")
        state = SessionState()

    if option_source is not None:
        state.options = option_source.load_all()
        logger.info(f"Loaded options: {state.options.counts()}")

    refresh_preview(state)
    logger.info(f"SessionState initialization complete: {state}")
    return state


def refresh_preview(state: SessionState) -> SessionState:
    """Regenerate the editable buffer from the selection when locked."""
    if state.selection.editor_locked:
        state.edit_content = compile_prompt(state.selection)
    return state


# ---------------------------------------------------------------------------
# Selection events.
# ---------------------------------------------------------------------------


def set_scene(state: SessionState, name: str) -> SessionState:
    """Set the scene label."""
    state.selection.scene = name or ""
    logger.info(f"Scene set: {state.selection.scene!r}")
    return refresh_preview(state)


def set_character(state: SessionState, name: str) -> SessionState:
    """Set the character label."""
    state.selection.character = name or ""
    logger.info(f"Character set: {state.selection.character!r}")
    return refresh_preview(state)


def set_action(state: SessionState, name: str) -> SessionState:
    """Set the action label."""
    state.selection.action = name or ""
    logger.info(f"Action set: {state.selection.action!r}")
    return refresh_preview(state)


def set_background(state: SessionState, name: str) -> SessionState:
    """Set the background label.

    A chroma background disables the pattern panel.  Any pattern already in
    the selection is kept but left out of the compiled text.
    """
    state.selection.background = name or ""
    logger.info(
        f"Background set: {state.selection.background!r} "
        f"(pattern panel {'enabled' if state.pattern_panel_enabled else 'disabled'})"
    )
    return refresh_preview(state)


# ---------------------------------------------------------------------------
# Pattern events.
# ---------------------------------------------------------------------------


def set_pattern_type(state: SessionState, pattern_type: str) -> SessionState:
    """Set the pattern type.

    Raises:
        ValidationError: If the type is not in the pattern vocabulary
    """
    state.selection.pattern.type = validate_pattern_type(pattern_type)
    logger.info(f"Pattern type set: {state.selection.pattern.type!r}")
    return refresh_preview(state)


def set_pattern_hex(state: SessionState, raw: str) -> SessionState:
    """Handle typed colour text.

    Valid colours are stored and recorded in the recent history.  Invalid
    text is only echoed back with ``hex_valid`` False; the stored colour is
    left untouched.  Clearing the field removes the colour.

    Colours are accepted even while a chroma background disables the
    pattern panel; they are kept in the selection and reappear in the
    compiled text once the background changes.
    """
    value = normalize_hex_input(raw)
    state.hex_input = value

    if not value:
        state.hex_valid = True
        state.selection.pattern.hex = ""
        logger.info("Pattern colour cleared")
        return refresh_preview(state)

    try:
        validate_hex_color(value)
    except ValidationError as e:
        state.hex_valid = False
        logger.warning(f"Rejected pattern colour: {e}")
        return state

    state.hex_valid = True
    pattern = state.selection.pattern
    pattern.hex = value
    pattern.recent = remember_color(pattern.recent, value)
    logger.info(f"Pattern colour set: {value}")
    return refresh_preview(state)


def select_recent_color(state: SessionState, hex_color: str) -> SessionState:
    """Reuse a colour from the recent swatches and move it to the front.

    Like :func:`set_pattern_hex`, this works while the pattern panel is
    disabled; the compiler leaves the colour out until then.

    Raises:
        ValidationError: If the colour is not a valid ``#RRGGBB`` value
    """
    value = validate_hex_color(normalize_hex_input(hex_color))
    pattern = state.selection.pattern
    pattern.hex = value
    pattern.recent = remember_color(pattern.recent, value)
    state.hex_input = value
    state.hex_valid = True
    logger.info(f"Recent colour selected: {value}")
    return refresh_preview(state)


def set_pattern_scale(state: SessionState, scale: int) -> SessionState:
    """Set the pattern scale, clamped into [0, 100]."""
    state.selection.pattern.scale = clamp_scale(scale)
    logger.info(f"Pattern scale set: {state.selection.pattern.scale}")
    return refresh_preview(state)


# ---------------------------------------------------------------------------
# Editor events.
# ---------------------------------------------------------------------------


def edit_prompt(state: SessionState, text: str) -> SessionState:
    """Replace the editable buffer with user text.

    Raises:
        ValidationError: If the editor is locked
    """
    if state.selection.editor_locked:
        raise ValidationError("Unlock the editor before editing the prompt.")
    state.edit_content = text or ""
    logger.debug(f"Manual edit: {len(state.edit_content)} characters")
    return state


def toggle_editor_lock(state: SessionState) -> SessionState:
    """Flip the editor lock; re-locking restores canonical text."""
    state.selection.editor_locked = not state.selection.editor_locked
    logger.info(f"Editor {'locked' if state.selection.editor_locked else 'unlocked'}")
    return refresh_preview(state)


def reset_session(state: SessionState) -> SessionState:
    """Start a new prompt: clear every choice, the buffers and the history."""
    state.selection = Selection()
    state.edit_content = ""
    state.compiled = ""
    state.hex_input = ""
    state.hex_valid = True
    logger.info("Session reset")
    return state


def randomize_session(state: SessionState, rng: random.Random | None = None) -> SessionState:
    """Replace the selection with a random one (Randomix).

    The recent-colour history and the editor lock carry over.
    """
    previous = state.selection
    selection = randomize(state.options, rng, recent=previous.pattern.recent)
    selection.editor_locked = previous.editor_locked
    state.selection = selection
    state.hex_input = selection.pattern.hex
    state.hex_valid = True
    logger.info(
        f"Randomized: scene={selection.scene!r}, character={selection.character!r}, "
        f"action={selection.action!r}, background={selection.background!r}, "
        f"pattern={selection.pattern.type!r}"
    )
    return refresh_preview(state)


# ---------------------------------------------------------------------------
# Output events.
# ---------------------------------------------------------------------------


def compile_session(state: SessionState) -> SessionState:
    """Produce the final prompt.

    Raises:
        ValidationError: If the editor is unlocked and its buffer is blank;
            ``compiled`` is left unchanged in that case
    """
    if state.selection.editor_locked:
        state.compiled = compile_prompt(state.selection)
    else:
        state.compiled = validate_manual_prompt(state.edit_content)
    logger.info(f"Compiled prompt: {state.compiled!r}")
    return state


def copy_compiled(state: SessionState) -> str:
    """Return the compiled prompt for the clipboard.

    Raises:
        ValidationError: If nothing has been compiled yet
    """
    if not state.compiled.strip():
        raise ValidationError("Nothing to copy yet. Compile a prompt first.")
    return state.compiled


# ---------------------------------------------------------------------------
# State interchange.
# ---------------------------------------------------------------------------


def export_state(state: SessionState) -> dict[str, Any]:
    """Snapshot the session for interchange with other tools.

    Returns:
        Nested dictionary with the keys ``scene``, ``character``, ``action``,
        ``background``, ``pattern`` (``type``, ``hex``, ``scale``),
        ``editorLocked``, ``editContent`` and ``compiled``
    """
    selection = state.selection
    return {
        "scene": selection.scene,
        "character": selection.character,
        "action": selection.action,
        "background": selection.background,
        "pattern": {
            "type": selection.pattern.type,
            "hex": selection.pattern.hex,
            "scale": selection.pattern.scale,
        },
        "editorLocked": selection.editor_locked,
        "editContent": state.edit_content,
        "compiled": state.compiled,
    }


def import_state(state: SessionState, snapshot: Mapping[str, Any]) -> SessionState:
    """Restore a session from an exported snapshot.

    Pattern type and colour go through the same validation as typed input.
    The recent history is kept and gains the imported colour.

    Raises:
        ValidationError: If the snapshot's pattern type or colour is invalid
    """
    pattern_data = snapshot.get("pattern") or {}
    pattern_type = validate_pattern_type(pattern_data.get("type", ""))
    hex_color = normalize_hex_input(pattern_data.get("hex", ""))
    if hex_color:
        validate_hex_color(hex_color)

    scale = pattern_data.get("scale")
    if scale is None:
        scale = DEFAULT_PATTERN_SCALE

    recent = remember_color(state.selection.pattern.recent, hex_color)
    state.selection = Selection(
        scene=snapshot.get("scene", "") or "",
        character=snapshot.get("character", "") or "",
        action=snapshot.get("action", "") or "",
        background=snapshot.get("background", "") or "",
        pattern=Pattern(
            type=pattern_type,
            hex=hex_color,
            scale=clamp_scale(scale),
            recent=recent,
        ),
        editor_locked=bool(snapshot.get("editorLocked", True)),
    )
    state.edit_content = snapshot.get("editContent", "") or ""
    state.compiled = snapshot.get("compiled", "") or ""
    state.hex_input = hex_color
    state.hex_valid = True
    logger.info("Session imported from snapshot")
    return refresh_preview(state)
