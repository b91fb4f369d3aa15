"""Session state and event handlers for the presentation layer.

- models: SessionState record and derived flags
- state: one handler per inbound event (selection, pattern, editor, output)
- validation: boundary checks and the user-facing ValidationError
"""

from .models import SessionState
from .state import (
    compile_session,
    copy_compiled,
    edit_prompt,
    export_state,
    import_state,
    initialize_session_state,
    randomize_session,
    reset_session,
    select_recent_color,
    set_action,
    set_background,
    set_character,
    set_pattern_hex,
    set_pattern_scale,
    set_pattern_type,
    set_scene,
    toggle_editor_lock,
)
from .validation import ValidationError

__all__ = [
    "SessionState",
    "ValidationError",
    # Selection handlers
    "set_scene",
    "set_character",
    "set_action",
    "set_background",
    # Pattern handlers
    "set_pattern_type",
    "set_pattern_hex",
    "set_pattern_scale",
    "select_recent_color",
    # Editor handlers
    "edit_prompt",
    "toggle_editor_lock",
    "reset_session",
    "randomize_session",
    # Output handlers
    "compile_session",
    "copy_compiled",
    "export_state",
    "import_state",
    "initialize_session_state",
]
