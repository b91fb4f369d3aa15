"""Unit tests for session state handlers."""

import random

import pytest

from pomprfun.core.options import OptionSource
from pomprfun.core.selection import Option, OptionSet
from pomprfun.session.models import SessionState
from pomprfun.session.state import (
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
from pomprfun.session.validation import ValidationError


class TestInitializeSessionState:
    """Tests for initialize_session_state."""

    def test_none_creates_new_state(self):
        state = initialize_session_state(None)
        assert isinstance(state, SessionState)
        assert state.edit_content == ""
        assert state.compiled == ""
        assert state.selection.editor_locked is True

    def test_loads_options(self, test_data_dir):
        state = initialize_session_state(option_source=OptionSource(test_data_dir))
        assert [o.name for o in state.options.backgrounds] == ["wooden deck", "Blue Chroma"]

    def test_existing_state_returned(self, session_state):
        assert initialize_session_state(session_state) is session_state


class TestSelectionHandlers:
    """Tests for the scene/character/action/background handlers."""

    def test_locked_editor_tracks_every_change(self, session_state):
        set_scene(session_state, "on a beach")
        assert session_state.edit_content == "on a beach."
        set_character(session_state, "a surfer")
        set_action(session_state, "running")
        assert session_state.edit_content == "on a beach, a surfer, running."

    def test_mutations_do_not_touch_compiled(self, session_state):
        set_scene(session_state, "on a beach")
        assert session_state.compiled == ""

    def test_clearing_a_field(self, session_state):
        set_scene(session_state, "on a beach")
        set_scene(session_state, "")
        assert session_state.edit_content == ""

    def test_chroma_background_disables_pattern_panel(self, session_state):
        set_background(session_state, "Blue Chroma")
        assert session_state.pattern_panel_enabled is False
        set_background(session_state, "wooden deck")
        assert session_state.pattern_panel_enabled is True

    def test_generic_chroma_disables_pattern_panel(self, session_state):
        """The panel follows the same chroma rule as the compiler."""
        set_background(session_state, "red chroma")
        assert session_state.pattern_panel_enabled is False

    def test_stale_pattern_kept_but_not_compiled(self, session_state):
        set_pattern_type(session_state, "dot")
        set_background(session_state, "Blue Chroma")
        assert session_state.selection.pattern.type == "dot"
        assert session_state.edit_content == "against a seamless blue chroma field."

    def test_colour_accepted_while_panel_disabled(self, session_state):
        """Colours chosen behind a chroma background show up once it changes."""
        set_pattern_type(session_state, "dot")
        set_background(session_state, "Blue Chroma")
        set_pattern_hex(session_state, "#00AA00")
        select_recent_color(session_state, "#00AA00")
        assert session_state.selection.pattern.hex == "#00AA00"
        assert session_state.edit_content == "against a seamless blue chroma field."

        set_background(session_state, "wooden deck")
        assert session_state.edit_content == "wooden deck, against a small dot pattern in #00AA00."


class TestPatternHandlers:
    """Tests for the pattern handlers."""

    def test_set_pattern_type(self, session_state):
        set_pattern_type(session_state, "houndstooth")
        assert session_state.edit_content == "against a small houndstooth pattern."

    def test_unknown_pattern_type_rejected(self, session_state):
        with pytest.raises(ValidationError, match="Unknown pattern type"):
            set_pattern_type(session_state, "paisley")
        assert session_state.selection.pattern.type == ""

    def test_clear_pattern_type(self, session_state):
        set_pattern_type(session_state, "dot")
        set_pattern_type(session_state, "")
        assert session_state.edit_content == ""

    def test_valid_hex_is_normalized_and_stored(self, session_state):
        set_pattern_hex(session_state, "ff00aa")
        assert session_state.hex_input == "#FF00AA"
        assert session_state.hex_valid is True
        assert session_state.selection.pattern.hex == "#FF00AA"
        assert session_state.recent_colors == ["#FF00AA"]

    def test_invalid_hex_is_flagged_not_stored(self, session_state):
        set_pattern_hex(session_state, "#FF00AA")
        set_pattern_hex(session_state, "#FF0")
        assert session_state.hex_valid is False
        assert session_state.hex_input == "#FF0"
        assert session_state.selection.pattern.hex == "#FF00AA"
        assert session_state.recent_colors == ["#FF00AA"]

    def test_empty_hex_clears_color(self, session_state):
        set_pattern_hex(session_state, "#FF00AA")
        set_pattern_hex(session_state, "")
        assert session_state.selection.pattern.hex == ""
        assert session_state.hex_valid is True
        assert session_state.recent_colors == ["#FF00AA"]

    def test_hex_appears_in_preview(self, session_state):
        set_background(session_state, "wooden deck")
        set_pattern_type(session_state, "houndstooth")
        set_pattern_hex(session_state, "#FF00AA")
        set_pattern_scale(session_state, 75)
        assert session_state.edit_content == (
            "wooden deck, against a large houndstooth pattern in #FF00AA."
        )

    def test_recent_history_bounded(self, session_state):
        for value in ["#000001", "#000002", "#000003", "#000004", "#000005", "#000006"]:
            set_pattern_hex(session_state, value)
        assert session_state.recent_colors == ["#000006", "#000005", "#000004", "#000003", "#000002"]

    def test_select_recent_color_moves_to_front(self, session_state):
        set_pattern_hex(session_state, "#111111")
        set_pattern_hex(session_state, "#222222")
        select_recent_color(session_state, "#111111")
        assert session_state.selection.pattern.hex == "#111111"
        assert session_state.recent_colors == ["#111111", "#222222"]

    def test_select_recent_color_rejects_invalid(self, session_state):
        with pytest.raises(ValidationError):
            select_recent_color(session_state, "#XYZXYZ")

    @pytest.mark.parametrize("raw, expected", [(-5, 0), (0, 0), (55, 55), (100, 100), (250, 100)])
    def test_scale_is_clamped(self, session_state, raw, expected):
        set_pattern_scale(session_state, raw)
        assert session_state.selection.pattern.scale == expected


class TestEditorHandlers:
    """Tests for editor lock, manual edits and reset."""

    def test_edit_requires_unlock(self, session_state):
        with pytest.raises(ValidationError, match="Unlock"):
            edit_prompt(session_state, "my own text")

    def test_unlocked_buffer_is_not_overwritten(self, session_state):
        set_scene(session_state, "on a beach")
        toggle_editor_lock(session_state)
        edit_prompt(session_state, "my own text")
        set_character(session_state, "a surfer")
        assert session_state.edit_content == "my own text"

    def test_relock_restores_canonical_text(self, session_state):
        set_scene(session_state, "on a beach")
        toggle_editor_lock(session_state)
        edit_prompt(session_state, "my own text")
        set_character(session_state, "a surfer")
        toggle_editor_lock(session_state)
        assert session_state.selection.editor_locked is True
        assert session_state.edit_content == "on a beach, a surfer."

    def test_reset_clears_everything(self, session_state):
        set_scene(session_state, "on a beach")
        set_pattern_type(session_state, "dot")
        set_pattern_hex(session_state, "#123456")
        set_pattern_scale(session_state, 90)
        compile_session(session_state)
        toggle_editor_lock(session_state)

        reset_session(session_state)

        selection = session_state.selection
        assert selection.scene == ""
        assert selection.pattern.type == ""
        assert selection.pattern.hex == ""
        assert selection.pattern.scale == 40
        assert selection.pattern.recent == []
        assert selection.editor_locked is True
        assert session_state.edit_content == ""
        assert session_state.compiled == ""

    def test_reset_keeps_options(self, session_state):
        counts = session_state.options.counts()
        reset_session(session_state)
        assert session_state.options.counts() == counts


class TestRandomizeSession:
    """Tests for randomize_session."""

    def test_replaces_selection_and_refreshes_preview(self, session_state):
        randomize_session(session_state, random.Random(5))
        assert session_state.selection.scene in {"on a beach", "under a stormy sky"}
        assert session_state.edit_content.startswith(session_state.selection.scene)

    def test_keeps_editor_lock(self, session_state):
        toggle_editor_lock(session_state)
        edit_prompt(session_state, "manual")
        randomize_session(session_state, random.Random(5))
        assert session_state.selection.editor_locked is False
        assert session_state.edit_content == "manual"

    def test_carries_recent_history(self):
        state = SessionState(
            options=OptionSet(
                scenes=[Option("under a stormy sky")],
                backgrounds=[Option("wooden deck")],
            )
        )
        set_pattern_hex(state, "#111111")
        rng = random.Random(0)
        for _ in range(200):
            randomize_session(state, rng)
            assert "#111111" in state.recent_colors or len(state.recent_colors) == 5
            if state.selection.pattern.hex:
                assert state.recent_colors[0] == state.selection.pattern.hex
                assert state.hex_input == state.selection.pattern.hex

    def test_locational_scene(self):
        state = SessionState(
            options=OptionSet(scenes=[Option("corridor")], backgrounds=[Option("wooden deck")])
        )
        for seed in range(30):
            randomize_session(state, random.Random(seed))
            assert state.selection.background == ""
            assert state.selection.pattern.type == ""


class TestCompileAndCopy:
    """Tests for compile_session and copy_compiled."""

    def test_locked_compile_matches_preview(self, session_state):
        set_scene(session_state, "on a beach")
        set_background(session_state, "wooden deck")
        set_pattern_type(session_state, "chevron")
        compile_session(session_state)
        assert session_state.compiled == session_state.edit_content
        assert session_state.compiled == "on a beach, wooden deck, against a small chevron pattern."

    def test_locked_compile_of_empty_state(self, session_state):
        compile_session(session_state)
        assert session_state.compiled == ""

    def test_unlocked_compile_uses_buffer_verbatim(self, session_state):
        set_scene(session_state, "on a beach")
        toggle_editor_lock(session_state)
        edit_prompt(session_state, "  a hand-written prompt ,, really  ")
        compile_session(session_state)
        assert session_state.compiled == "a hand-written prompt ,, really"

    def test_unlocked_blank_buffer_rejected(self, session_state):
        set_scene(session_state, "on a beach")
        compile_session(session_state)
        toggle_editor_lock(session_state)
        edit_prompt(session_state, "   ")
        with pytest.raises(ValidationError, match="Edit Prompt is empty."):
            compile_session(session_state)
        assert session_state.compiled == "on a beach."

    def test_copy_returns_compiled(self, session_state):
        set_scene(session_state, "on a beach")
        compile_session(session_state)
        assert copy_compiled(session_state) == "on a beach."

    def test_copy_without_compiled_text(self, session_state):
        with pytest.raises(ValidationError, match="Nothing to copy yet"):
            copy_compiled(session_state)


class TestExportImport:
    """Tests for export_state and import_state."""

    def test_export_field_names(self, session_state):
        set_scene(session_state, "on a beach")
        set_pattern_type(session_state, "dot")
        set_pattern_hex(session_state, "#ABCDEF")
        compile_session(session_state)

        snapshot = export_state(session_state)

        assert snapshot == {
            "scene": "on a beach",
            "character": "",
            "action": "",
            "background": "",
            "pattern": {"type": "dot", "hex": "#ABCDEF", "scale": 40},
            "editorLocked": True,
            "editContent": "on a beach, against a small dot pattern in #ABCDEF.",
            "compiled": "on a beach, against a small dot pattern in #ABCDEF.",
        }

    def test_import_restores_selection(self, session_state):
        snapshot = {
            "scene": "at dawn",
            "character": "a chef",
            "action": "",
            "background": "brick wall",
            "pattern": {"type": "grid", "hex": "#00FF00", "scale": 90},
            "editorLocked": True,
            "editContent": "stale",
            "compiled": "previous output.",
        }
        import_state(session_state, snapshot)
        assert session_state.selection.background == "brick wall"
        assert session_state.selection.pattern.scale == 90
        assert session_state.edit_content == (
            "at dawn, a chef, brick wall, against a very large grid pattern in #00FF00."
        )
        assert session_state.compiled == "previous output."
        assert session_state.recent_colors == ["#00FF00"]

    def test_import_unlocked_keeps_edit_content(self, session_state):
        import_state(session_state, {"scene": "at dawn", "editorLocked": False, "editContent": "mine"})
        assert session_state.edit_content == "mine"
        assert session_state.selection.editor_locked is False

    def test_import_rejects_bad_hex(self, session_state):
        with pytest.raises(ValidationError):
            import_state(session_state, {"pattern": {"type": "dot", "hex": "#12"}})

    def test_import_rejects_unknown_pattern(self, session_state):
        with pytest.raises(ValidationError):
            import_state(session_state, {"pattern": {"type": "paisley"}})

    def test_export_import_preserves_output(self, session_state):
        set_scene(session_state, "on a beach")
        set_background(session_state, "wooden deck")
        set_pattern_type(session_state, "leopard")
        set_pattern_hex(session_state, "#C0FFEE")
        compile_session(session_state)
        snapshot = export_state(session_state)

        other = SessionState()
        import_state(other, snapshot)

        assert export_state(other) == snapshot
