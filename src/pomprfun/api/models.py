"""Pydantic request and response models for the POMPR-FUN API.

These models define the JSON schema for every API endpoint.  FastAPI uses
them for automatic request validation, serialisation, and OpenAPI
documentation generation.

Models
------
SelectionUpdate
    Payload for ``POST /api/selection`` — any subset of the selection fields.
RecentColorRequest
    Payload for ``POST /api/pattern/recent`` — reuse a recent swatch colour.
EditRequest
    Payload for ``PUT /api/editor`` — manual prompt text.
RandomizeRequest
    Payload for ``POST /api/randomize`` — optional per-call seed.
SessionView
    Response for every state-changing endpoint.
PatternSnapshot / StateSnapshot
    Export/import document.  Field names match the interchange format
    exactly (``editorLocked``, ``editContent``).
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from pomprfun.session.models import SessionState


class SelectionUpdate(BaseModel):
    """Request body for ``POST /api/selection``.

    Only the fields present in the request are applied, in the order
    scene, character, action, background, pattern type, pattern colour,
    pattern scale.

    Attributes:
        scene: Scene label, or ``""`` to clear.
        character: Character label, or ``""`` to clear.
        action: Action label, or ``""`` to clear.
        background: Background label, or ``""`` to clear.
        pattern_type: Pattern name from the vocabulary, or ``""`` to clear.
        pattern_hex: Raw colour text as typed (``#`` optional).
        pattern_scale: Pattern size, 0-100.
    """

    scene: str | None = Field(default=None, description="Scene label.")
    character: str | None = Field(default=None, description="Character label.")
    action: str | None = Field(default=None, description="Action label.")
    background: str | None = Field(default=None, description="Background label.")
    pattern_type: str | None = Field(
        default=None,
        description="Pattern type from the fixed vocabulary, or '' for none.",
    )
    pattern_hex: str | None = Field(
        default=None,
        description="Raw colour text; invalid values are flagged, not stored.",
    )
    pattern_scale: int | None = Field(
        default=None,
        ge=0,
        le=100,
        description="Pattern scale slider value (0-100).",
    )


class RecentColorRequest(BaseModel):
    """Request body for ``POST /api/pattern/recent``."""

    hex: str = Field(..., description="Colour from the recent swatches (#RRGGBB).")


class EditRequest(BaseModel):
    """Request body for ``PUT /api/editor``."""

    content: str = Field(..., description="Manual prompt text (editor must be unlocked).")


class RandomizeRequest(BaseModel):
    """Request body for ``POST /api/randomize``."""

    seed: int | None = Field(
        default=None,
        description="Seed for this draw only.  None = use the session random source.",
    )


class SessionView(BaseModel):
    """Everything the presentation layer renders after an event.

    Attributes:
        scene: Current scene label.
        character: Current character label.
        action: Current action label.
        background: Current background label.
        pattern_type: Current pattern type.
        pattern_hex: Stored pattern colour.
        pattern_scale: Current pattern scale.
        editor_locked: Whether the compiler owns the edit buffer.
        edit_content: Editable prompt buffer (the live preview when locked).
        compiled: Final compiled prompt.
        hex_input: Last typed colour text, normalized.
        hex_valid: Validity flag for ``hex_input``.
        recent_colors: Recent colours, most recent first.
        pattern_panel_enabled: False while a chroma background is selected.
    """

    scene: str
    character: str
    action: str
    background: str
    pattern_type: str
    pattern_hex: str
    pattern_scale: int
    editor_locked: bool
    edit_content: str
    compiled: str
    hex_input: str
    hex_valid: bool
    recent_colors: list[str]
    pattern_panel_enabled: bool

    @classmethod
    def from_state(cls, state: SessionState) -> SessionView:
        """Build the view from a session state."""
        selection = state.selection
        return cls(
            scene=selection.scene,
            character=selection.character,
            action=selection.action,
            background=selection.background,
            pattern_type=selection.pattern.type,
            pattern_hex=selection.pattern.hex,
            pattern_scale=selection.pattern.scale,
            editor_locked=selection.editor_locked,
            edit_content=state.edit_content,
            compiled=state.compiled,
            hex_input=state.hex_input,
            hex_valid=state.hex_valid,
            recent_colors=state.recent_colors,
            pattern_panel_enabled=state.pattern_panel_enabled,
        )


class PatternSnapshot(BaseModel):
    """Pattern part of the interchange document."""

    type: str = ""
    hex: str = ""
    scale: int = Field(default=40, ge=0, le=100)


class StateSnapshot(BaseModel):
    """Interchange document for ``GET /api/export`` and ``POST /api/import``.

    Serialise with ``model_dump(by_alias=True)`` to get the exact field
    names ``editorLocked`` and ``editContent``.
    """

    model_config = ConfigDict(populate_by_name=True)

    scene: str = ""
    character: str = ""
    action: str = ""
    background: str = ""
    pattern: PatternSnapshot = Field(default_factory=PatternSnapshot)
    editor_locked: bool = Field(default=True, alias="editorLocked")
    edit_content: str = Field(default="", alias="editContent")
    compiled: str = ""
