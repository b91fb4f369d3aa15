"""POMPR-FUN — FastAPI Application.

This module is the single entry point for the web application.  It defines
the FastAPI ``app`` instance, all REST API routes, and the ``main()`` CLI
function that launches the uvicorn server.

Architecture
------------
- **Configuration** comes from :data:`~pomprfun.core.config.config`
  (``POMPR_*`` environment variables).
- **Option lists** are loaded once at startup from the CSV files in
  ``config.data_dir``.
- **Session state** is a single :class:`~pomprfun.session.models.SessionState`
  held on ``app.state``; every route runs one session handler to completion
  and returns the resulting :class:`~pomprfun.api.models.SessionView`.
- **Validation failures** raised by session handlers become HTTP 400
  responses whose ``detail`` is the user-facing message.

Endpoints
---------
========  ========================  ======================================
Method    Path                      Purpose
========  ========================  ======================================
GET       ``/api/config``           Option lists and pattern vocabulary
GET       ``/api/state``            Current session view
POST      ``/api/selection``        Update selection fields
POST      ``/api/pattern/recent``   Reuse a recent swatch colour
POST      ``/api/editor/toggle``    Lock/unlock the prompt editor
PUT       ``/api/editor``           Replace the manual prompt text
POST      ``/api/reset``            Start a new prompt
POST      ``/api/randomize``        Randomix
POST      ``/api/compile``          Produce the final prompt
POST      ``/api/copy``             Text for the clipboard
GET       ``/api/export``           Export the session snapshot
POST      ``/api/import``           Restore a session snapshot
========  ========================  ======================================

Usage
-----
CLI (installed entry point)::

    pomprfun

Direct invocation::

    python -m pomprfun.api.main
"""

from __future__ import annotations

import logging
import random
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware

from pomprfun import __version__
from pomprfun.api.models import (
    EditRequest,
    RandomizeRequest,
    RecentColorRequest,
    SelectionUpdate,
    SessionView,
    StateSnapshot,
)
from pomprfun.core.config import config
from pomprfun.core.options import OptionSource
from pomprfun.core.phrases import DEFAULT_PATTERN_SCALE, PATTERN_TYPES
from pomprfun.core.selection import OPTION_CATEGORIES
from pomprfun.session import state as handlers
from pomprfun.session.models import SessionState
from pomprfun.session.validation import ValidationError, validate_pattern_type

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Application lifecycle — option loading and session setup.
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application startup and shutdown lifecycle.

    On startup:
        Loads the option lists, creates the session state and the session
        random source (seeded from ``config.random_seed`` when set).

    Args:
        app: The FastAPI application instance.

    Yields:
        Control back to the application for the duration of its lifetime.
    """
    # --- Startup -----------------------------------------------------------
    app.state.option_source = OptionSource(config.data_dir)
    app.state.session = handlers.initialize_session_state(
        option_source=app.state.option_source
    )
    app.state.rng = random.Random(config.random_seed)
    logger.info(f"Session ready (data_dir={config.data_dir}, seed={config.random_seed}).")

    yield  # Application runs here.

    # --- Shutdown ----------------------------------------------------------
    app.state.option_source.clear_cache()
    logger.info("Session closed on shutdown.")


# ---------------------------------------------------------------------------
# FastAPI application instance.
# ---------------------------------------------------------------------------
app = FastAPI(
    title="POMPR-FUN",
    description="Compose image-generation prompts from scenes, characters, actions and backgrounds.",
    version=__version__,
    lifespan=lifespan,
)

# Allow cross-origin requests so the frontend can be served from a different
# port during development.
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# Helpers.
# ---------------------------------------------------------------------------


def _session(request: Request) -> SessionState:
    return request.app.state.session


def _view(state: SessionState) -> SessionView:
    return SessionView.from_state(state)


def _bad_request(e: ValidationError) -> HTTPException:
    """Map a user-facing validation error onto a 400 response."""
    logger.warning(f"Request rejected: {e}")
    return HTTPException(status_code=400, detail=str(e))


# ---------------------------------------------------------------------------
# Routes.
# ---------------------------------------------------------------------------


@app.get("/api/config")
async def get_config(request: Request) -> dict:
    """Return the option lists and pattern vocabulary for the frontend.

    Returns:
        Dictionary with keys ``version``, ``pattern_types``,
        ``default_pattern_scale`` and one list of ``{name, desc}`` per
        option category.
    """
    options = _session(request).options
    data: dict = {
        "version": __version__,
        "pattern_types": list(PATTERN_TYPES),
        "default_pattern_scale": DEFAULT_PATTERN_SCALE,
    }
    for category in OPTION_CATEGORIES:
        data[category] = [{"name": o.name, "desc": o.desc} for o in options.get(category)]
    return data


@app.get("/api/state")
async def get_state(request: Request) -> SessionView:
    """Return the current session view."""
    return _view(_session(request))


@app.post("/api/selection")
async def update_selection(req: SelectionUpdate, request: Request) -> SessionView:
    """Apply a partial selection update.

    Fields absent from the request are left alone.  An invalid colour is
    not an error: it is reported through ``hex_valid``.

    Raises:
        HTTPException: 400 for an unknown pattern type; no field of the
            request is applied in that case.
    """
    state = _session(request)
    try:
        # Reject the whole update before any field is written.
        if req.pattern_type is not None:
            validate_pattern_type(req.pattern_type)

        if req.scene is not None:
            handlers.set_scene(state, req.scene)
        if req.character is not None:
            handlers.set_character(state, req.character)
        if req.action is not None:
            handlers.set_action(state, req.action)
        if req.background is not None:
            handlers.set_background(state, req.background)
        if req.pattern_type is not None:
            handlers.set_pattern_type(state, req.pattern_type)
        if req.pattern_hex is not None:
            handlers.set_pattern_hex(state, req.pattern_hex)
        if req.pattern_scale is not None:
            handlers.set_pattern_scale(state, req.pattern_scale)
    except ValidationError as e:
        raise _bad_request(e) from e
    return _view(state)


@app.post("/api/pattern/recent")
async def select_recent_color(req: RecentColorRequest, request: Request) -> SessionView:
    """Reuse a colour from the recent swatches.

    Raises:
        HTTPException: 400 for an invalid colour.
    """
    state = _session(request)
    try:
        handlers.select_recent_color(state, req.hex)
    except ValidationError as e:
        raise _bad_request(e) from e
    return _view(state)


@app.post("/api/editor/toggle")
async def toggle_editor(request: Request) -> SessionView:
    """Lock or unlock the prompt editor."""
    return _view(handlers.toggle_editor_lock(_session(request)))


@app.put("/api/editor")
async def edit_prompt(req: EditRequest, request: Request) -> SessionView:
    """Replace the manual prompt text.

    Raises:
        HTTPException: 400 while the editor is locked.
    """
    state = _session(request)
    try:
        handlers.edit_prompt(state, req.content)
    except ValidationError as e:
        raise _bad_request(e) from e
    return _view(state)


@app.post("/api/reset")
async def reset(request: Request) -> SessionView:
    """Start a new prompt."""
    return _view(handlers.reset_session(_session(request)))


@app.post("/api/randomize")
async def randomize(request: Request, req: RandomizeRequest | None = None) -> SessionView:
    """Replace the selection with a random one.

    A ``seed`` in the body makes this single draw reproducible; otherwise
    the session random source is used.
    """
    rng = random.Random(req.seed) if req and req.seed is not None else request.app.state.rng
    return _view(handlers.randomize_session(_session(request), rng))


@app.post("/api/compile")
async def compile_prompt(request: Request) -> SessionView:
    """Produce the final compiled prompt.

    Raises:
        HTTPException: 400 if the editor is unlocked and its text is blank.
    """
    state = _session(request)
    try:
        handlers.compile_session(state)
    except ValidationError as e:
        raise _bad_request(e) from e
    return _view(state)


@app.post("/api/copy")
async def copy_prompt(request: Request) -> dict:
    """Return the compiled prompt for the client to place on the clipboard.

    Raises:
        HTTPException: 400 if nothing has been compiled yet.
    """
    try:
        text = handlers.copy_compiled(_session(request))
    except ValidationError as e:
        raise _bad_request(e) from e
    return {"text": text}


@app.get("/api/export")
async def export_state(request: Request) -> dict:
    """Export the session as an interchange snapshot."""
    snapshot = StateSnapshot.model_validate(handlers.export_state(_session(request)))
    return snapshot.model_dump(by_alias=True)


@app.post("/api/import")
async def import_state(snapshot: StateSnapshot, request: Request) -> SessionView:
    """Restore the session from an interchange snapshot.

    Raises:
        HTTPException: 400 for an invalid pattern type or colour.
    """
    state = _session(request)
    try:
        handlers.import_state(state, snapshot.model_dump(by_alias=True))
    except ValidationError as e:
        raise _bad_request(e) from e
    return _view(state)


# ---------------------------------------------------------------------------
# CLI entry point.
# ---------------------------------------------------------------------------


def main() -> None:
    """Launch the uvicorn ASGI server.

    Reads host, port and log level from :data:`~pomprfun.core.config.config`
    (``POMPR_SERVER_HOST``, ``POMPR_SERVER_PORT``, ``POMPR_LOG_LEVEL``).
    Defaults to ``0.0.0.0:7860``.
    """
    import uvicorn

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    uvicorn.run(
        "pomprfun.api.main:app",
        host=config.server_host,
        port=config.server_port,
        reload=False,
    )


if __name__ == "__main__":
    main()
