"""Shared pytest fixtures for POMPR-FUN tests."""

import random
import shutil
import tempfile
from pathlib import Path
from typing import Generator

import pytest

from pomprfun.core.config import PomprConfig
from pomprfun.core.options import OptionSource
from pomprfun.core.selection import Option, OptionSet, Selection
from pomprfun.session.models import SessionState


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files.

    Yields:
        Path to temporary directory

    Cleanup:
        Directory is removed after test completes
    """
    temp_path = Path(tempfile.mkdtemp())
    try:
        yield temp_path
    finally:
        shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def test_data_dir(temp_dir: Path) -> Path:
    """Create a data directory with sample option CSV files.

    Args:
        temp_dir: Temporary directory from fixture

    Returns:
        Path to the CSV directory
    """
    data_dir = temp_dir / "csv"
    data_dir.mkdir()

    (data_dir / "scenes.csv").write_text(
        "name,description\n"
        "on a beach,sandy shoreline\n"
        "under a stormy sky,dark clouds\n"
    )
    (data_dir / "characters.csv").write_text(
        "name,description\n"
        "a surfer,with a longboard\n"
        ",nameless row is skipped\n"
        "\n"
        "a detective\n"
    )
    (data_dir / "actions.csv").write_text("name,description\nrunning,fast\nlaughing,candid\n")
    (data_dir / "backgrounds.csv").write_text(
        "name,description\n"
        "wooden deck,weathered planks\n"
        "Blue Chroma,keying backdrop\n"
    )

    return data_dir


@pytest.fixture
def test_config(temp_dir: Path, test_data_dir: Path) -> PomprConfig:
    """Create a test configuration pointing at the sample CSV files.

    Args:
        temp_dir: Temporary directory from fixture
        test_data_dir: CSV directory from fixture

    Returns:
        PomprConfig instance for testing
    """
    return PomprConfig(
        _env_file=None,
        data_dir=str(test_data_dir),
        random_seed=1234,
        server_port=7860,
    )


@pytest.fixture
def sample_options() -> OptionSet:
    """In-memory option lists with one entry per category.

    Returns:
        OptionSet for randomizer and session tests
    """
    return OptionSet(
        scenes=[Option("under a stormy sky", "dark clouds")],
        characters=[Option("a surfer", "with a longboard")],
        actions=[Option("running", "fast")],
        backgrounds=[Option("wooden deck", "weathered planks")],
    )


@pytest.fixture
def seeded_rng() -> random.Random:
    """Deterministic random source."""
    return random.Random(42)


@pytest.fixture
def empty_selection() -> Selection:
    """Selection with every field at its default."""
    return Selection()


@pytest.fixture
def session_state(test_data_dir: Path) -> SessionState:
    """Session state with options loaded from the sample CSV files.

    Returns:
        SessionState instance
    """
    return SessionState(options=OptionSource(test_data_dir).load_all())


@pytest.fixture
def test_client(monkeypatch, test_config: PomprConfig):
    """FastAPI TestClient running the app against the test configuration.

    The lifespan runs inside the ``with`` block, so options are loaded from
    the sample CSV files and a fresh session is created for each test.
    """
    from fastapi.testclient import TestClient

    from pomprfun.api import main as api_main

    monkeypatch.setattr(api_main, "config", test_config)

    with TestClient(api_main.app) as client:
        yield client
