"""Shared test fixtures."""

from pathlib import Path

import pytest
from scribe.config import (
    Config,
    LiveReloadConfig,
    NotesConfig,
    RenderConfig,
    ServerConfig,
)

from tests.fakes import FakeHighlighter


@pytest.fixture
def test_config(tmp_path: Path) -> Config:
    """Create a test configuration with tmp_path directories.

    Creates the notes directory and returns a Config instance suitable for
    testing. Live reload is disabled.
    """
    source_dir = tmp_path / "notes"
    source_dir.mkdir(exist_ok=True)

    return Config(
        server=ServerConfig(),
        notes=NotesConfig(
            source_dir=source_dir,
            output_dir=tmp_path / "dist",
            assets_dir=tmp_path / "assets",
        ),
        render=RenderConfig(),
        live_reload=LiveReloadConfig(enabled=False),
    )


@pytest.fixture
def highlighter() -> FakeHighlighter:
    """Highlighter that only knows python."""
    return FakeHighlighter()
