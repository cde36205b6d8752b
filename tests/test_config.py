"""Tests for configuration loading."""

from pathlib import Path
from unittest.mock import patch

import pytest
from scribe.config import (
    Config,
    LiveReloadConfig,
    NotesConfig,
    RenderConfig,
    ServerConfig,
)


class TestConfigLoad:
    """Tests for Config.load()."""

    def test__explicit_path__loads_config(self, tmp_path: Path) -> None:
        """Load config from explicit path."""
        config_file = tmp_path / "scribe.toml"
        config_file.write_text("""
[server]
host = "0.0.0.0"
port = 3000

[notes]
source_dir = "journal"
output_dir = "public"
templates_dir = "theme"
assets_dir = "static"

[render]
heading_offset = 2

[live_reload]
enabled = false
watch_patterns = ["*.md", "drafts/*.md"]
""")

        config = Config.load(config_file)

        assert config.server.host == "0.0.0.0"
        assert config.server.port == 3000
        assert config.notes.source_dir == tmp_path / "journal"
        assert config.notes.output_dir == tmp_path / "public"
        assert config.notes.templates_dir == tmp_path / "theme"
        assert config.notes.assets_dir == tmp_path / "static"
        assert config.render.heading_offset == 2
        assert config.live_reload.enabled is False
        assert config.live_reload.watch_patterns == ["*.md", "drafts/*.md"]
        assert config.config_path == config_file

    def test__minimal_config__uses_defaults(self, tmp_path: Path) -> None:
        """Load minimal config with defaults relative to config file."""
        config_file = tmp_path / "scribe.toml"
        config_file.write_text("")

        config = Config.load(config_file)

        assert config.server.host == "127.0.0.1"
        assert config.server.port == 8080
        assert config.notes.source_dir == tmp_path / "notes"
        assert config.notes.output_dir == tmp_path / "dist"
        assert config.notes.templates_dir is None
        assert config.notes.assets_dir == tmp_path / "assets"
        assert config.render.heading_offset == 1
        assert config.live_reload.enabled is True
        assert config.live_reload.watch_patterns is None

    def test__missing_explicit_path__raises(self, tmp_path: Path) -> None:
        """Raise FileNotFoundError for a missing explicit config."""
        with pytest.raises(FileNotFoundError, match="Configuration file not found"):
            Config.load(tmp_path / "missing.toml")

    def test__no_config_found__returns_defaults(self, tmp_path: Path) -> None:
        """Return defaults when no config file is discovered."""
        with patch("scribe.config.Path.cwd", return_value=tmp_path):
            config = Config.load()

        assert config.config_path is None
        assert config.notes.source_dir == Path("notes")

    def test__discovers_config_in_parent(self, tmp_path: Path) -> None:
        """Discover scribe.toml in a parent directory."""
        config_file = tmp_path / "scribe.toml"
        config_file.write_text("[server]\nport = 9000\n")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)

        with patch("scribe.config.Path.cwd", return_value=nested):
            config = Config.load()

        assert config.config_path == config_file
        assert config.server.port == 9000

    def test__invalid_toml__raises_value_error(self, tmp_path: Path) -> None:
        """Raise ValueError for malformed TOML."""
        config_file = tmp_path / "scribe.toml"
        config_file.write_text("[server\n")

        with pytest.raises(ValueError, match="Invalid TOML"):
            Config.load(config_file)

    @pytest.mark.parametrize(
        ("content", "message"),
        [
            ('server = "x"', "server section must be a dictionary"),
            ('[server]\nport = "80"', "server.port must be an integer"),
            ("[server]\nport = true", "server.port must be an integer"),
            ("[notes]\nsource_dir = 1", "notes.source_dir must be a string"),
            ("[notes]\ntemplates_dir = []", "notes.templates_dir must be a string"),
            ("[render]\nheading_offset = -1", "render.heading_offset must not be negative"),
            ('[render]\nheading_offset = "1"', "render.heading_offset must be an integer"),
            ('[live_reload]\nenabled = "yes"', "live_reload.enabled must be a boolean"),
            ('[live_reload]\nwatch_patterns = "*.md"', "live_reload.watch_patterns must be a list"),
            ("[live_reload]\nwatch_patterns = [1]", "live_reload.watch_patterns items must be strings"),
        ],
    )
    def test__invalid_values__raise_value_error(
        self, tmp_path: Path, content: str, message: str
    ) -> None:
        """Reject values of the wrong type."""
        config_file = tmp_path / "scribe.toml"
        config_file.write_text(content)

        with pytest.raises(ValueError, match=message):
            Config.load(config_file)


class TestConfigWithOverrides:
    """Tests for Config.with_overrides()."""

    @pytest.fixture
    def config(self) -> Config:
        return Config(
            server=ServerConfig(),
            notes=NotesConfig(),
            render=RenderConfig(),
            live_reload=LiveReloadConfig(),
        )

    def test__no_overrides__equal_config(self, config: Config) -> None:
        """None values keep the existing settings."""
        assert config.with_overrides() == config

    def test__overrides__applied(self, config: Config) -> None:
        """Given values replace existing settings."""
        result = config.with_overrides(
            host="0.0.0.0",
            port=9999,
            source_dir=Path("other"),
            heading_offset=3,
            live_reload_enabled=False,
        )

        assert result.server.host == "0.0.0.0"
        assert result.server.port == 9999
        assert result.notes.source_dir == Path("other")
        assert result.notes.output_dir == Path("dist")
        assert result.render.heading_offset == 3
        assert result.live_reload.enabled is False

    def test__original__not_modified(self, config: Config) -> None:
        """The original config is left untouched."""
        config.with_overrides(port=1)

        assert config.server.port == 8080
