"""Configuration management for Scribe.

Supports TOML configuration format with auto-discovery.
"""

import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path

CONFIG_FILENAME = "scribe.toml"


@dataclass
class ServerConfig:
    """Server configuration."""

    host: str = "127.0.0.1"
    port: int = 8080


@dataclass
class NotesConfig:
    """Notes site configuration."""

    source_dir: Path = field(default_factory=lambda: Path("notes"))
    output_dir: Path = field(default_factory=lambda: Path("dist"))
    templates_dir: Path | None = None
    assets_dir: Path = field(default_factory=lambda: Path("assets"))


@dataclass
class RenderConfig:
    """Document rendering configuration."""

    heading_offset: int = 1


@dataclass
class LiveReloadConfig:
    """Live reload configuration."""

    enabled: bool = True
    watch_patterns: list[str] | None = None


@dataclass
class Config:
    """Application configuration."""

    server: ServerConfig
    notes: NotesConfig
    render: RenderConfig
    live_reload: LiveReloadConfig
    config_path: Path | None = None

    @classmethod
    def load(cls, config_path: Path | None = None) -> "Config":
        """Load configuration from file.

        If config_path is provided, loads from that file.
        Otherwise, searches for scribe.toml in current directory and parents.

        Args:
            config_path: Optional explicit path to config file

        Returns:
            Config instance with defaults for missing sections

        Raises:
            FileNotFoundError: If explicit config_path doesn't exist
            ValueError: If configuration is invalid
        """
        if config_path is not None:
            if not config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {config_path}")
            return cls._load_from_file(config_path)

        discovered_path = cls._discover_config()
        if discovered_path is None:
            return cls._default()

        return cls._load_from_file(discovered_path)

    @classmethod
    def _discover_config(cls) -> Path | None:
        """Search for config file in current directory and parents.

        Returns:
            Path to config file or None if not found
        """
        current = Path.cwd()
        while True:
            candidate = current / CONFIG_FILENAME
            if candidate.exists():
                return candidate
            parent = current.parent
            if parent == current:
                return None
            current = parent

    @classmethod
    def _default(cls) -> "Config":
        return cls(
            server=ServerConfig(),
            notes=NotesConfig(),
            render=RenderConfig(),
            live_reload=LiveReloadConfig(),
        )

    @classmethod
    def _load_from_file(cls, path: Path) -> "Config":
        """Load configuration from a specific file.

        Args:
            path: Path to TOML configuration file

        Returns:
            Config instance

        Raises:
            ValueError: If configuration is invalid
        """
        with path.open("rb") as f:
            try:
                data = tomllib.load(f)
            except tomllib.TOMLDecodeError as e:
                raise ValueError(f"Invalid TOML in {path}: {e}") from e

        config_dir = path.parent

        return cls(
            server=cls._parse_server(data.get("server")),
            notes=cls._parse_notes(data.get("notes"), config_dir),
            render=cls._parse_render(data.get("render")),
            live_reload=cls._parse_live_reload(data.get("live_reload")),
            config_path=path,
        )

    @classmethod
    def _parse_server(cls, data: object) -> ServerConfig:
        if data is None:
            return ServerConfig()

        if not isinstance(data, dict):
            raise ValueError("server section must be a dictionary")

        host = data.get("host", "127.0.0.1")
        if not isinstance(host, str):
            raise ValueError("server.host must be a string")

        port = data.get("port", 8080)
        if not isinstance(port, int) or isinstance(port, bool):
            raise ValueError("server.port must be an integer")

        return ServerConfig(host=host, port=port)

    @classmethod
    def _parse_notes(cls, data: object, config_dir: Path) -> NotesConfig:
        """Parse notes configuration section.

        Args:
            data: Raw notes section data
            config_dir: Directory containing config file (for relative paths)

        Returns:
            NotesConfig instance
        """
        if data is None:
            data = {}

        if not isinstance(data, dict):
            raise ValueError("notes section must be a dictionary")

        paths: dict[str, Path] = {}
        for key, default in (
            ("source_dir", "notes"),
            ("output_dir", "dist"),
            ("assets_dir", "assets"),
        ):
            value = data.get(key, default)
            if not isinstance(value, str):
                raise ValueError(f"notes.{key} must be a string")
            paths[key] = config_dir / value

        templates_dir = data.get("templates_dir")
        if templates_dir is not None and not isinstance(templates_dir, str):
            raise ValueError("notes.templates_dir must be a string")

        return NotesConfig(
            source_dir=paths["source_dir"],
            output_dir=paths["output_dir"],
            templates_dir=config_dir / templates_dir if templates_dir is not None else None,
            assets_dir=paths["assets_dir"],
        )

    @classmethod
    def _parse_render(cls, data: object) -> RenderConfig:
        if data is None:
            return RenderConfig()

        if not isinstance(data, dict):
            raise ValueError("render section must be a dictionary")

        heading_offset = data.get("heading_offset", 1)
        if not isinstance(heading_offset, int) or isinstance(heading_offset, bool):
            raise ValueError("render.heading_offset must be an integer")
        if heading_offset < 0:
            raise ValueError("render.heading_offset must not be negative")

        return RenderConfig(heading_offset=heading_offset)

    @classmethod
    def _parse_live_reload(cls, data: object) -> LiveReloadConfig:
        """Parse live_reload configuration section.

        Args:
            data: Raw live_reload section data

        Returns:
            LiveReloadConfig instance
        """
        if data is None:
            return LiveReloadConfig()

        if not isinstance(data, dict):
            raise ValueError("live_reload section must be a dictionary")

        enabled = data.get("enabled", True)
        if not isinstance(enabled, bool):
            raise ValueError("live_reload.enabled must be a boolean")

        watch_patterns_raw = data.get("watch_patterns")
        watch_patterns: list[str] | None = None
        if watch_patterns_raw is not None:
            if not isinstance(watch_patterns_raw, list):
                raise ValueError("live_reload.watch_patterns must be a list")
            watch_patterns = []
            for item in watch_patterns_raw:
                if not isinstance(item, str):
                    raise ValueError("live_reload.watch_patterns items must be strings")
                watch_patterns.append(item)

        return LiveReloadConfig(enabled=enabled, watch_patterns=watch_patterns)

    def with_overrides(
        self,
        *,
        host: str | None = None,
        port: int | None = None,
        source_dir: Path | None = None,
        output_dir: Path | None = None,
        heading_offset: int | None = None,
        live_reload_enabled: bool | None = None,
    ) -> "Config":
        """Create a new Config with CLI overrides applied.

        Only non-None values override the existing config. The original
        Config is not modified.

        Args:
            host: Override server.host
            port: Override server.port
            source_dir: Override notes.source_dir
            output_dir: Override notes.output_dir
            heading_offset: Override render.heading_offset
            live_reload_enabled: Override live_reload.enabled

        Returns:
            New Config instance with overrides applied
        """
        server = self.server
        if host is not None or port is not None:
            server = replace(
                self.server,
                host=host if host is not None else self.server.host,
                port=port if port is not None else self.server.port,
            )

        notes = self.notes
        if source_dir is not None or output_dir is not None:
            notes = replace(
                self.notes,
                source_dir=source_dir if source_dir is not None else self.notes.source_dir,
                output_dir=output_dir if output_dir is not None else self.notes.output_dir,
            )

        render = self.render
        if heading_offset is not None:
            render = replace(self.render, heading_offset=heading_offset)

        live_reload = self.live_reload
        if live_reload_enabled is not None:
            live_reload = replace(self.live_reload, enabled=live_reload_enabled)

        return replace(
            self,
            server=server,
            notes=notes,
            render=render,
            live_reload=live_reload,
        )
