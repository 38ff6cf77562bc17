"""Configuration management for Copilot Registry.

Supports TOML configuration format with auto-discovery.
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path

from copilot_registry.core.collections import CollectionKey
from copilot_registry.core.types import DEFAULT_ROOT_MARKER

CONFIG_FILENAME = "registry.toml"


@dataclass
class ServerConfig:
    """Server configuration."""

    host: str = "127.0.0.1"
    port: int = 8080


@dataclass
class RegistryConfig:
    """Content registry configuration."""

    root_dir: Path = field(default_factory=lambda: Path("registry"))
    root_marker: str = DEFAULT_ROOT_MARKER
    collection_dirs: dict[CollectionKey, Path] = field(default_factory=dict)

    def collection_dir(self, key: CollectionKey) -> Path:
        """Return the base directory of a collection.

        Args:
            key: Collection key

        Returns:
            root_dir joined with the configured override, or root_dir / key
        """
        override = self.collection_dirs.get(key)
        if override is not None:
            return self.root_dir / override
        return self.root_dir / key.value


@dataclass
class LiveReloadConfig:
    """Live reload configuration."""

    enabled: bool = True
    watch_patterns: list[str] | None = None


@dataclass
class Config:
    """Application configuration."""

    server: ServerConfig
    registry: RegistryConfig
    live_reload: LiveReloadConfig
    config_path: Path | None = None

    @classmethod
    def load(cls, config_path: Path | None = None) -> Config:
        """Load configuration from file.

        If config_path is provided, loads from that file.
        Otherwise, searches for registry.toml in current directory and parents.

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
    def _default(cls) -> Config:
        return cls(
            server=ServerConfig(),
            registry=RegistryConfig(),
            live_reload=LiveReloadConfig(),
        )

    @classmethod
    def _load_from_file(cls, path: Path) -> Config:
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
            registry=cls._parse_registry(data.get("registry"), config_dir),
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
    def _parse_registry(cls, data: object, config_dir: Path) -> RegistryConfig:
        """Parse registry configuration section.

        Args:
            data: Raw registry section data
            config_dir: Directory containing config file (for relative paths)

        Returns:
            RegistryConfig instance
        """
        if data is None:
            return RegistryConfig(root_dir=config_dir / "registry")

        if not isinstance(data, dict):
            raise ValueError("registry section must be a dictionary")

        root_dir = data.get("root_dir", "registry")
        if not isinstance(root_dir, str):
            raise ValueError("registry.root_dir must be a string")
        root_path = config_dir / root_dir

        root_marker = data.get("root_marker", DEFAULT_ROOT_MARKER)
        if not isinstance(root_marker, str):
            raise ValueError("registry.root_marker must be a string")
        if root_marker and not root_marker.endswith("/"):
            raise ValueError("registry.root_marker must end with '/'")

        collections_raw = data.get("collections", {})
        if not isinstance(collections_raw, dict):
            raise ValueError("registry.collections must be a dictionary")
        collection_dirs: dict[CollectionKey, Path] = {}
        for name, value in collections_raw.items():
            try:
                key = CollectionKey(name)
            except ValueError:
                raise ValueError(f"registry.collections has unknown collection: {name}") from None
            if not isinstance(value, str):
                raise ValueError(f"registry.collections.{name} must be a string")
            collection_dirs[key] = Path(value)

        return RegistryConfig(
            root_dir=root_path,
            root_marker=root_marker,
            collection_dirs=collection_dirs,
        )

    @classmethod
    def _parse_live_reload(cls, data: object) -> LiveReloadConfig:
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
        root_dir: Path | None = None,
        live_reload_enabled: bool | None = None,
    ) -> Config:
        """Create a new Config with CLI overrides applied.

        Only non-None values override the existing config. The original
        Config is not modified.

        Args:
            host: Override server.host
            port: Override server.port
            root_dir: Override registry.root_dir
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

        registry = self.registry
        if root_dir is not None:
            registry = replace(self.registry, root_dir=root_dir)

        live_reload = self.live_reload
        if live_reload_enabled is not None:
            live_reload = replace(self.live_reload, enabled=live_reload_enabled)

        return replace(
            self,
            server=server,
            registry=registry,
            live_reload=live_reload,
        )
