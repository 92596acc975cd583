"""Configuration management for nestedmenu.

Supports TOML configuration format with auto-discovery.
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path

from nestedmenu.core.formatter import DEFAULT_ITEM_TEMPLATE, validate_item_template

CONFIG_FILENAME = "nestedmenu.toml"

DEFAULT_EXCLUDE_CHILDREN_OF = frozenset({"StackedListPage"})
DEFAULT_RECURSION_LIMIT = 32


@dataclass
class ServerConfig:
    """Server configuration."""

    host: str = "127.0.0.1"
    port: int = 8080


@dataclass
class SiteConfig:
    """Site definition configuration."""

    source: Path = field(default_factory=lambda: Path("site.toml"))


@dataclass(frozen=True)
class MenuConfig:
    """Menu rendering configuration.

    Passed to each renderer explicitly, so renderers with different
    settings can coexist in one process.
    """

    item_template: str = DEFAULT_ITEM_TEMPLATE
    exclude_children_of: frozenset[str] = DEFAULT_EXCLUDE_CHILDREN_OF
    recursion_limit: int = DEFAULT_RECURSION_LIMIT

    def __post_init__(self) -> None:
        validate_item_template(self.item_template)
        if self.recursion_limit < 1:
            raise ValueError("menu.recursion_limit must be a positive integer")


@dataclass
class Config:
    """Application configuration."""

    server: ServerConfig
    site: SiteConfig
    menu: MenuConfig
    config_path: Path | None = None

    @classmethod
    def load(cls, config_path: Path | None = None) -> Config:
        """Load configuration from file.

        If config_path is provided, loads from that file.
        Otherwise, searches for nestedmenu.toml in current directory and parents.

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
        """Search for config file in current directory and parents."""
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
        """Create config with all defaults."""
        return cls(
            server=ServerConfig(),
            site=SiteConfig(),
            menu=MenuConfig(),
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
            data = tomllib.load(f)

        if not isinstance(data, dict):
            raise ValueError("Configuration must be a dictionary")

        config_dir = path.parent

        return cls(
            server=cls._parse_server(data.get("server")),
            site=cls._parse_site(data.get("site"), config_dir),
            menu=cls._parse_menu(data.get("menu")),
            config_path=path,
        )

    @classmethod
    def _parse_server(cls, data: object) -> ServerConfig:
        """Parse server configuration section."""
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
    def _parse_site(cls, data: object, config_dir: Path) -> SiteConfig:
        """Parse site configuration section.

        Args:
            data: Raw site section data
            config_dir: Directory containing config file (for relative paths)

        Returns:
            SiteConfig instance
        """
        if data is None:
            return SiteConfig(source=config_dir / "site.toml")

        if not isinstance(data, dict):
            raise ValueError("site section must be a dictionary")

        source = data.get("source", "site.toml")
        if not isinstance(source, str):
            raise ValueError("site.source must be a string")

        return SiteConfig(source=config_dir / source)

    @classmethod
    def _parse_menu(cls, data: object) -> MenuConfig:
        """Parse menu configuration section.

        Args:
            data: Raw menu section data

        Returns:
            MenuConfig instance
        """
        if data is None:
            return MenuConfig()

        if not isinstance(data, dict):
            raise ValueError("menu section must be a dictionary")

        item_template = data.get("item_template", DEFAULT_ITEM_TEMPLATE)
        if not isinstance(item_template, str):
            raise ValueError("menu.item_template must be a string")

        exclude_raw = data.get("exclude_children_of")
        exclude_children_of = DEFAULT_EXCLUDE_CHILDREN_OF
        if exclude_raw is not None:
            if not isinstance(exclude_raw, list):
                raise ValueError("menu.exclude_children_of must be a list")
            for item in exclude_raw:
                if not isinstance(item, str):
                    raise ValueError("menu.exclude_children_of items must be strings")
            exclude_children_of = frozenset(exclude_raw)

        recursion_limit = data.get("recursion_limit", DEFAULT_RECURSION_LIMIT)
        if not isinstance(recursion_limit, int) or isinstance(recursion_limit, bool):
            raise ValueError("menu.recursion_limit must be an integer")

        return MenuConfig(
            item_template=item_template,
            exclude_children_of=exclude_children_of,
            recursion_limit=recursion_limit,
        )

    def with_overrides(
        self,
        *,
        host: str | None = None,
        port: int | None = None,
        site_source: Path | None = None,
    ) -> Config:
        """Create a new Config with CLI overrides applied.

        Only non-None values override the existing config. The original
        Config is not modified.

        Args:
            host: Override server.host
            port: Override server.port
            site_source: Override site.source

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

        site = self.site
        if site_source is not None:
            site = replace(self.site, source=site_source)

        return replace(self, server=server, site=site)
