"""Configuration Management Package

Settings are resolved in this order (later wins):

1. Built-in defaults
2. .changelogrc in home directory, or in the current directory if present
3. CHANGELOG_* environment variables (and GITHUB_SERVER_URL)
4. Command line flags
"""

import json
import os
import sys
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Optional

from changelog_gen.engine import RenderConfig, VALID_ORDERS

# Environment variable -> Config field
ENV_OVERRIDES = {
    "CHANGELOG_ORDER": "order",
    "CHANGELOG_TEMPLATE": "template",
    "CHANGELOG_CUSTOM_EMOJI": "custom_emoji",
    "CHANGELOG_FILTER": "filter",
    "CHANGELOG_FILTER_AUTHOR": "filter_author",
    "GITHUB_SERVER_URL": "server_url",
}

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass
class Config:
    """User configuration with sensible defaults."""
    order: str = "desc"
    template: str = ""
    custom_emoji: str = ""  # e.g. "type🆎,chore💄,fix🐞"
    show_emoji: bool = True
    remove_type: bool = True
    filter_author: str = ""
    filter: str = ""
    original_markdown: bool = False
    gh_pages: str = "gh-pages"
    server_url: str = "https://github.com"

    def to_dict(self) -> dict:
        return {k: v for k, v in asdict(self).items() if v is not None}

    def validate(self) -> list[str]:
        """Validate config values and return list of warnings.

        Invalid values are replaced with defaults after warning. The filter
        pattern is not checked here; a bad pattern is fatal when the
        RenderConfig is built.
        """
        warnings = []
        defaults = Config()

        if self.order not in VALID_ORDERS:
            warnings.append(f"Invalid order '{self.order}', using '{defaults.order}'")
            self.order = defaults.order

        for name in ("show_emoji", "remove_type", "original_markdown"):
            value = getattr(self, name)
            if isinstance(value, bool):
                continue
            parsed = parse_bool(value)
            if parsed is None:
                warnings.append(f"Invalid {name} '{value}', using {str(getattr(defaults, name)).lower()}")
                parsed = getattr(defaults, name)
            setattr(self, name, parsed)

        for name in ("template", "custom_emoji", "filter_author", "filter", "gh_pages", "server_url"):
            value = getattr(self, name)
            if not isinstance(value, str):
                warnings.append(f"Invalid {name} '{value}', using '{getattr(defaults, name)}'")
                setattr(self, name, getattr(defaults, name))

        if not self.gh_pages:
            self.gh_pages = defaults.gh_pages

        return warnings

    def apply_env(self, environ: Optional[dict] = None) -> 'Config':
        """Override fields from the environment (see ENV_OVERRIDES)."""
        environ = os.environ if environ is None else environ
        for var, name in ENV_OVERRIDES.items():
            value = environ.get(var)
            if value:
                setattr(self, name, value)
        for warning in self.validate():
            print(f"Config warning: {warning}", file=sys.stderr)
        return self

    def to_render_config(self) -> RenderConfig:
        """Freeze into the engine's RenderConfig. Raises InvalidConfigError on a bad filter."""
        return RenderConfig.build(
            custom_emoji=self.custom_emoji,
            filter=self.filter,
            order=self.order,
            show_emoji=self.show_emoji,
            remove_type=self.remove_type,
            filter_author=self.filter_author.strip(),
            original_markdown=self.original_markdown,
            template=self.template,
            server_url=self.server_url,
        )

    @classmethod
    def from_dict(cls, data: dict) -> 'Config':
        valid_keys = {f.name for f in fields(cls)}
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        config = cls(**filtered)
        for warning in config.validate():
            print(f"Config warning: {warning}", file=sys.stderr)
        return config


def parse_bool(value) -> Optional[bool]:
    """Parse action-style boolean inputs ("true", "false", "1", ...)."""
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    return None


class ConfigManager:
    """Manages loading and saving configuration."""

    CONFIG_FILENAME = ".changelogrc"

    def __init__(self):
        self._config: Optional[Config] = None
        self._config_path: Optional[Path] = None

    def load(self) -> Config:
        if self._config is not None:
            return self._config

        local_path = Path.cwd() / self.CONFIG_FILENAME
        if local_path.exists():
            self._config = self._load_from_file(local_path)
            self._config_path = local_path
            return self._config

        home_path = Path.home() / self.CONFIG_FILENAME
        if home_path.exists():
            self._config = self._load_from_file(home_path)
            self._config_path = home_path
            return self._config

        self._config = Config()
        return self._config

    def _load_from_file(self, path: Path) -> Config:
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError("top level must be a JSON object")
            return Config.from_dict(data)
        except (json.JSONDecodeError, ValueError, OSError) as e:
            print(f"Warning: Could not load {path}: {e}", file=sys.stderr)
            return Config()

    def get_config_path(self) -> Optional[Path]:
        return self._config_path


_manager = ConfigManager()


def load_config() -> Config:
    return _manager.load()


def get_config_path() -> Optional[Path]:
    return _manager.get_config_path()


__all__ = [
    "Config",
    "ConfigManager",
    "ENV_OVERRIDES",
    "load_config",
    "get_config_path",
    "parse_bool",
]
