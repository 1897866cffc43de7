"""Configuration Management Package

Settings live in a JSON `.aichangelogrc`, looked up in the working directory
first and then in the home directory. Unknown keys are ignored; invalid values
fall back to their defaults with a warning on stderr.
"""

import json
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Optional

from aichangelog import DEFAULT_CHANGELOG_PATH
from aichangelog.changelog.version import DEFAULT_TRIGGER_ENV
from aichangelog.output import print_warning

VALID_PROVIDERS = {"auto", "gemini", "claude", "ollama"}
CONFIG_FILENAME = ".aichangelogrc"


def _is_positive_int(value) -> bool:
    # JSON `true` loads as a bool, which is also an int
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def _is_text(value) -> bool:
    return isinstance(value, str) and bool(value.strip())


FIELD_CHECKS = {
    "provider": lambda v: isinstance(v, str) and v in VALID_PROVIDERS,
    "model": lambda v: v is None or _is_text(v),
    "timeout": lambda v: v is None or _is_positive_int(v),
    "changelog_path": _is_text,
    "trigger_env": _is_text,
}


@dataclass
class Config:
    """User configuration with sensible defaults."""
    provider: str = "auto"
    model: Optional[str] = None
    timeout: Optional[int] = None  # seconds; None uses the provider default
    changelog_path: str = DEFAULT_CHANGELOG_PATH
    trigger_env: str = DEFAULT_TRIGGER_ENV

    def to_dict(self) -> dict:
        return {k: v for k, v in asdict(self).items() if v is not None}

    def validate(self) -> list[str]:
        """Reset every invalid field to its default and return one warning per reset."""
        warnings = []
        defaults = Config()
        for name, is_valid in FIELD_CHECKS.items():
            value = getattr(self, name)
            if is_valid(value):
                continue
            default = getattr(defaults, name)
            shown = "provider default" if default is None else repr(default)
            warnings.append(f"Invalid {name} {value!r}, using {shown}")
            setattr(self, name, default)
        return warnings

    @classmethod
    def from_dict(cls, data: dict) -> 'Config':
        known = {f.name for f in fields(cls)}
        config = cls(**{k: v for k, v in data.items() if k in known})
        for warning in config.validate():
            print_warning(f"Config warning: {warning}")
        return config


class ConfigManager:
    """Finds, loads and saves `.aichangelogrc`. The first file found wins."""

    def __init__(self):
        self._config: Optional[Config] = None
        self._config_path: Optional[Path] = None

    @staticmethod
    def search_paths() -> list[Path]:
        return [Path.cwd() / CONFIG_FILENAME, Path.home() / CONFIG_FILENAME]

    def load(self) -> Config:
        if self._config is None:
            self._config_path = next((p for p in self.search_paths() if p.is_file()), None)
            self._config = self._read(self._config_path) if self._config_path else Config()
        return self._config

    @staticmethod
    def _read(path: Path) -> Config:
        try:
            data = json.loads(path.read_text(encoding='utf-8'))
        except (OSError, ValueError) as e:
            print_warning(f"Could not load {path}: {e}")
            return Config()
        if not isinstance(data, dict):
            print_warning(f"Ignoring {path}: expected a JSON object")
            return Config()
        return Config.from_dict(data)

    def save(self, config: Config, global_config: bool = True) -> Path:
        local_path, home_path = self.search_paths()
        path = home_path if global_config else local_path
        path.write_text(json.dumps(config.to_dict(), indent=2) + "\n", encoding='utf-8')
        self._config, self._config_path = config, path
        return path

    def get_config_path(self) -> Optional[Path]:
        return self._config_path


_manager = ConfigManager()


def load_config() -> Config:
    return _manager.load()


def save_config(config: Config, global_config: bool = True) -> Path:
    return _manager.save(config, global_config)


def get_config_path() -> Optional[Path]:
    return _manager.get_config_path()


__all__ = [
    "Config",
    "ConfigManager",
    "load_config",
    "save_config",
    "get_config_path",
    "VALID_PROVIDERS",
    "CONFIG_FILENAME",
]
