"""Settings store for network configuration.

Loads flat, dotted-key settings (``network.bind_host``) from a YAML file,
environment variables, or a plain dict.
"""

import logging
import os
import re
from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterator, Mapping, Optional

import yaml

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

ENV_PREFIX = "NETRESOLVE_"
CONFIG_FILE_ENV = "NETRESOLVE_CONFIG"

_TRUE_VALUES = {"true", "yes", "on", "1"}
_FALSE_VALUES = {"false", "no", "off", "0"}

_BYTE_SIZE_RE = re.compile(r"^\s*(\d+)\s*([kmgt]?)b?\s*$", re.IGNORECASE)
_BYTE_SIZE_UNITS = {"": 1, "k": 1024, "m": 1024**2, "g": 1024**3, "t": 1024**4}


def _flatten(data: Mapping[str, Any], prefix: str = "") -> dict[str, str]:
    """Flatten nested mappings into dotted keys with string values."""
    flat: dict[str, str] = {}
    for key, value in data.items():
        full_key = f"{prefix}{key}"
        if isinstance(value, Mapping):
            flat.update(_flatten(value, f"{full_key}."))
        elif value is None:
            continue
        elif isinstance(value, bool):
            flat[full_key] = "true" if value else "false"
        elif isinstance(value, (list, tuple)):
            flat[full_key] = ",".join(str(v) for v in value)
        else:
            flat[full_key] = str(value)
    return flat


def parse_byte_size(key: str, value: str | int) -> int:
    """
    Parse a byte size such as ``64kb``, ``1m`` or ``8192``.

    Raises:
        ConfigurationError: If the value is not a valid size
    """
    if isinstance(value, int):
        return value
    match = _BYTE_SIZE_RE.match(value)
    if not match:
        raise ConfigurationError(key, f"invalid byte size '{value}'")
    number, unit = match.groups()
    return int(number) * _BYTE_SIZE_UNITS[unit.lower()]


class Settings(Mapping[str, str]):
    """Immutable key/value settings with nested-default lookup."""

    def __init__(self, values: Optional[Mapping[str, Any]] = None):
        self._values = MappingProxyType(_flatten(values or {}))

    def __getitem__(self, key: str) -> str:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"Settings({dict(self._values)!r})"

    def get(self, key: str, default_key: Optional[str] = None) -> Optional[str]:  # type: ignore[override]
        """
        Get a setting value.

        Args:
            key: Setting key to look up
            default_key: Key consulted when ``key`` is not set

        Returns:
            The first value found, or None
        """
        value = self._values.get(key)
        if value is None and default_key is not None:
            value = self._values.get(default_key)
        return value

    def get_bool(self, key: str, default: Optional[bool] = None) -> Optional[bool]:
        """Get a boolean setting."""
        value = self.get(key)
        if value is None:
            return default
        lowered = value.strip().lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
        raise ConfigurationError(key, f"invalid boolean '{value}'")

    def get_int(self, key: str, default: Optional[int] = None) -> Optional[int]:
        """Get an integer setting."""
        value = self.get(key)
        if value is None:
            return default
        try:
            return int(value)
        except ValueError:
            raise ConfigurationError(key, f"invalid integer '{value}'")

    def get_byte_size(self, key: str, default: Optional[int] = None) -> Optional[int]:
        """Get a byte size setting (``64kb``, ``1mb``, ``512``)."""
        value = self.get(key)
        if value is None:
            return default
        return parse_byte_size(key, value)

    def merged(self, other: Mapping[str, Any]) -> "Settings":
        """Return new settings with ``other`` overriding these values."""
        combined = dict(self._values)
        combined.update(_flatten(other))
        return Settings(combined)

    @classmethod
    def from_dict(cls, values: Mapping[str, Any]) -> "Settings":
        """Build settings from a (possibly nested) mapping."""
        return cls(values)

    @classmethod
    def from_yaml(cls, path: Path | str) -> "Settings":
        """
        Load settings from a YAML file.

        A missing file yields empty settings.

        Raises:
            ConfigurationError: If the file is not valid YAML or not a mapping
        """
        path = Path(path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except FileNotFoundError:
            logger.warning(f"Config file not found: {path}, using defaults")
            return cls()
        except yaml.YAMLError as e:
            raise ConfigurationError(str(path), f"invalid YAML: {e}")

        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            raise ConfigurationError(str(path), "top level must be a mapping")

        logger.info(f"Loaded network settings from {path}")
        return cls(data)

    @classmethod
    def from_env(
        cls,
        prefix: str = ENV_PREFIX,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "Settings":
        """
        Load settings from environment variables.

        ``NETRESOLVE_NETWORK__BIND_HOST`` maps to ``network.bind_host``.
        """
        environ = os.environ if environ is None else environ
        values = {}
        for name, value in environ.items():
            if not name.startswith(prefix) or name == CONFIG_FILE_ENV:
                continue
            key = name[len(prefix):].lower().replace("__", ".")
            if key:
                values[key] = value
        return cls(values)

    @classmethod
    def load(cls, config_path: Path | str | None = None) -> "Settings":
        """
        Load settings from a YAML file, then apply environment overrides.

        Args:
            config_path: Optional path to a YAML file. Falls back to the
                         ``NETRESOLVE_CONFIG`` environment variable.

        Returns:
            Settings instance with loaded values
        """
        if config_path is None:
            config_path = os.getenv(CONFIG_FILE_ENV)

        settings = cls.from_yaml(config_path) if config_path else cls()
        return settings.merged(cls.from_env())


# Global settings instance (lazy loaded)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings


def reload_settings(config_path: Path | str | None = None) -> Settings:
    """Reload settings from file and environment."""
    global _settings
    _settings = Settings.load(config_path)
    return _settings
