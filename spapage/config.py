"""Configuration loading for spapage (.spapage.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .transform import Namespaces

CONFIG_FILENAME = ".spapage.yml"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class DefaultsConfig:
    """Toggle values applied when the matching CLI flag is absent."""

    shared: bool = False
    request: bool = False


@dataclass
class SpaPageConfig:
    """Represents the settings defined in .spapage.yml."""

    root: Path
    path: Optional[Path] = None
    templates_dir: Optional[Path] = None
    namespaces: Namespaces = field(default_factory=Namespaces)
    defaults: DefaultsConfig = field(default_factory=DefaultsConfig)


def find_config(start: Path) -> Optional[Path]:
    """Return the nearest .spapage.yml in start (or its directory) and ancestors."""
    start = start.expanduser().resolve()
    directory = start if start.is_dir() else start.parent
    for candidate in (directory, *directory.parents):
        config_file = candidate / CONFIG_FILENAME
        if config_file.is_file():
            return config_file
    return None


def load_config(config_path: Path) -> SpaPageConfig:
    """Load configuration from disk.

    A directory is searched for .spapage.yml; a missing file yields defaults
    rooted at that directory.
    """
    config_path = config_path.expanduser()
    config_file = config_path / CONFIG_FILENAME if config_path.is_dir() else config_path
    config_file = config_file.resolve()
    root = config_file.parent

    if not config_file.exists():
        return SpaPageConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{config_file.name} must contain a mapping at the root")

    templates_dir_str = _as_str(data.get("templates_dir"))
    templates_dir = root / templates_dir_str if templates_dir_str else None

    namespaces = Namespaces()
    namespace_data = _as_dict(data.get("namespaces"))
    if namespace_data:
        namespaces = Namespaces(
            pages=_as_str(namespace_data.get("pages")) or namespaces.pages,
            params=_as_str(namespace_data.get("params")) or namespaces.params,
        )

    defaults = DefaultsConfig()
    defaults_data = _as_dict(data.get("defaults"))
    if defaults_data:
        defaults.shared = _as_bool(defaults_data.get("shared")) or False
        defaults.request = _as_bool(defaults_data.get("request")) or False

    return SpaPageConfig(
        root=root,
        path=config_file,
        templates_dir=templates_dir,
        namespaces=namespaces,
        defaults=defaults,
    )


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


__all__ = ["CONFIG_FILENAME", "ConfigError", "DefaultsConfig", "SpaPageConfig", "find_config", "load_config"]
