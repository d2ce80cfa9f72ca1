"""Configuration loading for admobgen (admobgen.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Any, Dict, List, Mapping, Optional, Sequence

import yaml

from .definitions import DEFAULT_DEFINITIONS, Definitions

CONFIG_FILENAME = "admobgen.yml"

DEFAULT_ANDROID_DIR = PurePosixPath("cordova/src/android")
DEFAULT_IOS_DIR = PurePosixPath("cordova/src/ios")
DEFAULT_MANIFEST_PATH = PurePosixPath("cordova/plugin.xml")
DEFAULT_MAX_WORKERS = 4


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class GeneratorConfig:
    """Represents the settings defined in admobgen.yml."""

    root: Path
    definitions: Definitions = DEFAULT_DEFINITIONS
    android_dir: PurePosixPath = DEFAULT_ANDROID_DIR
    ios_dir: PurePosixPath = DEFAULT_IOS_DIR
    manifest_path: PurePosixPath = DEFAULT_MANIFEST_PATH
    max_workers: int = DEFAULT_MAX_WORKERS
    source: Optional[Path] = field(default=None, compare=False)


def load_config(config_path: Path) -> GeneratorConfig:
    """Load configuration from disk, falling back to built-in defaults."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return GeneratorConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    definitions = DEFAULT_DEFINITIONS
    if data.get("definitions") is not None:
        definitions = definitions_from_mapping(data["definitions"])

    paths = _as_dict(data.get("paths"))
    android_dir = _as_path(paths.get("android"), "paths.android") or DEFAULT_ANDROID_DIR
    ios_dir = _as_path(paths.get("ios"), "paths.ios") or DEFAULT_IOS_DIR
    manifest_path = _as_path(paths.get("manifest"), "paths.manifest") or DEFAULT_MANIFEST_PATH

    max_workers = _as_int(data.get("workers"))
    if max_workers is not None and max_workers < 1:
        raise ConfigError("workers must be a positive integer")

    return GeneratorConfig(
        root=root,
        definitions=definitions,
        android_dir=android_dir,
        ios_dir=ios_dir,
        manifest_path=manifest_path,
        max_workers=max_workers or DEFAULT_MAX_WORKERS,
        source=config_file,
    )


def definitions_from_mapping(
    data: Any, *, base: Definitions = DEFAULT_DEFINITIONS
) -> Definitions:
    """Build :class:`Definitions` from a loaded ``definitions`` mapping.

    Keys that are absent keep the value from ``base``; an explicitly empty
    collection replaces it.
    """
    if not isinstance(data, Mapping):
        raise ConfigError("definitions must be a mapping")

    actions = base.actions
    if "actions" in data:
        actions = _as_str_mapping(data["actions"], "definitions.actions")
    events = base.events
    if "events" in data:
        events = _as_str_mapping(data["events"], "definitions.events")
    ad_size_types: Sequence[str] = base.ad_size_types
    if "ad_size_types" in data:
        ad_size_types = _as_identifier_list(data["ad_size_types"], "definitions.ad_size_types")

    return base.replace(actions=actions, events=events, ad_size_types=ad_size_types)


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return {} if loaded is None else loaded


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_path(value: Any, label: str) -> Optional[PurePosixPath]:
    if value is None:
        return None
    text = _as_str(value)
    if not text:
        raise ConfigError(f"{label} must be a relative path")
    path = PurePosixPath(text.replace("\\", "/"))
    if path.is_absolute():
        raise ConfigError(f"{label} must be relative to the packages root")
    return path


def _as_str_mapping(value: Any, label: str) -> Dict[str, str]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"{label} must be a mapping of names to strings")
    result: Dict[str, str] = {}
    for key, item in value.items():
        # YAML 1.1 reads bare yes/no/on/off as booleans.
        text = None if isinstance(item, bool) else _as_str(item)
        if not isinstance(key, str) or text is None:
            raise ConfigError(f"{label} entry {key!r} must map a name to a string")
        result[key] = text
    return result


def _as_identifier_list(value: Any, label: str) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str) or not isinstance(value, Sequence):
        raise ConfigError(f"{label} must be a list of identifiers")
    result: List[str] = []
    for item in value:
        if not isinstance(item, str):
            raise ConfigError(f"{label} entries must be strings, got {item!r}")
        result.append(item)
    return result


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "GeneratorConfig",
    "definitions_from_mapping",
    "load_config",
]
