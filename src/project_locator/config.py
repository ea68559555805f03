"""Locator configuration.

The host owns the settings; a locator only ever sees an immutable
`LocatorConfig` snapshot rebuilt from a `ConfigSource` on every refresh.
Keys live under the `projectManager` namespace:

    projectManager.<kind>.baseFolders         list of folders to scan
    projectManager.<kind>.ignoredFolders      folder names never descended into
    projectManager.<kind>.maxDepthRecursion   levels below a base folder (-1 = unlimited)
    projectManager.cacheProjectsBetweenSessions
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol

from .settings import get_settings

logger = logging.getLogger(__name__)

CONFIG_NAMESPACE = "projectManager"

_MISSING = object()


class ConfigSource(Protocol):
    def reload(self) -> None: ...

    def get(self, key: str, default: Any = None) -> Any: ...


class MappingConfigSource:
    """In-memory settings keyed by fully qualified names."""

    def __init__(self, values: Mapping[str, Any] | None = None) -> None:
        self._values: dict[str, Any] = dict(values or {})

    def reload(self) -> None:
        return None

    def get(self, key: str, default: Any = None) -> Any:
        return self._values.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._values[key] = value

    def unset(self, key: str) -> None:
        self._values.pop(key, None)


class SettingsFileConfigSource:
    """Settings read from the editor's `settings.json`.

    Both flat dotted keys (`"projectManager.git.baseFolders": [...]`) and nested
    objects are understood. A missing file means "all defaults"; a file that
    cannot be parsed is logged and also treated as defaults.
    """

    def __init__(self, path: Path | None = None) -> None:
        self.path = Path(path) if path is not None else get_settings().settings_file
        self._values: dict[str, Any] = {}

    def reload(self) -> None:
        if not self.path.exists():
            self._values = {}
            return
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            logger.warning("Ignoring unreadable settings file %s: %s", self.path, exc)
            self._values = {}
            return
        if not isinstance(data, dict):
            logger.warning("Ignoring settings file %s: top level is not an object", self.path)
            self._values = {}
            return
        self._values = data

    def get(self, key: str, default: Any = None) -> Any:
        if key in self._values:
            return self._values[key]

        node: Any = self._values
        for part in key.split("."):
            if not isinstance(node, dict):
                return default
            node = node.get(part, _MISSING)
            if node is _MISSING:
                return default
        return node


@dataclass(frozen=True)
class LocatorConfig:
    base_folders: tuple[str, ...] = ()
    ignored_folders: tuple[str, ...] = ()
    max_depth: int = -1
    use_cached_projects: bool = True

    def is_folder_ignored(self, name: str) -> bool:
        return name in self.ignored_folders

    def is_max_depth_reached(self, current_depth: int, initial_depth: int) -> bool:
        return self.max_depth > 0 and (current_depth - initial_depth) > self.max_depth


def _as_str_tuple(value: Any) -> tuple[str, ...]:
    if not isinstance(value, (list, tuple)):
        return ()
    return tuple(item for item in value if isinstance(item, str))


def _as_int(value: Any, default: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        return default
    return value


def load_locator_config(source: ConfigSource, kind: str) -> LocatorConfig:
    """Build a fresh snapshot for `kind` from `source`."""
    prefix = f"{CONFIG_NAMESPACE}.{kind}."
    use_cache = source.get(f"{CONFIG_NAMESPACE}.cacheProjectsBetweenSessions", True)
    return LocatorConfig(
        base_folders=_as_str_tuple(source.get(prefix + "baseFolders", [])),
        ignored_folders=_as_str_tuple(source.get(prefix + "ignoredFolders", [])),
        max_depth=_as_int(source.get(prefix + "maxDepthRecursion", -1), -1),
        use_cached_projects=use_cache if isinstance(use_cache, bool) else True,
    )
