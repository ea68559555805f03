"""Per-kind projects cache.

One JSON file per locator kind, named `projects_cache_<kind>.json`, kept in
the editor's user settings directory. On Linux the XDG directory
(`~/.config/<channel>/User`) is used whenever the primary location holds no
cache file.

A cache that cannot be read is treated as absent so the caller rescans.
A cache that cannot be written is logged; the in-memory list stays usable.
"""

from __future__ import annotations

import logging
import sys
import threading
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from .errors import CacheError
from .models import DirInfo, DirList, dir_list_from_json, dir_list_to_json
from .settings import get_settings

logger = logging.getLogger(__name__)

CACHE_FILE_PREFIX = "projects_cache_"


class CacheStore(Protocol):
    def exists(self, kind: str) -> bool: ...

    def load(self, kind: str) -> DirList | None: ...

    def save(self, kind: str, dirs: Sequence[DirInfo]) -> bool: ...

    def delete(self, kind: str) -> None: ...


def cache_file_name(kind: str) -> str:
    return f"{CACHE_FILE_PREFIX}{kind}.json"


class FileCacheStore:
    def __init__(
        self,
        user_dir: Path | None = None,
        fallback_dir: Path | None = None,
        platform: str | None = None,
    ) -> None:
        if user_dir is None or fallback_dir is None:
            current = get_settings()
            user_dir = user_dir if user_dir is not None else current.user_dir
            fallback_dir = fallback_dir if fallback_dir is not None else current.linux_fallback_user_dir
        self.user_dir = Path(user_dir)
        self.fallback_dir = Path(fallback_dir)
        self.platform = platform or sys.platform

    def _candidates(self, kind: str) -> list[Path]:
        name = cache_file_name(kind)
        paths = [self.user_dir / name]
        if self.platform.startswith("linux"):
            paths.append(self.fallback_dir / name)
        return paths

    def cache_file(self, kind: str) -> Path:
        """Resolve the cache path for `kind`."""
        primary, *rest = self._candidates(kind)
        if rest and not primary.exists():
            return rest[0]
        return primary

    def exists(self, kind: str) -> bool:
        return self.cache_file(kind).exists()

    def load(self, kind: str) -> DirList | None:
        path = self.cache_file(kind)
        if not path.exists():
            return None
        try:
            dirs = dir_list_from_json(path.read_bytes())
        except (OSError, CacheError) as exc:
            logger.warning("Ignoring unreadable projects cache %s: %s", path, exc)
            return None
        logger.debug("Loaded %d cached projects from %s", len(dirs), path)
        return dirs

    def save(self, kind: str, dirs: Sequence[DirInfo]) -> bool:
        path = self.cache_file(kind)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(dir_list_to_json(dirs), encoding="utf-8")
        except OSError as exc:
            logger.warning("Failed to write projects cache %s: %s", path, exc)
            return False
        logger.debug("Saved %d projects to %s", len(dirs), path)
        return True

    def delete(self, kind: str) -> None:
        # Both locations: a stale fallback would otherwise be picked up once
        # the primary file is gone.
        for path in self._candidates(kind):
            try:
                path.unlink(missing_ok=True)
            except OSError as exc:
                logger.warning("Failed to delete projects cache %s: %s", path, exc)


class MemoryCacheStore:
    """Cache kept in process memory only."""

    def __init__(self) -> None:
        self._entries: dict[str, DirList] = {}
        self._lock = threading.Lock()

    def exists(self, kind: str) -> bool:
        with self._lock:
            return kind in self._entries

    def load(self, kind: str) -> DirList | None:
        with self._lock:
            entries = self._entries.get(kind)
            return list(entries) if entries is not None else None

    def save(self, kind: str, dirs: Sequence[DirInfo]) -> bool:
        with self._lock:
            self._entries[kind] = list(dirs)
        return True

    def delete(self, kind: str) -> None:
        with self._lock:
            self._entries.pop(kind, None)
