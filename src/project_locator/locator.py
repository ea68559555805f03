"""Project discovery across configured base folders.

A `Locator` walks every base folder of its kind looking for directories the
kind recognises as project roots, keeps the matches in discovery order, and
persists them so the next session can skip the walk.

Walk rules:
- The base folder itself is tested.
- A child more than `max_depth` levels below its base folder (when
  `max_depth > 0`) is neither tested nor descended into.
- A child whose name is ignored is still tested, but never descended into.

Each base folder is walked in its own worker thread and collects into its own
list; the lists are joined in base-folder order once every walk has finished.
"""

from __future__ import annotations

import asyncio
import logging
import os
from typing import Protocol, runtime_checkable

from .cache import CacheStore, FileCacheStore
from .config import ConfigSource, LocatorConfig, load_locator_config
from .errors import ScanError
from .models import DirInfo, DirList, Project
from .notify import LoggingNotifier, Notifier
from .path_utils import compact_home_path, expand_home_path, get_path_depth

logger = logging.getLogger(__name__)

PROGRESS_TIMEOUT_MS = 600
SUMMARY_TIMEOUT_MS = 1500


@runtime_checkable
class ProjectKind(Protocol):
    """Capabilities a locator variant supplies."""

    def get_kind(self) -> str: ...

    def get_display_name(self) -> str: ...

    def decide_project_name(self, project_path: str) -> str: ...

    def is_repo_dir(self, project_path: str) -> bool: ...


def _dir_info(project_path: str, project_name: str | None = None) -> DirInfo:
    name = project_name if project_name is not None else os.path.basename(project_path)
    return DirInfo(full_path=project_path, name=name)


def _match_key(path: str) -> str:
    return compact_home_path(expand_home_path(path)).lower()


class Locator:
    def __init__(
        self,
        kind: ProjectKind,
        config_source: ConfigSource,
        *,
        cache: CacheStore | None = None,
        notifier: Notifier | None = None,
    ) -> None:
        self.kind = kind
        self.config_source = config_source
        self.cache: CacheStore = cache if cache is not None else FileCacheStore()
        self.notifier: Notifier = notifier if notifier is not None else LoggingNotifier()
        self.dir_list: DirList = []
        self.config = LocatorConfig()
        self._already_located = False
        self._generation = 0
        self._scan_task: asyncio.Task[DirList] | None = None
        self.refresh_config()

    def get_kind(self) -> str:
        return self.kind.get_kind()

    def get_display_name(self) -> str:
        return self.kind.get_display_name()

    # ------------------------------------------------------------------
    # Configuration and cache state
    # ------------------------------------------------------------------

    def refresh_config(self) -> bool:
        """Reload the configuration snapshot.

        Returns True when any of the four settings differs from the previous
        snapshot.
        """
        self.config_source.reload()
        current = load_locator_config(self.config_source, self.get_kind())
        if current == self.config:
            return False
        logger.debug("Configuration for %s changed: %s", self.get_kind(), current)
        self.config = current
        return True

    def is_already_located(self) -> bool:
        return self.config.use_cached_projects and self._already_located

    def set_already_located(self, located: bool) -> None:
        if not self.config.use_cached_projects:
            return
        self._already_located = located
        if located:
            self.cache.save(self.get_kind(), self.dir_list)

    def clear_dir_list(self) -> None:
        self.dir_list = []

    def initialize_cfg(self, kind: str | None = None) -> None:
        """Load the cached list for `kind` when caching is enabled."""
        if not self.config.use_cached_projects:
            self.clear_dir_list()
            return

        cached = self.cache.load(kind or self.get_kind())
        if cached is not None:
            self.dir_list = cached
            self._already_located = True

    def add_to_list(self, project_path: str, project_name: str | None = None) -> None:
        self.dir_list.append(_dir_info(project_path, project_name))

    def process_directory(self, abs_path: str) -> None:
        self._process_directory(abs_path, self.dir_list)

    def _process_directory(self, abs_path: str, found: DirList) -> None:
        self.notifier.status(abs_path, PROGRESS_TIMEOUT_MS)
        if self.kind.is_repo_dir(abs_path):
            found.append(_dir_info(abs_path, self.kind.decide_project_name(abs_path)))

    # ------------------------------------------------------------------
    # Scanning
    # ------------------------------------------------------------------

    def _walk_base_folder(self, base_folder: str, config: LocatorConfig, found: DirList) -> None:
        """Walk one base folder, appending matches to `found`.

        Runs in a worker thread. Any I/O error aborts this walk.
        """
        initial_depth = get_path_depth(base_folder)

        def on_error(exc: OSError) -> None:
            raise ScanError(base_folder, f"cannot read {exc.filename}: {exc.strerror}") from exc

        try:
            self._process_directory(base_folder, found)
            for dirpath, dirnames, _filenames in os.walk(base_folder, topdown=True, onerror=on_error):
                descend: list[str] = []
                for name in dirnames:
                    child = os.path.join(dirpath, name)
                    if config.is_max_depth_reached(get_path_depth(child), initial_depth):
                        continue
                    self._process_directory(child, found)
                    if not config.is_folder_ignored(name):
                        descend.append(name)
                dirnames[:] = descend
        except ScanError:
            raise
        except OSError as exc:
            raise ScanError(base_folder, str(exc)) from exc

    async def locate_projects(self) -> DirList:
        """Return the projects under every base folder.

        Served from the cache when one is loaded; otherwise every base folder
        is walked. Callers arriving while a walk is in flight share it. A
        failed walk is reported to the host and leaves the locator unlocated,
        with whatever was found returned as-is.
        """
        pending = self._scan_task
        current = asyncio.current_task()
        if pending is not None and not pending.done() and pending is not current:
            return await pending

        if not self.config.base_folders:
            return []

        self.initialize_cfg(self.get_kind())
        if self.is_already_located():
            return self.dir_list

        if pending is current:
            return await self._scan()

        self._scan_task = asyncio.ensure_future(self._scan())
        return await self._scan_task

    async def _scan(self) -> DirList:
        config = self.config
        generation = self._generation
        self.clear_dir_list()

        walks: list[tuple[str, DirList]] = []
        for base_folder in config.base_folders:
            expanded = os.path.normpath(expand_home_path(base_folder))
            if not os.path.isdir(expanded):
                logger.warning("Base folder %s does not exist, skipping", expanded)
                self.notifier.status(f"Directory {expanded} does not exist.", SUMMARY_TIMEOUT_MS)
                continue
            walks.append((expanded, []))

        results = await asyncio.gather(
            *(asyncio.to_thread(self._walk_base_folder, base, config, found) for base, found in walks),
            return_exceptions=True,
        )

        if generation != self._generation:
            logger.info("Discarding %s scan superseded by a refresh", self.get_kind())
            pending = self._scan_task
            if pending is not None and pending is not asyncio.current_task():
                return await pending
            return self.dir_list

        failures: list[Exception] = []
        for (base, _found), result in zip(walks, results):
            if isinstance(result, Exception):
                logger.error("Error walking %s: %s", base, result)
                failures.append(result)
            elif isinstance(result, BaseException):
                raise result
        self.dir_list = [info for _, found in walks for info in found]

        if failures:
            self.notifier.error("Error while loading projects.")
            return self.dir_list

        logger.info("Located %d %s projects", len(self.dir_list), self.get_kind())
        self.notifier.status("Searching folders completed", SUMMARY_TIMEOUT_MS)
        self.set_already_located(True)
        return self.dir_list

    def refresh_projects(self) -> bool:
        """Drop every cached result and start a new scan.

        The scan is scheduled on the running event loop and not awaited; with
        no loop running, the next `locate_projects()` call performs it.
        Returns whether the configuration changed.
        """
        config_changed = self.refresh_config()
        self.clear_dir_list()
        self.cache.delete(self.get_kind())
        self._already_located = False
        self._generation += 1

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("No running event loop, %s projects will be located on demand", self.get_kind())
            self._scan_task = None
            return config_changed

        self._scan_task = loop.create_task(self.locate_projects())
        return config_changed

    def exists_with_root_path(self, root_path: str) -> Project | None:
        """Look up `root_path` among located projects without scanning."""
        if self.config.use_cached_projects and not self._already_located:
            self.initialize_cfg(self.get_kind())
        if not self.is_already_located():
            return None

        literal = root_path.lower()
        wanted = _match_key(root_path)
        for element in self.dir_list:
            if element.full_path.lower() == literal or _match_key(element.full_path) == wanted:
                return Project.from_dir_info(element)
        return None
