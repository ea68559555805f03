"""Discover project folders under configured base directories."""

from __future__ import annotations

from .cache import CacheStore, FileCacheStore, MemoryCacheStore
from .config import (
    ConfigSource,
    LocatorConfig,
    MappingConfigSource,
    SettingsFileConfigSource,
    load_locator_config,
)
from .errors import CacheError, LocatorError, ScanError
from .kinds import GitKind, MercurialKind, SvnKind, VSCodeKind, create_locator
from .locator import Locator, ProjectKind
from .models import DirInfo, DirList, Project
from .notify import LoggingNotifier, Notifier, RecordingNotifier

__all__ = [
    "CacheError",
    "CacheStore",
    "ConfigSource",
    "DirInfo",
    "DirList",
    "FileCacheStore",
    "GitKind",
    "Locator",
    "LocatorConfig",
    "LocatorError",
    "LoggingNotifier",
    "MappingConfigSource",
    "MemoryCacheStore",
    "MercurialKind",
    "Notifier",
    "Project",
    "ProjectKind",
    "RecordingNotifier",
    "ScanError",
    "SettingsFileConfigSource",
    "SvnKind",
    "VSCodeKind",
    "create_locator",
    "load_locator_config",
]
