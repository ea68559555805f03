from __future__ import annotations


class LocatorError(RuntimeError):
    """Base error for project discovery."""

    pass


class ScanError(LocatorError):
    """A base folder could not be walked to completion."""

    def __init__(self, base_folder: str, message: str) -> None:
        super().__init__(message)
        self.base_folder = base_folder


class CacheError(LocatorError):
    """A projects cache file could not be decoded."""

    pass
