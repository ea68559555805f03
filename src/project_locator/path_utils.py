from __future__ import annotations

import os
from pathlib import Path, PurePath


def home_dir() -> str:
    return str(Path.home())


def expand_home_path(path: str) -> str:
    """Replace a leading `~` with the user's home directory."""
    if path == "~" or path.startswith("~/") or path.startswith("~" + os.sep):
        return home_dir() + path[1:]
    return path


def compact_home_path(path: str) -> str:
    """Replace a leading home directory with `~`."""
    home = home_dir()
    if path == home or path.startswith(home.rstrip(os.sep) + os.sep):
        return "~" + path[len(home.rstrip(os.sep)):]
    return path


def get_path_depth(path: str) -> int:
    """Number of path components, counting the root as one."""
    return len(PurePath(path).parts)
