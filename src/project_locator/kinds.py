"""Concrete locator kinds.

Each kind recognises a project root by a marker entry directly inside it and
names the project after its folder.
"""

from __future__ import annotations

import os

from .cache import CacheStore
from .config import ConfigSource
from .locator import Locator
from .notify import Notifier


class MarkerKind:
    kind = ""
    display_name = ""
    marker = ""

    def get_kind(self) -> str:
        return self.kind

    def get_display_name(self) -> str:
        return self.display_name

    def decide_project_name(self, project_path: str) -> str:
        return os.path.basename(project_path)

    def is_repo_dir(self, project_path: str) -> bool:
        return os.path.isdir(os.path.join(project_path, self.marker))


class GitKind(MarkerKind):
    kind = "git"
    display_name = "Git"
    marker = ".git"

    def is_repo_dir(self, project_path: str) -> bool:
        # Worktrees and submodules use a `.git` file instead of a directory.
        return os.path.exists(os.path.join(project_path, self.marker))


class SvnKind(MarkerKind):
    kind = "svn"
    display_name = "SVN"
    marker = ".svn"


class MercurialKind(MarkerKind):
    kind = "hg"
    display_name = "Mercurial"
    marker = ".hg"


class VSCodeKind(MarkerKind):
    kind = "vscode"
    display_name = "VSCode"
    marker = ".vscode"


KINDS: dict[str, type[MarkerKind]] = {
    cls.kind: cls for cls in (GitKind, SvnKind, MercurialKind, VSCodeKind)
}


def create_locator(
    kind_name: str,
    config_source: ConfigSource,
    *,
    cache: CacheStore | None = None,
    notifier: Notifier | None = None,
) -> Locator:
    """Build a locator for one of the registered kinds."""
    try:
        kind_cls = KINDS[kind_name]
    except KeyError:
        raise ValueError(f"Unknown locator kind: {kind_name!r} (expected one of {sorted(KINDS)})") from None
    return Locator(kind_cls(), config_source, cache=cache, notifier=notifier)
