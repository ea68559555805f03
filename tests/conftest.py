from __future__ import annotations

from pathlib import Path

import pytest

from project_locator.cache import FileCacheStore
from project_locator.kinds import GitKind
from project_locator.notify import RecordingNotifier


class CountingGitKind(GitKind):
    """GitKind that remembers every directory it was asked about."""

    def __init__(self) -> None:
        self.visited: list[str] = []

    def is_repo_dir(self, project_path: str) -> bool:
        self.visited.append(project_path)
        return super().is_repo_dir(project_path)


def make_dirs(root: Path, *relpaths: str) -> None:
    for rel in relpaths:
        (root / rel).mkdir(parents=True, exist_ok=True)


@pytest.fixture
def fake_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the home directory at a temp dir."""

    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    return home


@pytest.fixture
def cache_store(tmp_path: Path) -> FileCacheStore:
    return FileCacheStore(
        user_dir=tmp_path / "settings" / "Code" / "User",
        fallback_dir=tmp_path / "xdg" / "Code" / "User",
        platform="darwin",
    )


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def git_kind() -> CountingGitKind:
    return CountingGitKind()
