from __future__ import annotations

import json
from pathlib import Path

import pytest

from project_locator.config import (
    LocatorConfig,
    MappingConfigSource,
    SettingsFileConfigSource,
    load_locator_config,
)
from project_locator.settings import CHANNEL_INSIDERS, CHANNEL_STABLE, Settings, channel_for_app_name


def test_defaults_when_nothing_configured() -> None:
    cfg = load_locator_config(MappingConfigSource(), "git")
    assert cfg == LocatorConfig(base_folders=(), ignored_folders=(), max_depth=-1, use_cached_projects=True)


def test_reads_namespaced_keys() -> None:
    source = MappingConfigSource(
        {
            "projectManager.git.baseFolders": ["~/code", "/srv"],
            "projectManager.git.ignoredFolders": ["node_modules", "out"],
            "projectManager.git.maxDepthRecursion": 4,
            "projectManager.cacheProjectsBetweenSessions": False,
            "projectManager.svn.baseFolders": ["/elsewhere"],
        }
    )

    cfg = load_locator_config(source, "git")

    assert cfg.base_folders == ("~/code", "/srv")
    assert cfg.ignored_folders == ("node_modules", "out")
    assert cfg.max_depth == 4
    assert cfg.use_cached_projects is False
    assert load_locator_config(source, "svn").base_folders == ("/elsewhere",)


def test_bad_values_fall_back_to_defaults() -> None:
    source = MappingConfigSource(
        {
            "projectManager.git.baseFolders": "/not/a/list",
            "projectManager.git.ignoredFolders": ["ok", 3, None],
            "projectManager.git.maxDepthRecursion": True,
            "projectManager.cacheProjectsBetweenSessions": "yes",
        }
    )

    cfg = load_locator_config(source, "git")

    assert cfg.base_folders == ()
    assert cfg.ignored_folders == ("ok",)
    assert cfg.max_depth == -1
    assert cfg.use_cached_projects is True


def test_snapshots_compare_structurally() -> None:
    assert LocatorConfig(base_folders=("/a",)) == LocatorConfig(base_folders=("/a",))
    assert LocatorConfig(ignored_folders=("x",)) != LocatorConfig(ignored_folders=("y",))


@pytest.mark.parametrize(
    ("max_depth", "relative", "reached"),
    [(-1, 50, False), (0, 50, False), (2, 2, False), (2, 3, True)],
)
def test_is_max_depth_reached(max_depth: int, relative: int, reached: bool) -> None:
    cfg = LocatorConfig(max_depth=max_depth)
    assert cfg.is_max_depth_reached(10 + relative, 10) is reached


def test_is_folder_ignored() -> None:
    cfg = LocatorConfig(ignored_folders=("node_modules",))
    assert cfg.is_folder_ignored("node_modules") is True
    assert cfg.is_folder_ignored("src") is False


class TestSettingsFileConfigSource:
    def test_missing_file_yields_defaults(self, tmp_path: Path) -> None:
        source = SettingsFileConfigSource(tmp_path / "settings.json")
        source.reload()
        assert source.get("projectManager.git.baseFolders", []) == []

    def test_flat_dotted_keys(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.json"
        path.write_text(
            json.dumps({"projectManager.git.baseFolders": ["/a"], "editor.fontSize": 12}),
            encoding="utf-8",
        )
        source = SettingsFileConfigSource(path)
        source.reload()

        assert load_locator_config(source, "git").base_folders == ("/a",)

    def test_nested_objects(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.json"
        path.write_text(
            json.dumps({"projectManager": {"hg": {"maxDepthRecursion": 3}, "cacheProjectsBetweenSessions": False}}),
            encoding="utf-8",
        )
        source = SettingsFileConfigSource(path)
        source.reload()

        cfg = load_locator_config(source, "hg")
        assert cfg.max_depth == 3
        assert cfg.use_cached_projects is False

    def test_malformed_file_yields_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.json"
        path.write_text("// comments are not json\n{", encoding="utf-8")
        source = SettingsFileConfigSource(path)
        source.reload()

        assert load_locator_config(source, "git") == LocatorConfig()

    def test_reload_picks_up_changes(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"projectManager.git.baseFolders": ["/a"]}), encoding="utf-8")
        source = SettingsFileConfigSource(path)
        source.reload()
        path.write_text(json.dumps({"projectManager.git.baseFolders": ["/b"]}), encoding="utf-8")

        assert source.get("projectManager.git.baseFolders") == ["/a"]
        source.reload()
        assert source.get("projectManager.git.baseFolders") == ["/b"]

    def test_default_path_comes_from_settings(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PROJECT_LOCATOR_SETTINGS_DIR", str(tmp_path))
        monkeypatch.delenv("PROJECT_LOCATOR_APP_NAME", raising=False)

        assert SettingsFileConfigSource().path == tmp_path / "Code" / "User" / "settings.json"


class TestSettings:
    def test_channel_for_app_name(self) -> None:
        assert channel_for_app_name("Visual Studio Code") == CHANNEL_STABLE
        assert channel_for_app_name("Visual Studio Code - Insiders") == CHANNEL_INSIDERS

    def test_from_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PROJECT_LOCATOR_SETTINGS_DIR", str(tmp_path))
        monkeypatch.setenv("PROJECT_LOCATOR_LOG_LEVEL", "debug")
        monkeypatch.delenv("PROJECT_LOCATOR_APP_NAME", raising=False)

        current = Settings.from_env()

        assert current.settings_dir == tmp_path
        assert current.log_level == "DEBUG"
        assert current.user_dir == tmp_path / "Code" / "User"

    def test_appdata_wins_without_override(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("PROJECT_LOCATOR_SETTINGS_DIR", raising=False)
        monkeypatch.setenv("APPDATA", str(tmp_path / "Roaming"))

        assert Settings.from_env().settings_dir == tmp_path / "Roaming"


def test_configure_logging_uses_env_level(monkeypatch: pytest.MonkeyPatch) -> None:
    import logging

    from project_locator import settings as settings_mod

    calls: list[dict[str, object]] = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))
    monkeypatch.setenv("PROJECT_LOCATOR_LOG_LEVEL", "info")

    settings_mod.configure_logging()
    settings_mod.configure_logging(logging.DEBUG)

    assert calls[0]["level"] == "INFO"
    assert calls[1]["level"] == logging.DEBUG
    assert calls[0]["format"] == settings_mod.LOG_FORMAT
