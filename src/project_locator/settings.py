"""Process-wide settings.

Everything here comes from the environment so a host (or a test) can point the
locator at a different editor settings directory without touching code.

- PROJECT_LOCATOR_SETTINGS_DIR: where the editor keeps per-channel settings.
- PROJECT_LOCATOR_APP_NAME: host application name, decides the channel.
- PROJECT_LOCATOR_LOG_LEVEL: level used by `configure_logging`.
"""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path

CHANNEL_STABLE = "Code"
CHANNEL_INSIDERS = "Code - Insiders"
DEFAULT_APP_NAME = "Visual Studio Code"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def default_settings_dir() -> Path:
    """Return the platform directory that holds editor settings."""
    appdata = os.environ.get("APPDATA")
    if appdata:
        return Path(appdata)
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support"
    return Path("/var/local")


def channel_for_app_name(app_name: str) -> str:
    if "Insiders" in app_name:
        return CHANNEL_INSIDERS
    return CHANNEL_STABLE


@dataclass(frozen=True)
class Settings:
    settings_dir: Path
    app_name: str = DEFAULT_APP_NAME
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> Settings:
        raw_dir = os.environ.get("PROJECT_LOCATOR_SETTINGS_DIR")
        return cls(
            settings_dir=Path(raw_dir).expanduser() if raw_dir else default_settings_dir(),
            app_name=os.environ.get("PROJECT_LOCATOR_APP_NAME") or DEFAULT_APP_NAME,
            log_level=(os.environ.get("PROJECT_LOCATOR_LOG_LEVEL") or "WARNING").upper(),
        )

    @property
    def channel(self) -> str:
        return channel_for_app_name(self.app_name)

    @property
    def user_dir(self) -> Path:
        """Per-user settings directory for the current channel."""
        return self.settings_dir / self.channel / "User"

    @property
    def linux_fallback_user_dir(self) -> Path:
        """XDG location used on Linux when `user_dir` holds no cache."""
        return Path.home() / ".config" / self.channel / "User"

    @property
    def settings_file(self) -> Path:
        return self.user_dir / "settings.json"


def get_settings() -> Settings:
    """Read settings from the current environment."""
    return Settings.from_env()


def configure_logging(level: str | int | None = None) -> None:
    """Install a root handler for hosts that run the locator standalone."""
    resolved = level if level is not None else get_settings().log_level
    logging.basicConfig(level=resolved, format=LOG_FORMAT)
