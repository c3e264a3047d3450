"""Centralized application configuration."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional
import logging
import os
import sys


def get_default_data_dir(
    app_name: str,
    *,
    platform: Optional[str] = None,
    env: Optional[Mapping[str, str]] = None,
    home: Optional[Path] = None,
) -> Path:
    """Return an OS-specific user data directory for ``app_name``.

    ``WEEKLY_TASK_HOME`` overrides the platform lookup entirely.
    """

    platform_id = (platform or sys.platform).lower()
    environ = dict(os.environ if env is None else env)
    override = environ.get("WEEKLY_TASK_HOME")
    if override:
        return Path(override).expanduser()

    home_dir = Path(home or Path.home())
    sanitized = app_name.strip() or "app"
    sanitized = sanitized.replace("/", "-").replace("\\", "-")

    if platform_id.startswith("win"):
        base = Path(environ.get("APPDATA") or home_dir / "AppData" / "Roaming")
    elif platform_id == "darwin":
        base = home_dir / "Library" / "Application Support"
    else:
        base = Path(environ.get("XDG_DATA_HOME") or home_dir / ".local" / "share")

    return base.expanduser() / sanitized


APP_NAME = "Weekly-Task"


DATA_DIR = get_default_data_dir(APP_NAME)
DATA_DIR.mkdir(parents=True, exist_ok=True)


DB_PATH = DATA_DIR / "weekly_task.db"
CONFIG_PATH = DATA_DIR / "config.json"
LOG_PATH = DATA_DIR / "weekly_task.log"


@dataclass(frozen=True)
class StorageKeys:
    tasks: str = "tasks"
    last_reset_week: str = "lastResetWeek"
    # Copy of a tasks payload that could not be fully decoded.
    tasks_backup: str = "tasks.corrupt"


STORAGE_KEYS = StorageKeys()


@dataclass(frozen=True)
class ThemeColors:
    background: str = "#000000"
    header_bg: str = "#FFFFFF"
    header_text: str = "#000000"
    task_text: str = "#FFFFFF"
    text_subtle: str = "#9E9E9E"
    badge_bg: str = "#FFFFFF"
    badge_text: str = "#000000"
    divider: str = "#000000"


@dataclass(frozen=True)
class UISettings:
    app_title: str = APP_NAME
    theme_mode: str = "dark"
    color_scheme_seed: str = "#4F46E5"
    window_width: int = 420
    window_height: int = 780
    dialog_width: int = 360
    detail_min_lines: int = 3


UI = UISettings()
THEME = ThemeColors()


@dataclass(frozen=True)
class LoggingSettings:
    level: int = logging.INFO
    path: Path = LOG_PATH
    max_bytes: int = 512_000
    backup_count: int = 3
    fmt: str = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


LOGGING = LoggingSettings()


__all__ = [
    "APP_NAME",
    "DATA_DIR",
    "DB_PATH",
    "CONFIG_PATH",
    "LOG_PATH",
    "STORAGE_KEYS",
    "UI",
    "THEME",
    "LOGGING",
    "get_default_data_dir",
]
