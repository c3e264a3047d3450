"""Simple JSON-backed view preferences."""
from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

from core.settings import CONFIG_PATH
from core.weekdays import is_valid_day

logger = logging.getLogger("weekly_task.config")


@dataclass
class AppConfig:
    """Preferences persisted to ``config.json``.

    ``start_on_today`` opens the day picker on the current weekday; when it is
    off the picker restores ``last_selected_day``.
    """

    start_on_today: bool = True
    last_selected_day: Optional[int] = None
    confirm_destructive: bool = True

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AppConfig":
        cfg = cls()
        for f in fields(cls):
            if f.name in data:
                setattr(cfg, f.name, data[f.name])
        if not isinstance(cfg.start_on_today, bool):
            cfg.start_on_today = True
        if not isinstance(cfg.confirm_destructive, bool):
            cfg.confirm_destructive = True
        if cfg.last_selected_day is not None and not is_valid_day(cfg.last_selected_day):
            cfg.last_selected_day = None
        return cfg


def _load_raw(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning("Ignoring unreadable config %s: %s", path, exc)
        return {}
    return data if isinstance(data, dict) else {}


def load_config(path: Optional[Path] = None) -> AppConfig:
    return AppConfig.from_dict(_load_raw(path or CONFIG_PATH))


def save_config(config: AppConfig, path: Optional[Path] = None) -> None:
    target = path or CONFIG_PATH
    target.parent.mkdir(parents=True, exist_ok=True)
    payload = json.dumps(asdict(config), ensure_ascii=False, indent=2, sort_keys=True)
    tmp = target.with_suffix(".tmp")
    try:
        tmp.write_text(payload, encoding="utf-8")
        tmp.replace(target)
    finally:
        if tmp.exists():
            try:
                tmp.unlink()
            except OSError:
                pass


def persist_config(config: AppConfig, path: Optional[Path] = None) -> bool:
    """Save ``config``, logging instead of raising when the file cannot be written."""
    try:
        save_config(config, path)
    except OSError as exc:
        logger.error("Saving config to %s failed: %s", path or CONFIG_PATH, exc)
        return False
    return True


__all__ = ["AppConfig", "load_config", "persist_config", "save_config"]
