# src/taskpad/utils/config.py
# Rev 0.1.0
from __future__ import annotations
import copy
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from .paths import config_dir

log = logging.getLogger(__name__)

SETTINGS_FILENAME = "settings.json"

_DEFAULTS: Dict[str, Any] = {
    "main_window": {
        "width": 440,
        "height": 760,
    },
    "storage": {
        "key": "@my_todo_tasks_v1",
    },
}


def settings_file() -> Path:
    return config_dir() / SETTINGS_FILENAME


def default_settings() -> Dict[str, Any]:
    return copy.deepcopy(_DEFAULTS)


def load_settings(path: Optional[Path] = None) -> Dict[str, Any]:
    path = path or settings_file()
    if path.exists():
        try:
            return {**default_settings(), **json.loads(path.read_text(encoding="utf-8"))}
        except (OSError, ValueError):
            log.warning("Ignoring unreadable settings file %s", path, exc_info=True)
            return default_settings()
    return default_settings()


def save_settings(data: Dict[str, Any], path: Optional[Path] = None) -> None:
    path = path or settings_file()
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")


def storage_key(settings: Dict[str, Any]) -> str:
    return str(settings.get("storage", {}).get("key") or _DEFAULTS["storage"]["key"])
