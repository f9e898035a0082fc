# Rev 0.1.0

"""Paths and XDG helpers
- Uses XDG Base Directory spec for data, state (logs) and config
- DB path can be overridden with TASKPAD_DB
"""
from __future__ import annotations
import os
from pathlib import Path


APP_NAME = "taskpad"


XDG_DATA_HOME = Path(os.environ.get("XDG_DATA_HOME", Path.home() / ".local" / "share"))
XDG_STATE_HOME = Path(os.environ.get("XDG_STATE_HOME", Path.home() / ".local" / "state"))
XDG_CONFIG_HOME = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))


DATA_DIR = XDG_DATA_HOME / APP_NAME
STATE_DIR = XDG_STATE_HOME / APP_NAME
LOGS_DIR = STATE_DIR / "logs"
CONFIG_DIR = XDG_CONFIG_HOME / APP_NAME


DB_PATH = Path(os.environ.get("TASKPAD_DB", DATA_DIR / "taskpad.db")).expanduser()


def ensure_dirs() -> None:
    for p in (DATA_DIR, STATE_DIR, LOGS_DIR, CONFIG_DIR, DB_PATH.parent):
        p.mkdir(parents=True, exist_ok=True)


def config_dir() -> Path:
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    return CONFIG_DIR
