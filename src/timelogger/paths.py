"""Helpers for locating per-user files."""

from __future__ import annotations

from pathlib import Path

from platformdirs import PlatformDirs


APP_NAME = "timelogger"
APP_AUTHOR = "timelogger"

STORE_FILE_NAME = ".timelogger.json"


def get_log_dir() -> Path:
    """Return the directory that holds the optional log file."""
    dirs = PlatformDirs(appname=APP_NAME, appauthor=APP_AUTHOR)
    path = Path(dirs.user_log_path)
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_store_path() -> Path:
    return Path.home() / STORE_FILE_NAME


def get_log_path() -> Path:
    return get_log_dir() / "timelogger.log"
