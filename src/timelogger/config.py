"""Runtime settings for the time logger."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from .paths import get_log_path, get_store_path

STORE_PATH_ENV = "TIMELOGGER_FILE"


@dataclass(slots=True)
class Settings:
    """Where state is kept and how chatty the process is."""

    store_path: Path
    log_path: Optional[Path] = None
    verbose: bool = False

    @classmethod
    def from_environment(
        cls,
        store_path: Optional[Path] = None,
        *,
        log_to_file: bool = False,
        verbose: bool = False,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "Settings":
        env = os.environ if environ is None else environ
        if store_path is None:
            override = env.get(STORE_PATH_ENV)
            store_path = Path(override).expanduser() if override else get_store_path()
        return cls(
            store_path=Path(store_path),
            log_path=get_log_path() if log_to_file else None,
            verbose=verbose,
        )
