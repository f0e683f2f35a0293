from __future__ import annotations

from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
from typer.testing import CliRunner

from timelogger.models import LoggedInterval, Project, ProjectStore

T0 = datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def now() -> datetime:
    return T0


@pytest.fixture
def store() -> ProjectStore:
    """Two projects, ``acme`` active with two logged entries."""
    return ProjectStore(
        projects={
            "acme": Project(
                entries=[
                    LoggedInterval(T0 - timedelta(hours=5), timedelta(hours=1), "planning"),
                    LoggedInterval(T0 - timedelta(hours=3), timedelta(minutes=30), "review"),
                ]
            ),
            "side": Project(),
        },
        active_project="acme",
    )


@pytest.fixture
def store_path(tmp_path: Path) -> Path:
    return tmp_path / ".timelogger.json"


@pytest.fixture
def invoke(store_path: Path):
    runner = CliRunner()

    def _invoke(*args: str):
        from timelogger.cli import app

        return runner.invoke(app, ["--file", str(store_path), *args])

    return _invoke
