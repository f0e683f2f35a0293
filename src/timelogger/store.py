"""JSON persistence for the project store."""

from __future__ import annotations

import logging
import os
import tempfile
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .durations import MAX_NANOS
from .errors import StoreError
from .models import LoggedInterval, Project, ProjectStore

logger = logging.getLogger(__name__)

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

MAX_SPAN_SECONDS = MAX_NANOS // 1_000_000_000


class SpanModel(BaseModel):
    """A span stored as whole seconds plus a nanosecond remainder."""

    secs: int = Field(ge=0, le=MAX_SPAN_SECONDS)
    nanos: int = Field(default=0, ge=0, lt=1_000_000_000)

    model_config = ConfigDict(extra="ignore")

    @classmethod
    def from_timedelta(cls, span: timedelta) -> "SpanModel":
        secs, micros = divmod(span // timedelta(microseconds=1), 1_000_000)
        return cls(secs=secs, nanos=micros * 1000)

    @classmethod
    def from_datetime(cls, moment: datetime) -> "SpanModel":
        return cls.from_timedelta(moment - EPOCH)

    def to_timedelta(self) -> timedelta:
        return timedelta(seconds=self.secs, microseconds=self.nanos // 1000)

    def to_datetime(self) -> datetime:
        return EPOCH + self.to_timedelta()


class LoggedTimeModel(BaseModel):
    start_epoch: SpanModel
    duration: SpanModel
    description: str

    model_config = ConfigDict(extra="ignore")


class ProjectModel(BaseModel):
    start_epoch: Optional[SpanModel] = None
    logged_times: list[LoggedTimeModel] = Field(default_factory=list)

    model_config = ConfigDict(extra="ignore")


class ProjectListModel(BaseModel):
    """Top-level document written to the state file."""

    projects: dict[str, ProjectModel] = Field(default_factory=dict)
    active_project: Optional[str] = None

    model_config = ConfigDict(extra="ignore")

    @classmethod
    def from_store(cls, store: ProjectStore) -> "ProjectListModel":
        return cls(
            projects={
                name: ProjectModel(
                    start_epoch=(
                        SpanModel.from_datetime(project.running_since)
                        if project.running_since is not None
                        else None
                    ),
                    logged_times=[
                        LoggedTimeModel(
                            start_epoch=SpanModel.from_datetime(entry.started_at),
                            duration=SpanModel.from_timedelta(entry.duration),
                            description=entry.description,
                        )
                        for entry in project.entries
                    ],
                )
                for name, project in store.projects.items()
            },
            active_project=store.active_project,
        )

    def to_store(self) -> ProjectStore:
        projects = {}
        for name, model in self.projects.items():
            projects[name] = Project(
                running_since=model.start_epoch.to_datetime() if model.start_epoch else None,
                entries=[
                    LoggedInterval(
                        started_at=logged.start_epoch.to_datetime(),
                        duration=logged.duration.to_timedelta(),
                        description=logged.description,
                    )
                    for logged in model.logged_times
                ],
            )
        return ProjectStore(projects=projects, active_project=self.active_project)


def load_store(path: Path) -> ProjectStore:
    """Read the store from disk; a missing or blank file is an empty store."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.debug("No state file at %s; starting with an empty store.", path)
        return ProjectStore()
    except UnicodeDecodeError as exc:
        raise StoreError(f"{path} is not a valid time log file.") from exc
    except OSError as exc:
        raise StoreError(f"Could not read {path}: {exc.strerror}") from exc

    if not text.strip():
        return ProjectStore()

    try:
        store = ProjectListModel.model_validate_json(text).to_store()
    except ValidationError as exc:
        logger.debug("Rejected state file %s: %s", path, exc)
        raise StoreError(f"{path} is not a valid time log file.") from exc

    logger.debug("Loaded %d projects from %s", len(store.projects), path)
    return store


def dump_store(store: ProjectStore) -> str:
    return ProjectListModel.from_store(store).model_dump_json(indent=2) + "\n"


def save_store(path: Path, store: ProjectStore) -> None:
    """Rewrite the whole state file, replacing the old one atomically."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = dump_store(store)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(payload)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
    logger.debug("Saved %d projects to %s", len(store.projects), path)
