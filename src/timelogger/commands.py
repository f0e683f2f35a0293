"""The operations a single invocation can apply to the store.

Every function validates its preconditions before touching the store, so a
raised :class:`~timelogger.errors.TimeLoggerError` always leaves the store
as it was.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from .durations import parse_duration
from .errors import (
    AlreadyStarted,
    NoDescription,
    NoTimeLogged,
    NotStarted,
    ProjectExists,
    SystemTimeFailure,
    UnknownProject,
)
from .models import LoggedInterval, Project, ProjectStore
from .store import EPOCH

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ProjectSummary:
    name: str
    total: timedelta
    active: bool
    running: bool


@dataclass(slots=True)
class ProjectLog:
    name: str
    entries: list[LoggedInterval]
    total: timedelta
    running_for: Optional[timedelta] = None


@dataclass(slots=True)
class UndoResult:
    """Exactly one of ``cancelled`` or ``removed`` is set."""

    cancelled: Optional[timedelta] = None
    removed: Optional[LoggedInterval] = None


def current_time() -> datetime:
    """Read the wall clock as an aware UTC datetime."""
    try:
        now = datetime.now(timezone.utc)
    except (OSError, OverflowError) as exc:
        raise SystemTimeFailure() from exc
    if now < EPOCH:
        raise SystemTimeFailure()
    return now


def _elapsed(project: Project, now: datetime) -> timedelta:
    assert project.running_since is not None
    elapsed = now - project.running_since
    if elapsed < timedelta():
        logger.warning(
            "Clock reads %s, before the timer start %s; counting no time.",
            now.isoformat(),
            project.running_since.isoformat(),
        )
        return timedelta()
    return elapsed


def list_projects(store: ProjectStore) -> list[ProjectSummary]:
    return [
        ProjectSummary(
            name=name,
            total=project.total,
            active=name == store.active_project,
            running=project.is_running,
        )
        for name, project in sorted(store.projects.items())
    ]


def start_timer(store: ProjectStore, now: Optional[datetime] = None) -> str:
    name, project = store.active()
    if project.is_running:
        raise AlreadyStarted()

    project.running_since = now or current_time()
    logger.info("Started timer for %s at %s", name, project.running_since.isoformat())
    return name


def stop_timer(
    store: ProjectStore, description: str, now: Optional[datetime] = None
) -> tuple[str, LoggedInterval]:
    name, project = store.active()
    description = description.strip()
    if not description:
        raise NoDescription()
    if project.running_since is None:
        raise NotStarted()

    interval = LoggedInterval(
        started_at=project.running_since,
        duration=_elapsed(project, now or current_time()),
        description=description,
    )
    project.entries.append(interval)
    project.running_since = None
    logger.info("Logged %s for %s", interval.duration, name)
    return name, interval


def edit_last_duration(store: ProjectStore, text: str) -> tuple[timedelta, timedelta]:
    """Replace the duration of the newest entry, returning ``(old, new)``."""
    _, project = store.active()
    if not project.entries:
        raise NoTimeLogged()

    duration = parse_duration("".join(text.split()))
    last = project.entries[-1]
    old, last.duration = last.duration, duration
    logger.info("Edited last entry duration from %s to %s", old, duration)
    return old, duration


def undo_last(store: ProjectStore, now: Optional[datetime] = None) -> UndoResult:
    """Cancel a running timer, or else drop the newest logged entry."""
    name, project = store.active()
    if project.is_running:
        elapsed = _elapsed(project, now or current_time())
        project.running_since = None
        logger.info("Cancelled running timer for %s after %s", name, elapsed)
        return UndoResult(cancelled=elapsed)

    if not project.entries:
        raise NoTimeLogged()
    removed = project.entries.pop()
    logger.info("Removed last entry of %s: %r", name, removed.description)
    return UndoResult(removed=removed)


def show_log(store: ProjectStore, now: Optional[datetime] = None) -> ProjectLog:
    name, project = store.active()
    running_for = _elapsed(project, now or current_time()) if project.is_running else None
    return ProjectLog(
        name=name,
        entries=list(project.entries),
        total=project.total,
        running_for=running_for,
    )


def create_project(store: ProjectStore, name: str) -> None:
    if name in store.projects:
        raise ProjectExists(name)

    store.projects[name] = Project()
    store.active_project = name
    logger.info("Created project %s", name)


def delete_project(store: ProjectStore, name: str) -> None:
    if store.projects.pop(name, None) is None:
        raise UnknownProject(name)

    if store.active_project == name:
        store.active_project = None
    logger.info("Deleted project %s", name)


def select_project(store: ProjectStore, name: str) -> None:
    if name not in store.projects:
        raise UnknownProject(name)

    store.active_project = name
    logger.debug("Selected project %s", name)
