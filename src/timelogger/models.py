"""Domain models for projects and logged time."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Optional

from .errors import NoActiveProject, UnknownActiveProject


@dataclass(slots=True)
class LoggedInterval:
    """A finished stretch of tracked work."""

    started_at: datetime
    duration: timedelta
    description: str


@dataclass(slots=True)
class Project:
    running_since: Optional[datetime] = None
    entries: list[LoggedInterval] = field(default_factory=list)

    @property
    def is_running(self) -> bool:
        return self.running_since is not None

    @property
    def total(self) -> timedelta:
        return sum((entry.duration for entry in self.entries), timedelta())


@dataclass(slots=True)
class ProjectStore:
    """Every project plus the current selection."""

    projects: dict[str, Project] = field(default_factory=dict)
    active_project: Optional[str] = None

    def active(self) -> tuple[str, Project]:
        """Return the selected project, failing if there is none or it vanished."""
        if self.active_project is None:
            raise NoActiveProject()
        project = self.projects.get(self.active_project)
        if project is None:
            raise UnknownActiveProject()
        return self.active_project, project
