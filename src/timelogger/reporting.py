"""Console rendering of command results."""

from __future__ import annotations

from datetime import timedelta
from typing import Iterable, Optional

from rich.console import Console
from rich.markup import escape

from .commands import ProjectLog, ProjectSummary, UndoResult
from .durations import format_duration
from .models import LoggedInterval


def _project(name: str, *, active: bool = False) -> str:
    colour = "bright_green" if active else "bright_cyan"
    return f"[{colour}]{escape(name)}[/{colour}]"


def _span(span: timedelta) -> str:
    return f"[bright_red]{format_duration(span)}[/bright_red]"


def _description(text: str) -> str:
    return f"[bright_blue]{escape(text)}[/bright_blue]"


class ConsoleReporter:
    """Render human-readable results and errors in the terminal."""

    def __init__(
        self, console: Optional[Console] = None, error_console: Optional[Console] = None
    ) -> None:
        self.console = console or Console(highlight=False, soft_wrap=True)
        self.error_console = error_console or Console(
            stderr=True, highlight=False, soft_wrap=True
        )

    def _success(self, message: str) -> None:
        self.console.print(f"[bright_green]{message}[/bright_green]")

    def error(self, message: str) -> None:
        self.error_console.print(f"[bright_yellow]{escape(message)}[/bright_yellow]")

    def project_list(self, summaries: Iterable[ProjectSummary]) -> None:
        summaries = list(summaries)
        if not summaries:
            self.console.print("[bright_red]No projects found.[/bright_red]")
            return

        self.console.print("[bright_yellow]Project list:[/bright_yellow]")
        for summary in summaries:
            marker = " [bright_yellow](running)[/bright_yellow]" if summary.running else ""
            self.console.print(
                f"  {_project(summary.name, active=summary.active)} - {_span(summary.total)}{marker}"
            )

    def timer_started(self, name: str) -> None:
        self._success(f"Now tracking time for project {_project(name)}.")

    def timer_stopped(self, name: str, interval: LoggedInterval) -> None:
        self._success(f"Logged {_span(interval.duration)} for project {_project(name)}.")

    def duration_edited(self, old: timedelta, new: timedelta) -> None:
        self._success(f"Modified the last entry from {_span(old)} to {_span(new)}")

    def undone(self, result: UndoResult) -> None:
        if result.cancelled is not None:
            self._success(f"Cancelled {_span(result.cancelled)} of unlogged time.")
        elif result.removed is not None:
            self._success(
                f"Removed the last entry with duration {_span(result.removed.duration)}: "
                f"{_description(result.removed.description)}"
            )

    def project_log(self, log: ProjectLog) -> None:
        name = _project(log.name)
        if not log.entries:
            self.console.print(f"[bright_red]No logged times for project {name}.[/bright_red]")
        else:
            self.console.print(
                f"[bright_yellow]Logged times for {name}, totaling {_span(log.total)}:[/bright_yellow]"
            )
            for entry in log.entries:
                self.console.print(f"  {_span(entry.duration)} - {_description(entry.description)}")

        if log.running_for is not None:
            self.console.print(
                f"[bright_yellow]Timer running for {_span(log.running_for)}.[/bright_yellow]"
            )

    def project_created(self, name: str) -> None:
        self._success(f"Added project {_project(name)}")

    def project_deleted(self, name: str) -> None:
        self._success(f"Removed project {_project(name)}")

    def project_selected(self, name: str) -> None:
        self._success(f"Selected project {_project(name)}")
