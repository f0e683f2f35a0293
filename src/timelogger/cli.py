"""Command-line interface for the time logger."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Optional

import click
import typer
from typer.core import TyperGroup

from . import commands
from .config import Settings
from .errors import StoreError, TimeLoggerError
from .models import ProjectStore
from .reporting import ConsoleReporter
from .store import load_store, save_store

logger = logging.getLogger(__name__)

SELECT_COMMAND = "select"


class ProjectSelectingGroup(TyperGroup):
    """Route a bare word that is not a subcommand to ``select``."""

    def resolve_command(
        self, ctx: click.Context, args: List[str]
    ) -> tuple[Optional[str], Optional[click.Command], List[str]]:
        if args and self.get_command(ctx, args[0]) is None:
            # Group options are already parsed, so a leading dash here came after "--".
            if args[0].startswith("-"):
                args = ["--", *args]
            return SELECT_COMMAND, self.get_command(ctx, SELECT_COMMAND), args
        return super().resolve_command(ctx, args)


app = typer.Typer(
    cls=ProjectSelectingGroup,
    help="An extremely lightweight time tracking tool for work.",
    add_completion=False,
)

_VARIADIC = {"ignore_unknown_options": True}


@dataclass(slots=True)
class Session:
    settings: Settings
    store: ProjectStore
    reporter: ConsoleReporter


def configure_logging(settings: Settings) -> None:
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if settings.log_path is not None:
        handlers.append(logging.FileHandler(settings.log_path, encoding="utf-8"))
    logging.basicConfig(
        level=logging.DEBUG if settings.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        handlers=handlers,
    )


@contextmanager
def reported_errors(session: Session) -> Iterator[None]:
    try:
        yield
    except TimeLoggerError as exc:
        logger.debug("Command failed: %s", type(exc).__name__)
        session.reporter.error(str(exc))
        raise typer.Exit(code=1) from exc


def _show_log(session: Session) -> None:
    with reported_errors(session):
        session.reporter.project_log(commands.show_log(session.store))


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logs."),
    store_path: Optional[Path] = typer.Option(
        None,
        "--file",
        "-f",
        help="Location of the time log (defaults to ~/.timelogger.json).",
    ),
    log_file: bool = typer.Option(
        False, "--log-file", help="Also append logs to the per-user log file."
    ),
) -> None:
    """Load the time log, run one command, and always write the log back."""
    settings = Settings.from_environment(store_path, log_to_file=log_file, verbose=verbose)
    configure_logging(settings)
    reporter = ConsoleReporter()

    try:
        store = load_store(settings.store_path)
    except StoreError as exc:
        reporter.error(str(exc))
        raise typer.Exit(code=1) from exc

    session = Session(settings=settings, store=store, reporter=reporter)
    ctx.obj = session
    ctx.call_on_close(lambda: save_store(settings.store_path, store))

    if ctx.invoked_subcommand is None:
        _show_log(session)


@app.command("list")
def list_projects(ctx: typer.Context) -> None:
    """List all projects and their total time."""
    session: Session = ctx.obj
    session.reporter.project_list(commands.list_projects(session.store))


@app.command("on")
def start(ctx: typer.Context) -> None:
    """Start the timer for the active project."""
    session: Session = ctx.obj
    with reported_errors(session):
        session.reporter.timer_started(commands.start_timer(session.store))


@app.command("off", context_settings=_VARIADIC)
def stop(
    ctx: typer.Context,
    description: Optional[List[str]] = typer.Argument(
        None, help="The description of the logged time."
    ),
) -> None:
    """Finish the active timer and log an entry."""
    session: Session = ctx.obj
    with reported_errors(session):
        name, interval = commands.stop_timer(session.store, " ".join(description or []))
        session.reporter.timer_stopped(name, interval)


@app.command("edit", context_settings=_VARIADIC)
def edit(
    ctx: typer.Context,
    duration: Optional[List[str]] = typer.Argument(
        None, help="The new duration of the last logged time, e.g. 1h30m."
    ),
) -> None:
    """Edit the last logged time."""
    session: Session = ctx.obj
    with reported_errors(session):
        old, new = commands.edit_last_duration(session.store, " ".join(duration or []))
        session.reporter.duration_edited(old, new)


@app.command("undo")
def undo(ctx: typer.Context) -> None:
    """Undo the last logged time, or cancel the current entry."""
    session: Session = ctx.obj
    with reported_errors(session):
        session.reporter.undone(commands.undo_last(session.store))


@app.command("time")
def time(ctx: typer.Context) -> None:
    """List all logged times for the active project."""
    _show_log(ctx.obj)


@app.command("new")
def new(
    ctx: typer.Context,
    project_name: str = typer.Argument(..., help="The name of the project."),
) -> None:
    """Add a new project and select it."""
    session: Session = ctx.obj
    with reported_errors(session):
        commands.create_project(session.store, project_name)
        session.reporter.project_created(project_name)


@app.command("delete")
def delete(
    ctx: typer.Context,
    project_name: str = typer.Argument(..., help="The name of the project."),
) -> None:
    """Delete a project."""
    session: Session = ctx.obj
    with reported_errors(session):
        commands.delete_project(session.store, project_name)
        session.reporter.project_deleted(project_name)


@app.command(SELECT_COMMAND)
def select(
    ctx: typer.Context,
    project_name: str = typer.Argument(..., help="The name of the project."),
) -> None:
    """Select the project to track time for (same as passing a bare name).

    Names starting with a dash go after "--", e.g. ``select -- -x``.
    """
    session: Session = ctx.obj
    with reported_errors(session):
        commands.select_project(session.store, project_name)
        session.reporter.project_selected(project_name)
