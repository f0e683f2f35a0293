"""User-facing failures raised by the store and the commands."""

from __future__ import annotations


class TimeLoggerError(Exception):
    """Base class for every failure reported to the user."""

    message = "Something went wrong."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)

    def __str__(self) -> str:
        return self.args[0]


class ParseDuration(TimeLoggerError):
    message = "Could not parse duration with invalid format."


class SystemTimeFailure(TimeLoggerError):
    message = "An error occurred while trying to get the system's current time."


class UnknownProject(TimeLoggerError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"There is no project named {name}")


class NoActiveProject(TimeLoggerError):
    message = "You do not currently have a project selected."


class UnknownActiveProject(TimeLoggerError):
    message = "The active project does not exist anymore."


class AlreadyStarted(TimeLoggerError):
    message = "You are already tracking your time."


class NotStarted(TimeLoggerError):
    message = "You have not started tracking your time."


class NoTimeLogged(TimeLoggerError):
    message = "You have not logged any time for this project."


class NoDescription(TimeLoggerError):
    message = "Cannot log entry with no description."


class ProjectExists(TimeLoggerError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"project {name} already exists")


class StoreError(TimeLoggerError):
    """The state file exists but could not be read or understood."""

    message = "Could not read the time log file."
