"""Error types raised by the task list, the storage layer and the command loop.

Every error carries the message shown to the user.  None of them is fatal:
the command loop renders the message and waits for the next command.
"""

from __future__ import annotations

from typing import Optional, Union


class TodoError(Exception):
    """Base class for all user-facing errors."""


class InvalidIndex(TodoError):
    """A task position was non-numeric or outside ``[1, len]``."""

    def __init__(self, position: Union[int, str]) -> None:
        super().__init__("Invalid task number")
        self.position = position


class IOFailure(TodoError):
    """Reading or writing a task file failed.

    ``cause`` holds the text of the underlying exception so the command loop
    can report it verbatim.
    """

    def __init__(self, message: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.cause = str(cause) if cause is not None else message


class UnknownCommand(TodoError):
    """The first token of a command line names no registered command."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown command: {name}")
        self.name = name


class UsageError(TodoError):
    """A required argument is missing.  The message is the usage hint."""
