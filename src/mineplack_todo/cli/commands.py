"""Command registry and handlers for the interactive task loop.

A command line is split on whitespace.  The first token names the command
(case-sensitive), the rest are positional arguments.  Each handler takes the
:class:`~mineplack_todo.cli.session.Session` and the argument list and
returns the text to show.  Handlers signal user errors by raising
:class:`~mineplack_todo.errors.TodoError`; the registry renders the message.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from typing import Optional

import click

from mineplack_todo.cli.session import Session
from mineplack_todo.errors import (
    InvalidIndex,
    IOFailure,
    TodoError,
    UnknownCommand,
    UsageError,
)

CommandHandler = Callable[[Session, list[str]], str]

logger = logging.getLogger(__name__)

HEADER = "==========================\n======Mineplack ToDo======"

_POSITION_RE = re.compile(r"[+-]?[0-9]+")


class CommandRegistry:
    """Maps command names to handlers and keeps their help lines."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, tuple[str, str]] = {}
        self.register("help", self._cmd_help, "Show this help message")

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        usage: Optional[str] = None,
    ) -> None:
        self._handlers[name] = handler
        self._help[name] = (usage or name, help_text)

    def names(self) -> list[str]:
        return list(self._handlers)

    def handle(self, session: Session, line: str) -> Optional[str]:
        """Run one command line.

        Returns the reply text, or *None* for a blank line.
        """
        parts = line.split()
        if not parts:
            return None

        name, args = parts[0], parts[1:]
        try:
            handler = self._handlers.get(name)
            if handler is None:
                raise UnknownCommand(name)
            return handler(session, args)
        except TodoError as exc:
            logger.debug("Command %r failed: %s", name, exc)
            return str(exc)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for usage, help_text in self._help.values():
            lines.append(f"  {usage:<18} - {help_text}")
        return "\n".join(lines)

    def _cmd_help(self, session: Session, args: list[str]) -> str:
        return self.build_help()


def parse_position(token: str) -> int:
    """Parse a base-10 task position.  Malformed input is an InvalidIndex."""
    if not _POSITION_RE.fullmatch(token):
        raise InvalidIndex(token)
    return int(token)


def _with_save_status(session: Session, message: str) -> str:
    error = session.persist()
    return message if error is None else f"{message}\n{error}"


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


def cmd_add(session: Session, args: list[str]) -> str:
    name = " ".join(args)
    session.tasks.add(name)
    return _with_save_status(session, f"Added: {name}")


def cmd_list(session: Session, args: list[str]) -> str:
    entries = session.tasks.list_tasks()
    if not entries:
        return "No tasks."
    return "\n".join(
        f"{position}. {task.marker()} {task.name}" for position, task in entries
    )


def cmd_done(session: Session, args: list[str]) -> str:
    if not args:
        raise UsageError("Usage: done <number>")
    task = session.tasks.mark_done(parse_position(args[0]))
    return _with_save_status(session, f"Marked done: {task.name}")


def cmd_delete(session: Session, args: list[str]) -> str:
    if not args:
        raise UsageError("Usage: delete <number>")
    task = session.tasks.remove(parse_position(args[0]))
    return _with_save_status(session, f"Deleted: {task.name}")


def cmd_del_all(session: Session, args: list[str]) -> str:
    removed = session.tasks.clear()
    return _with_save_status(session, f"Deleted all tasks ({removed} removed).")


def cmd_file(session: Session, args: list[str]) -> str:
    if not args:
        raise UsageError("Usage: file <name>")
    try:
        count = session.switch_file(args[0])
    except IOFailure as exc:
        return f"Error loading tasks: {exc.cause}"
    return f"Switched to {session.file_name} ({count} tasks loaded)."


def cmd_clear(session: Session, args: list[str]) -> str:
    click.clear()
    return HEADER


def cmd_exit(session: Session, args: list[str]) -> str:
    session.active = False
    return "Goodbye!"


registry = CommandRegistry()

registry.register("add", cmd_add, "Add a new task", usage="add <task>")
registry.register("clear", cmd_clear, "Clears Screen")
registry.register("done", cmd_done, "Mark a task as completed", usage="done <number>")
registry.register("delete", cmd_delete, "Delete a task", usage="delete <number>")
registry.register("delAll", cmd_del_all, "Delete all tasks in the current file")
registry.register("file", cmd_file, "Switch to another task file", usage="file <name>")
registry.register("list", cmd_list, "List all tasks")
registry.register("exit", cmd_exit, "Exit the program")
