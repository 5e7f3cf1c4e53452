"""Main Click CLI entry point for the task tracker.

Running the ``mineplack-todo`` command without a subcommand starts the
interactive loop.  The ``status`` subcommand reports where tasks are stored
and how many there are.

Entry point registered in pyproject.toml::

    [project.scripts]
    mineplack-todo = "mineplack_todo.cli.main:cli"

Usage examples::

    mineplack-todo
    mineplack-todo --file work.nasin
    mineplack-todo status --json-output
    mineplack-todo --data-dir /tmp/todo status
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Optional

import click

from mineplack_todo import __version__
from mineplack_todo.cli.commands import HEADER, CommandRegistry, registry
from mineplack_todo.cli.session import Session
from mineplack_todo.config import VALID_LOG_LEVELS, TodoConfig
from mineplack_todo.errors import IOFailure

logger = logging.getLogger(__name__)

PROMPT = "> "


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="mineplack-todo")
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False),
    default=None,
    envvar="MINEPLACK_TODO_DATA_DIR",
    help="Directory holding the task files. Defaults to ~/mineplacktodo.",
)
@click.option(
    "--file",
    "file_name",
    default=None,
    help="Logical task file to open. Defaults to tasks.nasin.",
)
@click.option(
    "--log-level",
    type=click.Choice(sorted(VALID_LOG_LEVELS), case_sensitive=False),
    default=None,
    help="Logging level for diagnostics written to stderr.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    data_dir: Optional[str],
    file_name: Optional[str],
    log_level: Optional[str],
) -> None:
    """Mineplack ToDo -- Track tasks from an interactive prompt."""
    ctx.ensure_object(dict)

    try:
        config = TodoConfig.load(data_dir)
        if log_level is not None:
            config = TodoConfig.model_validate(
                {**config.model_dump(), "log_level": log_level}
            )
    except ValueError as exc:
        raise click.ClickException(f"Failed to load configuration: {exc}") from exc

    config.configure_logging()
    ctx.obj["config"] = config
    ctx.obj["file_name"] = file_name or config.default_file

    if ctx.invoked_subcommand is None:
        session = Session(config, file_name=ctx.obj["file_name"])
        run_loop(session)


@cli.command()
@click.option(
    "--json-output",
    "output_json",
    is_flag=True,
    default=False,
    help="Output status as JSON instead of human-readable text.",
)
@click.pass_context
def status(ctx: click.Context, output_json: bool) -> None:
    """Show the data directory, the active task file and task counts."""
    config: TodoConfig = ctx.obj["config"]
    status_data = _collect_status(config, ctx.obj["file_name"])

    if output_json:
        click.echo(json.dumps(status_data, indent=2, default=str))
    else:
        _render_status_text(status_data)


# ---------------------------------------------------------------------------
# Interactive loop
# ---------------------------------------------------------------------------


def run_loop(session: Session, commands: CommandRegistry = registry) -> None:
    """Read commands from stdin until ``exit``, end of input or Ctrl-C.

    Loads the task list for the session's file first.  A load failure is
    reported and the loop starts with an empty list.
    """
    click.clear()
    click.echo(HEADER)

    try:
        session.load()
    except IOFailure as exc:
        click.echo(f"Error loading tasks: {exc.cause}")

    logger.info(
        "Command loop started (file=%s, tasks=%d).",
        session.file_name,
        len(session.tasks),
    )

    while session.active:
        try:
            line = input(PROMPT).strip()
        except EOFError:
            logger.info("End of input received, exiting.")
            click.echo()
            break
        except KeyboardInterrupt:
            logger.info("KeyboardInterrupt received, exiting.")
            click.echo()
            break

        if not line:
            continue

        try:
            reply = commands.handle(session, line)
        except Exception:
            logger.exception("Command handler crashed.")
            reply = "Internal error while handling a command."

        if reply is not None:
            click.echo(reply)


# ---------------------------------------------------------------------------
# Status data collection
# ---------------------------------------------------------------------------


def _collect_status(config: TodoConfig, file_name: str) -> dict:
    """Collect status information into a structured dictionary.

    Loads the task file read-only; a read failure is reported in the
    ``error`` key instead of raising.
    """
    session = Session(config, file_name=file_name)
    try:
        path = session.path
    except IOFailure as exc:
        return {
            "status": "error",
            "error": exc.cause,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    error: Optional[str] = None
    try:
        session.load()
    except IOFailure as exc:
        error = exc.cause

    size_bytes = path.stat().st_size if path.is_file() else 0

    return {
        "status": "ok" if error is None else "error",
        "error": error,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": __version__,
        "file": {
            "name": file_name,
            "path": str(path),
            "exists": session.store.exists(file_name),
            "size_bytes": size_bytes,
            "size_human": _format_bytes(size_bytes),
        },
        "tasks": {
            "total": len(session.tasks),
            "done": session.tasks.done_count(),
            "pending": session.tasks.pending_count(),
        },
        "data_dir": {
            "path": str(session.store.data_dir),
            "exists": session.store.data_dir.is_dir(),
            "files": session.store.list_files(),
        },
        "config": config.to_dict(),
    }


# ---------------------------------------------------------------------------
# Text rendering
# ---------------------------------------------------------------------------


def _render_status_text(data: dict) -> None:
    """Render status data as formatted text to stdout."""
    if data.get("status") == "error":
        click.secho(
            "ERROR: " + (data.get("error") or "Unknown error"), fg="red", err=True
        )
        sys.exit(1)

    click.secho("Mineplack ToDo -- Status", fg="cyan", bold=True)
    click.secho("=" * 26, fg="cyan")
    click.echo(f"Version: {data.get('version', 'unknown')}")
    click.echo()

    info = data.get("file", {})
    click.secho("Active File", fg="green", bold=True)
    click.secho("-" * 20, fg="green")
    click.echo(f"  Name:   {info.get('name', '?')}")
    click.echo(f"  Path:   {info.get('path', '?')}")
    click.echo(f"  Exists: {'Yes' if info.get('exists') else 'No'}")
    click.echo(f"  Size:   {info.get('size_human', '0 B')}")
    click.echo()

    counts = data.get("tasks", {})
    click.secho("Tasks", fg="blue", bold=True)
    click.secho("-" * 20, fg="blue")
    click.echo(f"  Total:   {counts.get('total', 0)}")
    click.echo(f"  Done:    {counts.get('done', 0)}")
    click.echo(f"  Pending: {counts.get('pending', 0)}")
    click.echo()

    root = data.get("data_dir", {})
    click.secho("Data Directory", fg="magenta", bold=True)
    click.secho("-" * 20, fg="magenta")
    click.echo(f"  Path:   {root.get('path', '?')}")
    click.echo(f"  Exists: {'Yes' if root.get('exists') else 'No'}")
    files = root.get("files", [])
    click.echo(f"  Files:  {', '.join(files) if files else '(none)'}")
    click.echo()

    cfg = data.get("config", {})
    click.secho("Configuration", fg="white", bold=True)
    click.secho("-" * 20, fg="white")
    click.echo(f"  Default file:  {cfg.get('default_file', '?')}")
    click.echo(f"  Log level:     {cfg.get('log_level', '?')}")
    click.echo(f"  Atomic writes: {cfg.get('atomic_writes', '?')}")


# ---------------------------------------------------------------------------
# Utilities
# ---------------------------------------------------------------------------


def _format_bytes(size_bytes: int) -> str:
    """Format a byte count into a human-readable string (B, KiB, MiB, GiB)."""
    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.1f} KiB"
    elif size_bytes < 1024 * 1024 * 1024:
        return f"{size_bytes / (1024 * 1024):.1f} MiB"
    else:
        return f"{size_bytes / (1024 * 1024 * 1024):.1f} GiB"


if __name__ == "__main__":
    cli()
