"""Click CLI and interactive command loop.

Provides the ``mineplack-todo`` entry point:
- ``mineplack-todo``         -- Run the interactive task loop.
- ``mineplack-todo status``  -- Show the active file, task counts and config.
"""

from mineplack_todo.cli.commands import CommandRegistry, registry
from mineplack_todo.cli.main import cli, run_loop, status
from mineplack_todo.cli.session import Session

__all__ = ["CommandRegistry", "Session", "cli", "registry", "run_loop", "status"]
