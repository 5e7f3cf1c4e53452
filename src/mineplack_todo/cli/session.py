"""Session state for the interactive command loop.

A :class:`Session` owns everything a command handler may touch: the active
logical file name, the in-memory :class:`TaskList` backed by it, and the
store used to read and write it.  Handlers receive the session explicitly;
there is no module-level mutable state.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from mineplack_todo.config import TodoConfig
from mineplack_todo.errors import IOFailure
from mineplack_todo.models.task_list import TaskList
from mineplack_todo.storage.store import TaskFileStore

logger = logging.getLogger(__name__)


class Session:
    """Mutable state of one run of the command loop."""

    def __init__(
        self,
        config: TodoConfig,
        store: Optional[TaskFileStore] = None,
        file_name: Optional[str] = None,
    ) -> None:
        self.config = config
        self.store = store or TaskFileStore(
            config.data_dir, atomic_writes=config.atomic_writes
        )
        self.file_name = file_name or config.default_file
        self.tasks = TaskList()
        self.active = True

    @property
    def path(self) -> Path:
        """Full path of the file backing the current task list."""
        return self.store.path_for(self.file_name)

    def load(self) -> int:
        """Reload the task list from the current file, replacing it wholesale.

        Returns the number of tasks loaded.  On failure the list is left
        empty and the :class:`IOFailure` is re-raised.
        """
        try:
            tasks = self.store.load(self.file_name)
        except IOFailure:
            self.tasks.replace([])
            raise
        self.tasks.replace(tasks)
        return len(self.tasks)

    def switch_file(self, file_name: str) -> int:
        """Make *file_name* the active file and load it.

        A name that does not resolve inside the data directory raises
        :class:`IOFailure` and leaves the session untouched.
        """
        self.store.path_for(file_name)
        logger.info("Switching task file from %s to %s", self.file_name, file_name)
        self.file_name = file_name
        return self.load()

    def persist(self) -> Optional[str]:
        """Write the task list to the current file.

        Returns an error line for the user when the write fails, otherwise
        *None*.  The in-memory list is kept either way.
        """
        try:
            self.store.save(self.file_name, self.tasks.tasks)
        except IOFailure as exc:
            return f"Error saving tasks: {exc.cause}"
        return None
