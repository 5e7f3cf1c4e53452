"""TaskList model -- the ordered, in-memory collection of tasks.

The TaskList is the single source of truth during a session.  Insertion order
is both display order and persistence order.  Positions are 1-based and are
derived from that order; they shift down when an earlier task is removed.
"""

from __future__ import annotations

from typing import Iterable

from pydantic import BaseModel, Field

from mineplack_todo.errors import InvalidIndex
from mineplack_todo.models.task import Task


class TaskList(BaseModel):
    """Ordered sequence of :class:`Task` records."""

    tasks: list[Task] = Field(
        default_factory=list,
        description="Tasks in insertion order.",
    )

    def add(self, name: str) -> int:
        """Append a new, not-done task and return its 1-based position."""
        self.tasks.append(Task(name=name))
        return len(self.tasks)

    def mark_done(self, position: int) -> Task:
        """Mark the task at *position* as done and return it.

        Marking a task that is already done succeeds silently.

        Raises
        ------
        InvalidIndex
            If *position* is outside ``[1, len]``.
        """
        task = self.tasks[self._index(position)]
        task.done = True
        return task

    def remove(self, position: int) -> Task:
        """Remove and return the task at *position*.

        Raises
        ------
        InvalidIndex
            If *position* is outside ``[1, len]``.
        """
        return self.tasks.pop(self._index(position))

    def clear(self) -> int:
        """Drop every task.  Returns how many were removed."""
        removed = len(self.tasks)
        self.tasks.clear()
        return removed

    def replace(self, tasks: Iterable[Task]) -> None:
        """Swap the whole contents for *tasks* (used when switching files)."""
        self.tasks = list(tasks)

    def list_tasks(self) -> list[tuple[int, Task]]:
        """Return ``(position, task)`` pairs.  The tasks are copies."""
        return [
            (position, task.model_copy())
            for position, task in enumerate(self.tasks, start=1)
        ]

    def done_count(self) -> int:
        """Return the number of completed tasks."""
        return sum(1 for task in self.tasks if task.done)

    def pending_count(self) -> int:
        """Return the number of tasks not yet done."""
        return len(self.tasks) - self.done_count()

    def __len__(self) -> int:
        return len(self.tasks)

    def _index(self, position: int) -> int:
        """Translate a 1-based position into a list index, checking bounds."""
        if position < 1 or position > len(self.tasks):
            raise InvalidIndex(position)
        return position - 1
