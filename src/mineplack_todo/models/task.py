"""Task model -- a single named entry with a completion flag."""

from __future__ import annotations

from pydantic import BaseModel, Field


class Task(BaseModel):
    """One entry in a task list.

    A task has no identifier of its own.  It is addressed by its 1-based
    position in the owning :class:`~mineplack_todo.models.task_list.TaskList`.
    """

    name: str = Field(
        default="",
        description="Free-form task name. May be empty.",
    )
    done: bool = Field(
        default=False,
        description="Whether the task has been completed.",
    )

    def marker(self) -> str:
        """Return the checkbox shown by ``list``: ``[x]`` or ``[ ]``."""
        return "[x]" if self.done else "[ ]"
