"""Pydantic data models for tasks and the ordered task list."""

from mineplack_todo.models.task import Task
from mineplack_todo.models.task_list import TaskList

__all__ = ["Task", "TaskList"]
