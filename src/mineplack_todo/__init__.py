"""Mineplack ToDo - A small task tracker with a line-based command loop."""

__version__ = "0.1.0"

from mineplack_todo.config import TodoConfig

__all__ = ["TodoConfig", "__version__"]
