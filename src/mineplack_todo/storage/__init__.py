"""Line-format codec and file-based storage for task lists."""

from mineplack_todo.storage.codec import decode, encode
from mineplack_todo.storage.store import TaskFileStore

__all__ = ["TaskFileStore", "decode", "encode"]
