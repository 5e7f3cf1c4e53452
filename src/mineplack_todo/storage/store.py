"""TaskFileStore -- file-based persistence for task lists.

Maps a logical file name (``tasks.nasin`` by default) to a file inside the
data directory and reads/writes it with the line codec.  The containing
directory is created before every write.

Typical usage::

    store = TaskFileStore()                       # ~/mineplacktodo
    store = TaskFileStore("/path/to/data")        # explicit data directory

    tasks = store.load("tasks.nasin")             # [] when the file is missing
    store.save("tasks.nasin", tasks)
"""

from __future__ import annotations

import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import Iterable, Optional

from mineplack_todo.config import CONFIG_FILE_NAME, default_data_dir
from mineplack_todo.errors import IOFailure
from mineplack_todo.models.task import Task
from mineplack_todo.storage.codec import decode, encode

logger = logging.getLogger(__name__)


class TaskFileStore:
    """Reads and writes task files under a single data directory.

    Parameters
    ----------
    data_dir:
        Directory holding the task files.  When *None*, defaults to
        ``<home>/mineplacktodo`` (or the cwd if home cannot be determined).
    atomic_writes:
        When *True*, writes go to a temporary file in the same directory
        which is then renamed over the target.  When *False*, the target is
        truncated and rewritten in place.
    """

    def __init__(
        self,
        data_dir: Optional[str] = None,
        atomic_writes: bool = True,
    ) -> None:
        if data_dir is not None:
            self._root = Path(data_dir).expanduser().resolve()
        else:
            self._root = default_data_dir().resolve()
        self._atomic_writes = atomic_writes

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def path_for(self, file_name: str) -> Path:
        """Return the full path backing the logical *file_name*.

        Raises
        ------
        IOFailure
            If the name resolves to a path outside the data directory
            (an absolute path, a ``..`` component or an empty name).
        """
        path = (self._root / file_name).resolve()
        if self._root not in path.parents:
            raise IOFailure(
                f"Invalid task file name {file_name!r}",
                ValueError(f"{file_name!r} is not a file inside {self._root}"),
            )
        return path

    def exists(self, file_name: str) -> bool:
        """Check whether the file for *file_name* exists on disk."""
        return self.path_for(file_name).is_file()

    def load(self, file_name: str) -> list[Task]:
        """Load the tasks stored under *file_name*.

        A missing file is not an error and yields an empty list.

        Raises
        ------
        IOFailure
            If the file exists but cannot be read or is not valid UTF-8.
        """
        path = self.path_for(file_name)
        try:
            with open(path, "r", encoding="utf-8", newline="") as fp:
                text = fp.read()
        except FileNotFoundError:
            logger.debug("No task file at %s. Starting empty.", path)
            return []
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Could not read %s.", path, exc_info=True)
            raise IOFailure(f"Could not read {path}", exc) from exc

        tasks = decode(text)
        logger.info("Loaded %d task(s) from %s", len(tasks), path)
        return tasks

    def save(self, file_name: str, tasks: Iterable[Task]) -> Path:
        """Persist *tasks* under *file_name* and return the written path.

        Raises
        ------
        IOFailure
            If the directory cannot be created or the file cannot be written.
        """
        path = self.path_for(file_name)
        payload = encode(tasks)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            if self._atomic_writes:
                self._atomic_write(path, payload)
            else:
                with open(path, "w", encoding="utf-8", newline="") as fp:
                    fp.write(payload)
        except OSError as exc:
            logger.warning("Failed to write %s.", path, exc_info=True)
            raise IOFailure(f"Could not write {path}", exc) from exc

        logger.info("Saved tasks to %s", path)
        return path

    def list_files(self) -> list[str]:
        """Return the sorted names of task files present in the data directory.

        Hidden files and the config file are left out.
        """
        if not self._root.is_dir():
            return []
        return sorted(
            entry.name
            for entry in self._root.iterdir()
            if entry.is_file()
            and not entry.name.startswith(".")
            and entry.name != CONFIG_FILE_NAME
        )

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def data_dir(self) -> Path:
        """The resolved directory used for storage."""
        return self._root

    @property
    def atomic_writes(self) -> bool:
        """Whether writes are staged through a temporary file."""
        return self._atomic_writes

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _atomic_write(target: Path, payload: str) -> None:
        """Write *payload* to *target* via a temp file in the same directory.

        If anything fails before the rename, the temp file is removed and the
        original target (if any) is left untouched.
        """
        fd = None
        tmp_path: Optional[str] = None
        try:
            fd, tmp_path = tempfile.mkstemp(
                dir=str(target.parent),
                prefix=".tmp_",
                suffix=target.suffix or ".nasin",
            )
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as fp:
                fd = None  # os.fdopen takes ownership of the fd
                fp.write(payload)
                fp.flush()
                os.fsync(fp.fileno())

            os.chmod(tmp_path, _file_mode(target))
            os.replace(tmp_path, str(target))
            tmp_path = None

        except BaseException:
            if fd is not None:
                os.close(fd)
            if tmp_path is not None:
                try:
                    os.unlink(tmp_path)
                except OSError:
                    pass
            raise


def _file_mode(target: Path) -> int:
    """Permission bits for a rewritten *target*.

    An existing file keeps its mode; a new one gets ``0o666`` minus the umask.
    """
    try:
        return stat.S_IMODE(target.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask
