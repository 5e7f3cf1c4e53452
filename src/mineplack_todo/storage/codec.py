"""Codec for the ``.nasin`` task file format.

One line per task::

    T1 : "Buy milk" : STRING : DONE:false
    T2 : "Call mum" : STRING : DONE:true

Fields are separated by the literal ``" : "``.  The ``T<n>`` index and the
``STRING`` type tag are written for compatibility but carry no meaning on
read: order in the file is the order of the list.

Known limitation: a name that contains ``" : "`` or starts/ends with a
double quote does not survive a round trip.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from mineplack_todo.models.task import Task

logger = logging.getLogger(__name__)

FIELD_DELIMITER = " : "
TYPE_TAG = "STRING"
DONE_PREFIX = "DONE:"
DONE_TRUE = DONE_PREFIX + "true"

# Index, name, type tag, done flag.
MIN_FIELDS = 4


def encode_line(position: int, task: Task) -> str:
    """Format a single task as a line, without the trailing newline."""
    done = "true" if task.done else "false"
    return FIELD_DELIMITER.join(
        (f"T{position}", f'"{task.name}"', TYPE_TAG, f"{DONE_PREFIX}{done}")
    )


def encode(tasks: Iterable[Task]) -> str:
    """Serialise *tasks* in order.  Every line ends with ``\\n``."""
    return "".join(
        encode_line(position, task) + "\n"
        for position, task in enumerate(tasks, start=1)
    )


def decode_line(line: str) -> Optional[Task]:
    """Parse one line.  Returns *None* when it has fewer than four fields."""
    parts = line.split(FIELD_DELIMITER)
    if len(parts) < MIN_FIELDS:
        return None
    return Task(name=parts[1].strip('"'), done=parts[3] == DONE_TRUE)


def decode(text: str) -> list[Task]:
    """Parse file contents into tasks, skipping malformed lines."""
    tasks: list[Task] = []
    skipped = 0
    for line in text.split("\n"):
        line = line.removesuffix("\r")
        if not line:
            continue
        task = decode_line(line)
        if task is None:
            skipped += 1
            continue
        tasks.append(task)

    if skipped:
        logger.debug("Skipped %d malformed line(s) while decoding tasks.", skipped)
    return tasks
