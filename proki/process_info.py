"""Process records and the orderings used to sort them."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import MutableSequence


class SortField(enum.IntEnum):
    """Columns a process list can be sorted by."""

    PID = 0
    NAME = 1
    USER = 2
    CPU = 3
    MEMORY = 4
    COMMAND = 5

    @property
    def attribute(self) -> str:
        """Name of the ProcessInfo attribute this field sorts on."""
        return _ATTRIBUTES[self]


_ATTRIBUTES = {
    SortField.PID: "pid",
    SortField.NAME: "name",
    SortField.USER: "user",
    SortField.CPU: "cpu_usage",
    SortField.MEMORY: "memory_usage",
    SortField.COMMAND: "command",
}


@dataclass
class ProcessInfo:
    """A snapshot of one running process.

    ``memory_usage`` is the resident set size in kilobytes.
    """

    pid: int
    name: str = ""
    user: str = ""
    state: str = ""
    command: str = ""
    cpu_usage: float = 0.0
    memory_usage: float = 0.0
    memory_percent: float = 0.0
    thread_count: int = 0


def sort_processes(
    processes: MutableSequence[ProcessInfo],
    field: SortField | int,
    ascending: bool = True,
) -> None:
    """Sort ``processes`` in place by ``field``."""
    attribute = SortField(field).attribute
    processes.sort(key=lambda process: getattr(process, attribute), reverse=not ascending)