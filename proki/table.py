"""Tabular text rendering of the process list."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from proki.process_info import ProcessInfo, SortField, sort_processes

PADDING = 2
NO_PROCESSES = "No processes found"

_HEADERS = (
    ("(PID)", SortField.PID),
    ("Name", SortField.NAME),
    ("User", SortField.USER),
    ("CPU (%)", SortField.CPU),
    ("Memory (MB)", SortField.MEMORY),
    ("Memory (%)", SortField.MEMORY),
    ("Command", SortField.COMMAND),
)


@dataclass(frozen=True)
class Column:
    """One column of the process table; ``width`` is in characters."""

    name: str
    width: int
    sort_field: SortField
    stretch: bool = False
    prefer_descending: bool = False
    default_sort: bool = False


def format_cells(process: ProcessInfo) -> tuple[str, ...]:
    """Return the text shown in each column for ``process``."""
    return (
        str(process.pid),
        process.name,
        process.user,
        f"{process.cpu_usage:.2f}",
        f"{process.memory_usage / 1024.0:.2f}",
        f"{process.memory_percent:.2f}",
        process.command,
    )


def build_columns(processes: Iterable[ProcessInfo]) -> list[Column]:
    """Lay out the columns wide enough for their headers and every cell."""
    rows = [format_cells(process) for process in processes]
    last = len(_HEADERS) - 1
    columns = []
    for index, (name, field) in enumerate(_HEADERS):
        stretch = index == last
        cell_padding = 0 if stretch else PADDING
        cell_width = max((len(row[index]) + cell_padding for row in rows), default=0)
        is_memory = name == "Memory (MB)"
        columns.append(
            Column(
                name=name,
                width=max(cell_width, len(name) + PADDING),
                sort_field=field,
                stretch=stretch,
                prefer_descending=is_memory,
                default_sort=is_memory,
            )
        )
    return columns


def render_lines(
    processes: Sequence[ProcessInfo],
    columns: Sequence[Column],
    width: Optional[int] = None,
) -> list[str]:
    """Render a header line and one line per process.

    Fixed columns keep their width; the stretching column takes what is
    left of ``width``. With ``width`` None nothing is cut.
    """
    if width is not None and width < 0:
        raise ValueError("width must not be negative")
    fixed_total = sum(column.width for column in columns if not column.stretch)
    stretch_width = None if width is None else max(width - fixed_total, 0)

    def line(cells: Sequence[str]) -> str:
        parts = []
        for column, cell in zip(columns, cells):
            if column.stretch:
                parts.append(cell if stretch_width is None else cell[:stretch_width])
            else:
                parts.append(cell[: column.width].ljust(column.width))
        text = "".join(parts).rstrip()
        return text if width is None else text[:width]

    header = line([column.name for column in columns])
    return [header, *(line(format_cells(process)) for process in processes)]


class ProcessTable:
    """A sortable view of the processes an updater collects."""

    def __init__(self, updater) -> None:
        self.updater = updater
        default = next(column for column in build_columns([]) if column.default_sort)
        self.sort_field = default.sort_field
        self.ascending = not default.prefer_descending

    def toggle_sort(self, field: SortField | int) -> None:
        """Sort by ``field``; choosing the current field reverses the order."""
        field = SortField(field)
        if field == self.sort_field:
            self.ascending = not self.ascending
            return
        self.sort_field = field
        self.ascending = not any(
            column.prefer_descending
            for column in build_columns([])
            if column.sort_field == field
        )

    def rows(self) -> list[ProcessInfo]:
        """Latest processes in the current sort order."""
        processes = list(self.updater.get_processes())
        sort_processes(processes, self.sort_field, self.ascending)
        return processes

    def render(self, width: Optional[int] = None) -> list[str]:
        """Render the table, or a notice when there are no processes."""
        processes = self.rows()
        if not processes:
            return [NO_PROCESSES]
        return render_lines(processes, build_columns(processes), width)