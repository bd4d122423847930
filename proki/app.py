"""Terminal front end showing the running processes in tabs."""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass, field
from typing import Callable, Optional

from proki.process_info import SortField
from proki.table import ProcessTable
from proki.updater import ProcessUpdater

try:
    import curses
except ImportError:  # pragma: no cover - not available on Windows
    curses = None

_REDRAW_MS = 250
_ESCAPE = 27
_TAB = 9


@dataclass
class Tab:
    """A tab with a title and a function producing its lines."""

    id: str
    is_open: bool
    render: Callable[["UiState", Optional[int]], list[str]]


def _render_processes(state: "UiState", width: Optional[int]) -> list[str]:
    return state.process_table.render(width)


def _render_tab2(state: "UiState", width: Optional[int]) -> list[str]:
    return ["Content of Tab2"]


def _default_tabs() -> list[Tab]:
    return [
        Tab("Processes", True, _render_processes),
        Tab("Tab2", True, _render_tab2),
    ]


@dataclass
class UiState:
    """The tabs, the selected tab and the process table they share."""

    process_table: ProcessTable
    tabs: list[Tab] = field(default_factory=_default_tabs)
    table_index: int = 0

    def select(self, index: int) -> None:
        """Make the tab at ``index`` the current one."""
        if not 0 <= index < len(self.tabs):
            raise IndexError(f"no tab at index {index}")
        self.table_index = index

    def render_content(self, width: Optional[int] = None) -> list[str]:
        """Lines of the current tab."""
        return self.tabs[self.table_index].render(self, width)


class App:
    """Full-screen terminal application."""

    def __init__(self, interval: float = 1.0) -> None:
        self.updater = ProcessUpdater(interval)
        self.table = ProcessTable(self.updater)
        self.state = UiState(process_table=self.table)

    def run(self) -> None:
        """Show the interface until the user quits."""
        if curses is None:
            raise RuntimeError("curses n'est pas disponible sur cette plateforme")
        with self.updater:
            self.updater.refresh()
            curses.wrapper(self._loop)

    def _tab_bar(self) -> str:
        return " | ".join(
            f"[{tab.id}]" if index == self.state.table_index else tab.id
            for index, tab in enumerate(self.state.tabs)
        )

    def _status(self) -> str:
        order = "asc" if self.table.ascending else "desc"
        return (
            f"Sort: {self.table.sort_field.name.lower()} {order}"
            "   [1-6] sort  [Tab] switch  [q] quit"
        )

    def _loop(self, screen) -> None:
        try:
            curses.curs_set(0)
        except curses.error:
            pass
        screen.timeout(_REDRAW_MS)
        scroll = 0
        while True:
            height, width = screen.getmaxyx()
            usable = max(width - 1, 1)
            content = self.state.render_content(usable)
            header, rows = content[:1], content[1:]
            visible = max(height - 2 - len(header), 1)
            scroll = min(scroll, max(len(rows) - visible, 0))
            lines = [self._tab_bar(), self._status(), *header, *rows[scroll:scroll + visible]]

            screen.erase()
            for y, line in enumerate(lines[:height]):
                try:
                    screen.addnstr(y, 0, line, usable)
                except curses.error:
                    pass
            screen.refresh()

            key = screen.getch()
            tab_count = len(self.state.tabs)
            if key in (ord("q"), ord("Q"), _ESCAPE):
                return
            if key in (_TAB, curses.KEY_RIGHT):
                self.state.select((self.state.table_index + 1) % tab_count)
                scroll = 0
            elif key == curses.KEY_LEFT:
                self.state.select((self.state.table_index - 1) % tab_count)
                scroll = 0
            elif ord("1") <= key <= ord("6"):
                self.table.toggle_sort(SortField(key - ord("1")))
            elif key == curses.KEY_DOWN:
                scroll += 1
            elif key == curses.KEY_UP:
                scroll = max(scroll - 1, 0)
            elif key == curses.KEY_NPAGE:
                scroll += visible
            elif key == curses.KEY_PPAGE:
                scroll = max(scroll - visible, 0)
            elif key == curses.KEY_HOME:
                scroll = 0


def main(argv=None) -> int:
    """Start the application; return the process exit status."""
    parser = argparse.ArgumentParser(prog="proki", description="Show running processes.")
    parser.add_argument(
        "--interval", type=float, default=1.0,
        help="seconds between refreshes of the process list",
    )
    args = parser.parse_args(argv)
    try:
        App(interval=args.interval).run()
    except KeyboardInterrupt:
        return 0
    except Exception as exc:
        print(f"Erreur : {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())