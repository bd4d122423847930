# proki

A small process monitor for the terminal. It lists running processes with their
PID, name, owner, CPU usage, resident memory (in MB and as a share of total
memory) and command line. The list refreshes in a background thread, once a
second by default.

## Installation

```
pip install .
```

On Linux, process details are read from `/proc`. On other systems `psutil`
is used instead. In that case the process state is reported as `Unknown` and the
command is the executable path. On Windows the user and the command are left
empty.

## Usage

Start the monitor:

```
proki
proki --interval 0.5
```

`--interval` sets the number of seconds between refreshes. The default is 1.0.

The full-screen interface uses `curses`. It has two tabs. The first tab shows the
process table, sorted by memory use with the largest first. The second tab is
a placeholder that shows one line of text.

Keys:

| Key                  | Action                                                   |
|----------------------|----------------------------------------------------------|
| `1` … `6`            | sort by PID, name, user, CPU, memory, command            |
| same key again       | reverse the sort order                                   |
| `Tab`, `→` / `←`     | next / previous tab                                      |
| `↑` / `↓`            | scroll one line                                          |
| `PgUp` / `PgDn`      | scroll one page                                          |
| `Home`               | back to the top                                          |
| `q`, `Q`, `Esc`      | quit                                                     |

When a startup error occurs, the command prints `Erreur : <message>` to
standard error and exits with status 1.

## Using it as a library

```python
from proki.process_info import SortField, sort_processes
from proki.service import list_all_processes, get_process_info
from proki.updater import ProcessUpdater
from proki.table import ProcessTable, build_columns, render_lines

processes = list_all_processes()          # ordered by pid
sort_processes(processes, SortField.CPU, False)

init = get_process_info(1)                # None if there is no such process

with ProcessUpdater() as updater:
    updater.refresh()
    snapshot = updater.get_processes()
    columns = build_columns(snapshot)
    for line in render_lines(snapshot, columns, 120):
        print(line)
```

- `proki.process_info`: the `ProcessInfo` dataclass and the `SortField` enum.
  `memory_usage` is the resident set size in kilobytes.
- `proki.service`: functions that read the system's process data.
  `list_all_processes`, `get_process_info`, `get_total_system_cpu_time`,
  `get_process_cpu_time`, `get_total_memory_kb`, `get_cmd_line`,
  `parse_status` and `user_from_uid`. The functions that read from `/proc` take
  an optional `proc_root`. This lets them read any directory laid out like
  `/proc`, which is useful for tests.
- `proki.updater`: `ProcessUpdater`. It samples the total system CPU time and
  the CPU time of each process. From the change between two samples it
  computes each process's share of CPU time in percent. It runs in a background
  thread between `start()` and `stop()`, or for the duration of a `with` block.
  `refresh()` takes one sample immediately.
- `proki.table`: `format_cells`, `build_columns` and `render_lines` lay out the
  process list as fixed-width text. `ProcessTable` wraps an updater and keeps
  the current sort order. `toggle_sort` switches the field or reverses the order.
- `proki.app`: the `curses` interface (`App`, `UiState`, `Tab`) and `main`.

## What it does not do

proki only displays processes. It cannot send signals to a process or kill
it. Rows cannot be selected and there is no detail view for a single process.
The second tab has no real content. The interactive screen needs `curses`, so
on Windows `App.run` raises `RuntimeError`. The library modules still work
there.

## Running the tests

```
pip install ".[test]"
pytest
```