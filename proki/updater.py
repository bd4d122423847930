"""Background refreshing of the process list with CPU usage figures."""

from __future__ import annotations

import threading
from typing import Optional

from proki import service
from proki.process_info import ProcessInfo, SortField, sort_processes


class ProcessUpdater:
    """Periodically collects processes and their CPU share in a thread.

    CPU usage is the share of total system CPU time a process used since the
    previous refresh, in percent. The list is kept sorted by memory, largest
    first.
    """

    def __init__(self, interval: float = 1.0, proc_root=None) -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.interval = interval
        self.proc_root = proc_root
        self._data_lock = threading.Lock()
        self._refresh_lock = threading.Lock()
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._processes: list[ProcessInfo] = []
        self._prev_total = service.get_total_system_cpu_time(proc_root)
        self._prev_times = {
            p.pid: service.get_process_cpu_time(p.pid, proc_root)
            for p in service.list_all_processes(proc_root)
        }

    def start(self) -> None:
        """Start the background thread; does nothing if it is running."""
        if self._thread is not None and self._thread.is_alive():
            return
        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._run, name="proki-updater", daemon=True
        )
        self._thread.start()

    def stop(self) -> None:
        """Stop the background thread and wait for it to finish."""
        thread = self._thread
        if thread is None:
            return
        self._stop_event.set()
        thread.join()
        self._thread = None

    def _run(self) -> None:
        while not self._stop_event.wait(self.interval):
            self.refresh()

    def refresh(self) -> list[ProcessInfo]:
        """Collect a new snapshot now, store it and return a copy."""
        root = self.proc_root
        with self._refresh_lock:
            current_total = service.get_total_system_cpu_time(root)
            processes = service.list_all_processes(root)
            current_times: dict[int, int] = {}
            system_diff = current_total - self._prev_total

            for process in processes:
                cpu_time = service.get_process_cpu_time(process.pid, root)
                current_times[process.pid] = cpu_time
                previous = self._prev_times.get(process.pid)
                if previous is not None and system_diff > 0:
                    process.cpu_usage = 100.0 * max(cpu_time - previous, 0) / system_diff

            sort_processes(processes, SortField.MEMORY, ascending=False)

            with self._data_lock:
                self._processes = processes

            self._prev_total = current_total
            self._prev_times = current_times
            return list(processes)

    def get_processes(self) -> list[ProcessInfo]:
        """Return a copy of the latest snapshot."""
        with self._data_lock:
            return list(self._processes)

    def __enter__(self) -> "ProcessUpdater":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()