"""Reading process information from the operating system.

On Linux the data comes from a proc filesystem (``/proc`` by default, or
any directory laid out the same way). Elsewhere psutil is used.
"""

from __future__ import annotations

import os
import re
import sys
from pathlib import Path
from typing import Optional, Union

import psutil

from proki.process_info import ProcessInfo

try:
    import pwd
except ImportError:  # pragma: no cover - not available on Windows
    pwd = None

PathLike = Union[str, "os.PathLike[str]"]

PROC_ROOT = Path("/proc")
_CLOCK_TICKS = 100

_INT_RE = re.compile(r"\s*([+-]?\d+)")
_FLOAT_RE = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def _root(proc_root: Optional[PathLike]) -> Optional[Path]:
    if proc_root is not None:
        return Path(proc_root)
    if sys.platform.startswith("linux"):
        return PROC_ROOT
    return None


def _leading_int(text: str) -> int:
    match = _INT_RE.match(text)
    if match is None:
        raise ValueError(f"no integer at start of {text!r}")
    return int(match.group(1))


def _leading_float(text: str) -> float:
    match = _FLOAT_RE.match(text)
    if match is None:
        raise ValueError(f"no number at start of {text!r}")
    return float(match.group(1))


def user_from_uid(uid: int) -> str:
    """Return the login name for ``uid``, or ``"unknown"``."""
    if pwd is None:
        return "unknown"
    try:
        return pwd.getpwuid(uid).pw_name
    except (KeyError, OverflowError):
        return "unknown"


def get_total_system_cpu_time(proc_root: Optional[PathLike] = None) -> int:
    """Total CPU time of the system in clock ticks, summed over all states."""
    root = _root(proc_root)
    if root is None:
        return int(sum(psutil.cpu_times()) * _CLOCK_TICKS)
    with open(root / "stat", encoding="ascii", errors="replace") as stat:
        line = stat.readline()
    if len(line) < 5:
        raise ValueError("malformed cpu line in stat file")
    total = 0
    for token in line[5:].split():
        if not (token.isascii() and token.isdigit()):
            break
        total += int(token)
    return total


def get_process_cpu_time(pid: int, proc_root: Optional[PathLike] = None) -> int:
    """User plus system CPU time of ``pid`` in clock ticks, 0 if unreadable."""
    root = _root(proc_root)
    if root is None:
        try:
            times = psutil.Process(pid).cpu_times()
        except psutil.Error:
            return 0
        return int((times.user + times.system) * _CLOCK_TICKS)
    try:
        text = (root / str(pid) / "stat").read_text(errors="replace")
    except OSError:
        return 0
    _, sep, rest = text.rpartition(")")
    if not sep:
        return 0
    fields = rest.split()
    try:
        return int(fields[11]) + int(fields[12])
    except (IndexError, ValueError):
        return 0


def get_total_memory_kb(proc_root: Optional[PathLike] = None) -> int:
    """Total physical memory in kilobytes, 0 if it cannot be read."""
    root = _root(proc_root)
    if root is None:
        return psutil.virtual_memory().total // 1024
    try:
        with open(root / "meminfo", encoding="ascii", errors="replace") as meminfo:
            for line in meminfo:
                if line.startswith("MemTotal:"):
                    parts = line.split()
                    try:
                        return int(parts[1])
                    except (IndexError, ValueError):
                        return 0
    except OSError:
        return 0
    return 0


def get_cmd_line(pid: int, proc_root: Optional[PathLike] = None) -> str:
    """Command line of ``pid`` with arguments joined by spaces, or ``""``."""
    root = _root(proc_root)
    if root is None:
        try:
            return " ".join(psutil.Process(pid).cmdline())
        except psutil.Error:
            return ""
    try:
        raw = (root / str(pid) / "cmdline").read_bytes()
    except OSError:
        return ""
    return raw.replace(b"\0", b" ").decode("utf-8", errors="replace")


def parse_status(pid: int, text: str) -> ProcessInfo:
    """Build a ProcessInfo from the text of a proc ``status`` file.

    Raises ValueError when a numeric field cannot be parsed.
    """
    info = ProcessInfo(pid=pid)
    for line in text.splitlines():
        if line.startswith("Name:"):
            info.name = line[6:]
        elif line.startswith("Uid:"):
            info.user = user_from_uid(_leading_int(line[5:]))
        elif line.startswith("State:"):
            info.state = line[7:]
        elif line.startswith("Threads:"):
            info.thread_count = _leading_int(line[9:])
        elif line.startswith("VmRSS:"):
            info.memory_usage = _leading_float(line[7:])
    return info


def _list_with_psutil() -> list[ProcessInfo]:
    windows = sys.platform == "win32"
    processes = []
    attrs = ["pid", "name", "username", "num_threads", "exe"]
    for proc in psutil.process_iter(attrs):
        data = proc.info
        pid = data["pid"]
        if pid <= 0 and not windows:
            continue
        if windows:
            user, command = "", ""
        else:
            user = data.get("username") or "unknown"
            command = data.get("exe") or ""
        processes.append(
            ProcessInfo(
                pid=pid,
                name=data.get("name") or "",
                user=user,
                state="Unknown",
                command=command,
                thread_count=data.get("num_threads") or 0,
            )
        )
    return processes


def list_all_processes(proc_root: Optional[PathLike] = None) -> list[ProcessInfo]:
    """List every readable process, ordered by pid."""
    root = _root(proc_root)
    if root is None:
        return _list_with_psutil()
    try:
        with os.scandir(root) as entries:
            pids = sorted(
                int(entry.name)
                for entry in entries
                if entry.name.isascii()
                and entry.name.isdigit()
                and entry.is_dir(follow_symlinks=False)
            )
    except OSError:
        return []

    processes = []
    for pid in pids:
        try:
            status = (root / str(pid) / "status").read_text(errors="replace")
            info = parse_status(pid, status)
        except (OSError, ValueError):
            continue
        info.command = get_cmd_line(pid, root)
        processes.append(info)

    total_kb = get_total_memory_kb(root)
    for info in processes:
        info.memory_percent = 100.0 * info.memory_usage / total_kb if total_kb else 0.0
    return processes


def get_process_info(pid: int, proc_root: Optional[PathLike] = None) -> Optional[ProcessInfo]:
    """Return the process with ``pid``, or None if it is not running."""
    return next((p for p in list_all_processes(proc_root) if p.pid == pid), None)