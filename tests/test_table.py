import pytest

from proki.process_info import ProcessInfo, SortField
from proki.table import (
    NO_PROCESSES,
    PADDING,
    ProcessTable,
    build_columns,
    format_cells,
    render_lines,
)


class _StaticUpdater:
    def __init__(self, processes):
        self._processes = processes

    def get_processes(self):
        return list(self._processes)


def _sample():
    return [
        ProcessInfo(pid=10, name="init", user="root", memory_usage=500.0, command="/sbin/init"),
        ProcessInfo(pid=3, name="bash", user="alice", memory_usage=9000.0, command="/bin/bash"),
        ProcessInfo(pid=7, name="a-much-longer-name", user="bob", memory_usage=2000.0,
                    command="/usr/bin/python3 server.py --port 8080"),
    ]


def test_format_cells_values():
    process = ProcessInfo(pid=42, name="bash", user="root", cpu_usage=1.5,
                          memory_usage=2048.0, memory_percent=12.5, command="/bin/bash -l")
    assert format_cells(process) == ("42", "bash", "root", "1.50", "2.00", "12.50", "/bin/bash -l")


def test_format_cells_numbers_have_two_decimals():
    process = ProcessInfo(pid=1, cpu_usage=3.14159, memory_usage=12345.678, memory_percent=0.1)
    for cell in format_cells(process)[3:6]:
        whole, _, fraction = cell.partition(".")
        assert whole.isdigit()
        assert len(fraction) == 2


def test_build_columns_names_and_fields():
    columns = build_columns(_sample())
    assert [c.name for c in columns] == [
        "(PID)", "Name", "User", "CPU (%)", "Memory (MB)", "Memory (%)", "Command",
    ]
    assert [c.sort_field for c in columns] == [
        SortField.PID, SortField.NAME, SortField.USER, SortField.CPU,
        SortField.MEMORY, SortField.MEMORY, SortField.COMMAND,
    ]


def test_build_columns_flags():
    columns = build_columns([])
    assert [c.stretch for c in columns].count(True) == 1
    assert columns[-1].stretch
    default = [c for c in columns if c.default_sort]
    assert [c.name for c in default] == ["Memory (MB)"]
    assert default[0].prefer_descending


def test_build_columns_widths_cover_headers_and_cells():
    processes = _sample()
    columns = build_columns(processes)
    rows = [format_cells(p) for p in processes]
    for index, column in enumerate(columns):
        assert column.width >= len(column.name) + PADDING
        for row in rows:
            assert column.width >= len(row[index])
    assert columns[1].width == len("a-much-longer-name") + PADDING


def test_render_lines_shape():
    processes = _sample()
    lines = render_lines(processes, build_columns(processes))
    assert len(lines) == len(processes) + 1
    assert lines[0].startswith("(PID)")
    assert lines[0].endswith("Command")
    for process, line in zip(processes, lines[1:]):
        assert line.startswith(str(process.pid))
        assert process.name in line
        assert line.endswith(process.command)


def test_render_lines_respects_width():
    processes = _sample()
    columns = build_columns(processes)
    for width in (0, 5, 30, 60, 200):
        assert all(len(line) <= width for line in render_lines(processes, columns, width))


def test_render_lines_rejects_negative_width():
    with pytest.raises(ValueError):
        render_lines(_sample(), build_columns(_sample()), -1)


def test_table_default_order_is_memory_descending():
    table = ProcessTable(_StaticUpdater(_sample()))
    memory = [p.memory_usage for p in table.rows()]
    assert memory == sorted(memory, reverse=True)


def test_toggle_sort_pid_then_reverse():
    table = ProcessTable(_StaticUpdater(_sample()))
    table.toggle_sort(SortField.PID)
    assert [p.pid for p in table.rows()] == [3, 7, 10]
    table.toggle_sort(SortField.PID)
    assert [p.pid for p in table.rows()] == [10, 7, 3]


def test_toggle_sort_current_field_flips_direction():
    table = ProcessTable(_StaticUpdater(_sample()))
    table.toggle_sort(SortField.MEMORY)
    memory = [p.memory_usage for p in table.rows()]
    assert memory == sorted(memory)
    assert table.ascending is True


def test_toggle_sort_back_to_memory_prefers_descending():
    table = ProcessTable(_StaticUpdater(_sample()))
    table.toggle_sort(SortField.NAME)
    assert [p.name for p in table.rows()] == sorted(p.name for p in _sample())
    table.toggle_sort(SortField.MEMORY)
    assert table.ascending is False


def test_render_without_processes():
    assert ProcessTable(_StaticUpdater([])).render(80) == [NO_PROCESSES]


def test_render_with_processes():
    table = ProcessTable(_StaticUpdater(_sample()))
    lines = table.render(120)
    assert len(lines) == 4
    assert lines[1].startswith("3")