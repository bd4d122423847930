import pytest

from proki.app import App, Tab, UiState, main
from proki.process_info import ProcessInfo
from proki.table import NO_PROCESSES, ProcessTable


class _StaticUpdater:
    def __init__(self, processes):
        self._processes = processes

    def get_processes(self):
        return list(self._processes)


def _state(processes=()):
    return UiState(process_table=ProcessTable(_StaticUpdater(list(processes))))


def test_default_tabs():
    state = _state()
    assert [tab.id for tab in state.tabs] == ["Processes", "Tab2"]
    assert all(tab.is_open for tab in state.tabs)
    assert state.table_index == 0


def test_processes_tab_is_rendered_first():
    state = _state([ProcessInfo(pid=5, name="sh", memory_usage=100.0)])
    lines = state.render_content(100)
    assert lines[0].startswith("(PID)")
    assert lines[1].startswith("5")


def test_processes_tab_without_processes():
    assert _state().render_content(80) == [NO_PROCESSES]


def test_select_second_tab():
    state = _state()
    state.select(1)
    assert state.table_index == 1
    assert state.render_content(80) == ["Content of Tab2"]


@pytest.mark.parametrize("index", [-1, 2, 10])
def test_select_out_of_range(index):
    state = _state()
    with pytest.raises(IndexError):
        state.select(index)
    assert state.table_index == 0


def test_custom_tab_receives_state_and_width():
    seen = []

    def render(state, width):
        seen.append((state, width))
        return ["custom"]

    state = _state()
    state.tabs.append(Tab("Extra", True, render))
    state.select(2)
    assert state.render_content(42) == ["custom"]
    assert seen == [(state, 42)]


def test_app_builds_tabs():
    app = App(interval=0.5)
    assert [tab.id for tab in app.state.tabs] == ["Processes", "Tab2"]
    assert app.state.process_table is app.table
    assert app.table.updater is app.updater


def test_app_rejects_bad_interval():
    with pytest.raises(ValueError):
        App(interval=0)


def test_main_reports_errors(capsys):
    assert main(["--interval", "0"]) == 1
    assert capsys.readouterr().err.startswith("Erreur : ")


def test_main_rejects_bad_argument():
    with pytest.raises(SystemExit):
        main(["--interval", "abc"])