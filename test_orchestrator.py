import curses

import pandas as pd
import pytest

from fake_window import FakeWin
from orchestrator import FOCUS_FILTER, FOCUS_TABLE, Orchestrator
from record_source import RecordSource


class DummyScreen(FakeWin):
    def __init__(self, keys=(), h=24, w=80):
        super().__init__(h, w)
        self.keys = list(keys)

    def getch(self):
        if not self.keys:
            return 3
        return self.keys.pop(0)


class FlakySource:
    """Serves one page, then fails."""

    path = "flaky.csv"
    filter_expression = ""

    def __init__(self):
        self.headers = ["n"]
        self.total_rows = 10
        self.calls = 0

    def fetch(self, offset, limit):
        self.calls += 1
        if self.calls > 1:
            raise OSError("disk went away")
        return [[str(i)] for i in range(offset, offset + limit)]

    def apply_filter(self, expression):
        self.filter_expression = expression


def _frame_source():
    return RecordSource.from_frame(
        pd.DataFrame({"a": [1, 2, 3, 4, 5], "b": [10, 20, 30, 40, 50]}),
        name="numbers.csv",
    )


def _orch(config=None, source=None, keys=()):
    return Orchestrator(DummyScreen(keys), source or _frame_source(), config)


def _type(orch, text):
    for ch in text:
        orch.handle_key(ord(ch))


def test_first_page_loaded():
    orch = _orch({"PAGE_SIZE": 2})
    assert orch.table.rows == [["1", "10"], ["2", "20"]]
    assert orch.table.headers == ["a", "b"]
    assert orch.table.eod is False


def test_short_first_page_marks_end_of_data():
    orch = _orch()
    assert len(orch.table.rows) == 5
    assert orch.table.eod is True


def test_scrolling_down_fetches_more_rows():
    orch = _orch({"PAGE_SIZE": 2})
    orch.handle_key(ord("j"))
    assert orch.table.selected_row == 1
    assert len(orch.table.rows) == 4

    orch.handle_key(ord("j"))
    assert len(orch.table.rows) == 4

    orch.handle_key(ord("j"))
    assert len(orch.table.rows) == 5
    assert orch.table.eod is True

    orch.handle_key(ord("j"))
    assert orch.table.selected_row == 4
    assert len(orch.table.rows) == 5


def test_consumed_keys_do_not_fetch():
    orch = _orch({"PAGE_SIZE": 2})
    orch.table.selected_row = 1
    orch.handle_key(ord("l"))
    assert len(orch.table.rows) == 2


def test_fetch_failure_opens_error_dialog():
    source = FlakySource()
    orch = _orch({"PAGE_SIZE": 2}, source=source)
    orch.handle_key(ord("j"))
    assert orch.error.visible
    assert "disk went away" in orch.error.error
    assert len(orch.table.rows) == 2


def test_filter_with_completion():
    orch = _orch()
    orch.handle_key(ord("/"))
    assert orch.focus == FOCUS_FILTER

    _type(orch, "a > 1 an")
    assert orch.completion.word == "an"
    orch.handle_key(9)
    assert orch.filter.get_buffer() == "a > 1 anD "

    _type(orch, "b < 40")
    orch.handle_key(10)
    assert orch.focus == FOCUS_TABLE
    assert orch.table.rows == [["2", "20"], ["3", "30"]]
    assert orch.table.selected_row == 0
    assert orch.status_msg == "2 rows match"


def test_arrow_keys_pick_completion():
    orch = _orch()
    orch.handle_key(ord("/"))
    _type(orch, "n")
    orch.handle_key(curses.KEY_DOWN)
    orch.handle_key(9)
    assert orch.filter.get_buffer() == "nULL "


def test_escape_leaves_filter_without_applying():
    orch = _orch()
    orch.handle_key(ord("/"))
    _type(orch, "a > 3")
    orch.handle_key(27)
    assert orch.focus == FOCUS_TABLE
    assert len(orch.table.rows) == 5
    assert orch.filter.get_buffer() == "a > 3"


def test_bad_filter_shows_error_until_dismissed():
    orch = _orch()
    orch.handle_key(ord("/"))
    _type(orch, "zzz > 1")
    orch.handle_key(10)
    assert orch.error.visible

    # every other key is swallowed while the dialog is up
    orch.handle_key(ord("j"))
    orch.handle_key(ord("x"))
    assert orch.error.visible
    assert orch.filter.get_buffer() == "zzz > 1"

    orch.handle_key(27)
    assert not orch.error.visible
    assert orch.focus == FOCUS_FILTER


@pytest.mark.parametrize("key", [27, 10, 13, ord("q")])
def test_error_dismiss_keys(key):
    orch = _orch()
    orch.error.set("boom")
    orch.handle_key(key)
    assert not orch.error.visible
    assert orch.exit_requested is False


def test_clearing_filter_restores_rows():
    orch = _orch()
    orch.source.apply_filter("a > 3")
    orch.table = orch._new_table()
    orch.handle_key(ord("/"))
    orch.handle_key(10)
    assert len(orch.table.rows) == 5
    assert orch.status_msg == "Filter cleared"


def test_quit_key():
    orch = _orch()
    orch.handle_key(ord("q"))
    assert orch.exit_requested


def test_collect_commands_is_empty():
    assert _orch().collect_commands() == []


def test_redraw_paints_every_region():
    orch = _orch()
    orch.redraw()
    scr = orch.stdscr
    assert scr.text(0).startswith("/ ")
    assert "┌Records" in scr.text(4)
    assert scr.text(23).startswith(" TABLE | numbers.csv | rows 5/5 EOD")


def test_redraw_with_popup_and_error():
    orch = _orch()
    orch.handle_key(ord("/"))
    _type(orch, "a")
    orch.redraw()
    scr = orch.stdscr
    assert "AND" in scr.text(2)
    assert scr.cursor == (0, 3)

    orch.error.set("something broke")
    orch.redraw()
    assert "Error" in scr.text(7)


def test_run_until_quit():
    orch = _orch(keys=[ord("j"), -1, curses.KEY_RESIZE, ord("q")])
    orch.run()
    assert orch.table.selected_row == 1
    assert orch.exit_requested


def test_run_exits_on_ctrl_c():
    orch = _orch(keys=[ord("j"), ord("j")])
    orch.run()
    assert orch.table.selected_row == 2
    assert not orch.exit_requested


class RaggedSource(FlakySource):
    """Second page comes back with a missing cell."""

    def fetch(self, offset, limit):
        self.calls += 1
        if self.calls > 1:
            return [[str(offset)], []]
        return [[str(i)] for i in range(offset, offset + limit)]


def test_fetched_page_with_wrong_width_is_rejected():
    orch = _orch({"PAGE_SIZE": 2}, source=RaggedSource())
    orch.handle_key(ord("j"))
    assert orch.error.visible
    assert "expected 1" in orch.error.error
    assert orch.table.rows == [["0"], ["1"]]
    assert orch.paginator.loaded_rows == 2
    assert orch.table.eod is False
