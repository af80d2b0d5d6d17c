import curses

from fake_window import FakeWin
from filter_prompt import FilterPrompt
from layout import Rect


def _feed(prompt, text):
    for ch in text:
        prompt.handle_key(ord(ch))


def test_typing_and_current_word():
    p = FilterPrompt()
    _feed(p, "a > 1 an")
    assert p.get_buffer() == "a > 1 an"
    assert p.current_word() == "an"
    _feed(p, " ")
    assert p.current_word() == ""


def test_submit_and_cancel():
    p = FilterPrompt()
    assert p.handle_key(10) == "submit"
    assert p.handle_key(13) == "submit"
    assert p.handle_key(27) == "cancel"


def test_ctrl_w_deletes_word_backward():
    p = FilterPrompt()
    p.set_buffer("a > 1 and b")
    p.handle_key(23)
    assert p.get_buffer() == "a > 1 and "
    p.handle_key(23)
    assert p.get_buffer() == "a > 1 "


def test_ctrl_u_kills_to_start():
    p = FilterPrompt()
    p.set_buffer("abc def")
    p.handle_key(curses.KEY_LEFT)
    p.handle_key(curses.KEY_LEFT)
    p.handle_key(21)
    assert p.get_buffer() == "ef"
    assert p.cursor == 0


def test_cursor_motion_and_backspace():
    p = FilterPrompt()
    _feed(p, "abc")
    p.handle_key(1)
    assert p.cursor == 0
    p.handle_key(curses.KEY_BACKSPACE)
    assert p.get_buffer() == "abc"
    p.handle_key(curses.KEY_RIGHT)
    p.handle_key(127)
    assert p.get_buffer() == "bc"
    p.handle_key(5)
    assert p.cursor == 2
    p.handle_key(curses.KEY_HOME)
    _feed(p, "x")
    assert p.get_buffer() == "xbc"


def test_insert_at_cursor():
    p = FilterPrompt()
    p.set_buffer("a  b")
    p.handle_key(curses.KEY_LEFT)
    p.handle_key(curses.KEY_LEFT)
    p.insert("AND")
    assert p.get_buffer() == "a AND b"
    assert p.caret_x() == len(FilterPrompt.PROMPT) + 5


def test_unprintable_keys_are_ignored():
    p = FilterPrompt()
    assert p.handle_key(curses.KEY_F1) is None
    assert p.get_buffer() == ""


def test_draw_shows_prompt_and_caret():
    p = FilterPrompt()
    p.set_buffer("a > 1")
    win = FakeWin(3, 20)
    p.draw(win, Rect(0, 0, 20, 1), True)
    assert win.text(0).startswith("/ a > 1")
    assert win.cursor == (0, 7)


def test_draw_scrolls_long_buffer():
    p = FilterPrompt()
    p.set_buffer("x" * 30 + "END")
    win = FakeWin(1, 12)
    p.draw(win, Rect(0, 0, 12, 1), True)
    assert win.text(0).startswith("/ ")
    assert "END" in win.text(0)
    assert p.hscroll > 0


def test_caret_counts_display_cells():
    p = FilterPrompt()
    p.set_buffer("名前 > 1")
    assert p.caret_x() == len(FilterPrompt.PROMPT) + 8
    p.handle_key(1)
    p.handle_key(curses.KEY_RIGHT)
    assert p.caret_x() == len(FilterPrompt.PROMPT) + 2


def test_draw_scrolls_wide_buffer_by_cells():
    p = FilterPrompt()
    p.set_buffer("日本語日本語日本語")
    win = FakeWin(1, 12)
    p.draw(win, Rect(0, 0, 12, 1), True)
    # nine cells of text area hold four wide glyphs
    assert p.hscroll == 5
    assert p.caret_x() == len(FilterPrompt.PROMPT) + 8
    assert win.cursor == (0, 10)
