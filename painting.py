import curses

from rich.cells import cell_len, set_cell_size

from layout import Rect

HORIZONTAL = "─"
VERTICAL = "│"
TOP_LEFT = "┌"
TOP_RIGHT = "┐"
BOTTOM_LEFT = "└"
BOTTOM_RIGHT = "┘"


def put(win, y, x, text, width, attr=0):
    """Write text cropped or padded to exactly `width` display cells."""
    if width <= 0:
        return
    cell = set_cell_size(text, width)
    try:
        win.addnstr(y, x, cell, len(cell), attr)
    except curses.error:
        # curses raises after writing the bottom-right cell of a window
        pass


def put_clipped(win, y, x, text, width, attr=0):
    """Like put() but without padding, so cells to the right stay untouched."""
    if width <= 0 or not text:
        return
    if cell_len(text) > width:
        text = set_cell_size(text, width)
    try:
        win.addnstr(y, x, text, len(text), attr)
    except curses.error:
        pass


def clear(win, area: Rect, attr=0):
    for y in range(area.y, area.bottom):
        put(win, y, area.x, "", area.width, attr)


def draw_rule(win, y, x, width, attr=0):
    put(win, y, x, HORIZONTAL * max(0, width), width, attr)


def draw_block(win, area: Rect, title=None, attr=0) -> Rect:
    if area.width < 2 or area.height < 2:
        return area.inner()

    inner_w = area.width - 2
    put(win, area.y, area.x, TOP_LEFT + HORIZONTAL * inner_w + TOP_RIGHT, area.width, attr)
    for y in range(area.y + 1, area.bottom - 1):
        put(win, y, area.x, VERTICAL, 1, attr)
        put(win, y, area.right - 1, VERTICAL, 1, attr)
    put(
        win,
        area.bottom - 1,
        area.x,
        BOTTOM_LEFT + HORIZONTAL * inner_w + BOTTOM_RIGHT,
        area.width,
        attr,
    )
    if title:
        put_clipped(win, area.y, area.x + 1, title, inner_w, attr)
    return area.inner()
