import curses

from layout import Rect
from painting import draw_rule, put


class TableValue:
    """Strip above the records showing the selected cell(s)."""

    def __init__(self, value: str):
        self.value = value

    def draw(self, win, area: Rect, focused: bool) -> None:
        if area.width <= 0 or area.height <= 0:
            return
        attr = 0 if focused else curses.A_DIM
        lines = self.value.split("\n")
        text_rows = area.height - 1
        for idx in range(text_rows):
            text = lines[idx] if idx < len(lines) else ""
            put(win, area.y + idx, area.x, text, area.width, attr)
        draw_rule(win, area.bottom - 1, area.x, area.width, attr)
