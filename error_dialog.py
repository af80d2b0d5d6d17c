import curses
import textwrap
from typing import Optional

from component import Drawable, EventConsumer, EventState
from layout import Rect
from painting import clear, draw_block, put


class ErrorDialog(Drawable, EventConsumer):
    PAIR_ERROR = 22
    WIDTH = 65
    HEIGHT = 10

    def __init__(self):
        self.error: Optional[str] = None
        try:
            curses.start_color()
            curses.use_default_colors()
            curses.init_pair(self.PAIR_ERROR, curses.COLOR_RED, -1)
            self.error_attr = curses.color_pair(self.PAIR_ERROR)
        except curses.error:
            self.error_attr = curses.A_BOLD

    @property
    def visible(self) -> bool:
        return self.error is not None

    def set(self, error: str):
        self.error = error

    def clear(self):
        self.error = None

    @staticmethod
    def wrap(text: str, width: int) -> list[str]:
        lines: list[str] = []
        for paragraph in text.splitlines() or [""]:
            lines.extend(textwrap.wrap(paragraph.strip(), width) or [""])
        return lines

    def draw(self, win, area: Rect, focused: bool) -> None:
        # centered on the whole screen, whatever area the caller hands in
        if self.error is None:
            return
        screen_h, screen_w = win.getmaxyx()
        panel = Rect(
            max(0, screen_w - self.WIDTH) // 2,
            max(0, screen_h - self.HEIGHT) // 2,
            min(self.WIDTH, screen_w),
            min(self.HEIGHT, screen_h),
        )
        if panel.width < 3 or panel.height < 3:
            return
        clear(win, panel)
        inner = draw_block(win, panel, title="Error", attr=self.error_attr)
        for idx, line in enumerate(self.wrap(self.error, inner.width)[: inner.height]):
            put(win, inner.y + idx, inner.x, line, inner.width, self.error_attr)

    def event(self, key: int) -> EventState:
        return EventState.NOT_CONSUMED
