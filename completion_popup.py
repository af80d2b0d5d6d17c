import curses
from typing import Optional

from component import Drawable, EventConsumer, EventState
from key_config import KeyConfig
from layout import Rect
from painting import clear, draw_block, put

RESERVED_WORDS = ("IN", "AND", "OR", "NOT", "NULL", "IS")


class CompletionPopup(Drawable, EventConsumer):
    """Keyword suggestions for the word under the caret."""

    PAIR_HIGHLIGHT = 21
    WIDTH = 30
    HEIGHT = 5

    def __init__(self, key_config: Optional[KeyConfig] = None, word="", reserved_words=RESERVED_WORDS):
        self.key_config = key_config or KeyConfig()
        self.reserved_words = tuple(reserved_words)
        self.word = word
        self.candidates: list[str] = []
        self.selected: Optional[int] = None
        self.offset = 0

        try:
            curses.start_color()
            curses.use_default_colors()
            curses.init_pair(self.PAIR_HIGHLIGHT, curses.COLOR_WHITE, curses.COLOR_BLUE)
            self.highlight_attr = curses.color_pair(self.PAIR_HIGHLIGHT)
        except curses.error:
            self.highlight_attr = curses.A_REVERSE

    def update(self, word):
        self.word = word
        self.candidates = list(self.reserved_words)
        self.selected = 0
        self.offset = 0

    def filtered_candidates(self) -> list[str]:
        # an empty word would list every keyword
        if not self.word:
            return []
        prefix = self.word.lower()
        return [c for c in self.candidates if c.lower().startswith(prefix)]

    def select_next(self):
        count = len(self.filtered_candidates())
        if count == 0:
            return
        if self.selected is None or self.selected >= count - 1:
            self.selected = 0
        else:
            self.selected += 1

    def select_previous(self):
        count = len(self.filtered_candidates())
        if count == 0:
            return
        if self.selected is None:
            self.selected = 0
        elif self.selected == 0 or self.selected >= count:
            self.selected = count - 1
        else:
            self.selected -= 1

    def text_to_insert(self) -> Optional[str]:
        """Rest of the selected keyword after what was typed, plus a space."""
        candidates = self.filtered_candidates()
        if self.selected is None or self.selected >= len(candidates):
            return None
        return candidates[self.selected][len(self.word) :] + " "

    def draw(self, win, area: Rect, focused: bool, x=0, y=0) -> None:
        if not self.word:
            return
        candidates = self.filtered_candidates()
        if not candidates:
            return

        screen_h, screen_w = win.getmaxyx()
        popup = Rect(area.x + x, area.y + y + 2, self.WIDTH, self.HEIGHT).clamp_to(
            screen_w, screen_h
        )
        popup = popup.clamp_to(
            max(0, screen_w - popup.x), max(0, screen_h - popup.y)
        )
        if popup.width < 3 or popup.height < 3:
            return
        clear(win, popup)
        inner = draw_block(win, popup)

        if self.selected is not None:
            if self.selected < self.offset:
                self.offset = self.selected
            elif self.selected >= self.offset + inner.height:
                self.offset = self.selected - inner.height + 1
        visible = candidates[self.offset : self.offset + inner.height]
        for idx, candidate in enumerate(visible):
            attr = self.highlight_attr if self.offset + idx == self.selected else 0
            put(win, inner.y + idx, inner.x, candidate, inner.width, attr)

    def event(self, key: int) -> EventState:
        if key == self.key_config.move_down:
            self.select_next()
            return EventState.CONSUMED
        if key == self.key_config.move_up:
            self.select_previous()
            return EventState.CONSUMED
        return EventState.NOT_CONSUMED
