import curses

from rich.cells import cell_len

from component import Drawable
from layout import Rect
from painting import put, put_clipped


class FilterPrompt(Drawable):
    PROMPT = "/ "

    def __init__(self):
        self.buffer = ""
        self.cursor = 0
        self.hscroll = 0

    # ---------- state helpers ----------
    def reset(self):
        self.buffer = ""
        self.cursor = 0
        self.hscroll = 0

    def get_buffer(self):
        return self.buffer

    def set_buffer(self, text):
        self.buffer = text or ""
        self.cursor = len(self.buffer)
        self.hscroll = 0

    def insert(self, text):
        self.buffer = self.buffer[: self.cursor] + text + self.buffer[self.cursor :]
        self.cursor += len(text)

    # ---------- word helpers ----------
    @staticmethod
    def _is_word_char(ch):
        return ch.isalnum() or ch == "_"

    def _word_start(self):
        i = self.cursor
        while i > 0 and self._is_word_char(self.buffer[i - 1]):
            i -= 1
        return i

    def current_word(self):
        """Identifier characters directly left of the cursor."""
        return self.buffer[self._word_start() : self.cursor]

    def caret_x(self):
        return cell_len(self.PROMPT) + cell_len(self.buffer[self.hscroll : self.cursor])

    # ---------- input handling ----------
    def handle_key(self, ch):
        if ch in (10, 13):  # Enter
            return "submit"

        if ch == 27:  # Esc
            return "cancel"

        if ch == 23:  # Ctrl+W, delete word backward
            i = self.cursor
            while i > 0 and self.buffer[i - 1].isspace():
                i -= 1
            while i > 0 and self._is_word_char(self.buffer[i - 1]):
                i -= 1
            if i == self.cursor and i > 0:
                i -= 1
            self.buffer = self.buffer[:i] + self.buffer[self.cursor :]
            self.cursor = i
            return None

        if ch == 21:  # Ctrl+U, kill to line start
            self.buffer = self.buffer[self.cursor :]
            self.cursor = 0
            return None

        if ch in (curses.KEY_BACKSPACE, 127, 8):
            if self.cursor > 0:
                self.buffer = self.buffer[: self.cursor - 1] + self.buffer[self.cursor :]
                self.cursor -= 1
            return None

        if ch == curses.KEY_LEFT:
            self.cursor = max(0, self.cursor - 1)
            return None

        if ch == curses.KEY_RIGHT:
            self.cursor = min(len(self.buffer), self.cursor + 1)
            return None

        if ch in (curses.KEY_HOME, 1):  # Home or Ctrl+A
            self.cursor = 0
            return None

        if ch in (curses.KEY_END, 5):  # End or Ctrl+E
            self.cursor = len(self.buffer)
            return None

        if 32 <= ch <= 126:
            self.insert(chr(ch))
            return None

        return None

    # ---------- rendering ----------
    def draw(self, win, area: Rect, focused: bool) -> None:
        if area.width <= len(self.PROMPT) or area.height <= 0:
            return
        text_w = area.width - len(self.PROMPT) - 1

        # keep cursor visible
        if self.cursor < self.hscroll:
            self.hscroll = self.cursor
        while cell_len(self.buffer[self.hscroll : self.cursor]) > text_w:
            self.hscroll += 1

        attr = 0 if focused else curses.A_DIM
        put(win, area.y, area.x, "", area.width, attr)
        put_clipped(win, area.y, area.x, self.PROMPT, area.width, attr)
        visible = self.buffer[self.hscroll :]
        put_clipped(win, area.y, area.x + len(self.PROMPT), visible, text_w, attr)

        if focused:
            try:
                win.move(area.y, area.x + min(self.caret_x(), area.width - 1))
            except curses.error:
                pass
