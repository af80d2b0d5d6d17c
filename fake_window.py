import curses


class FakeWin:
    """Records what a widget paints, standing in for a curses window."""

    def __init__(self, h=24, w=80):
        self._h = h
        self._w = w
        self.cells = [[" "] * w for _ in range(h)]
        self.attrs = [[0] * w for _ in range(h)]
        self.writes = 0
        self.cursor = (0, 0)

    def getmaxyx(self):
        return self._h, self._w

    def addnstr(self, y, x, text, n, attr=0):
        if not (0 <= y < self._h and 0 <= x < self._w):
            raise curses.error("addnstr() returned ERR")
        self.writes += 1
        for i, ch in enumerate(text[:n]):
            if x + i >= self._w:
                break
            self.cells[y][x + i] = ch
            self.attrs[y][x + i] = attr

    def move(self, y, x):
        self.cursor = (y, x)

    def erase(self):
        self.cells = [[" "] * self._w for _ in range(self._h)]
        self.attrs = [[0] * self._w for _ in range(self._h)]

    def clear(self):
        self.erase()

    def refresh(self):
        pass

    def nodelay(self, _flag):
        pass

    def timeout(self, _ms):
        pass

    def text(self, y):
        return "".join(self.cells[y])

    def is_blank(self):
        return all(ch == " " for row in self.cells for ch in row)
