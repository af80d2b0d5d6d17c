from layout import Length, Min, Rect, split_vertical


class ScreenLayout:
    def __init__(self, stdscr):
        self.stdscr = stdscr
        self.resize()

    def resize(self):
        self.H, self.W = self.stdscr.getmaxyx()

        # layout: filter line (1 line), table (main), status bar (1 line)
        self.filter_h = 1
        self.status_h = 1

        screen = Rect(0, 0, self.W, self.H)
        self.filter_area, self.table_area, self.status_area = split_vertical(
            screen, [Length(self.filter_h), Min(1), Length(self.status_h)]
        )
        self.screen = screen
