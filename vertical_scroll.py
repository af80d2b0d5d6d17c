from layout import Rect
from painting import put

TRACK = "┃"
THUMB = "█"


def calc_scroll_top(current_top, height_in_lines, selection, selection_max):
    if height_in_lines == 0:
        return 0
    if selection_max <= height_in_lines:
        return 0

    if current_top + height_in_lines <= selection:
        return max(0, selection - height_in_lines) + 1
    if current_top > selection:
        return selection
    return current_top


class VerticalScroll:
    """Scrollbar position for a list whose selection moves one row at a time."""

    def __init__(self):
        self.top = 0
        self.max_top = 0

    def reset(self):
        self.top = 0
        self.max_top = 0

    def update(self, selection, selection_max, visual_height):
        self.top = calc_scroll_top(self.top, visual_height, selection, selection_max)
        if visual_height == 0:
            self.max_top = 0
        else:
            self.max_top = max(0, selection_max - visual_height)
        return self.top

    def thumb_offset(self, bar_height):
        progress = min(1.0, self.top / self.max_top) if self.max_top else 0.0
        pos = int(bar_height * progress + 0.5)
        return max(0, pos - 1)

    def draw(self, win, area: Rect, attr=0):
        if self.max_top <= 0:
            return
        right = area.right - 1
        if right <= area.x:
            return
        bar_top = area.y + 1
        bar_height = max(0, area.height - 2)
        if bar_height == 0:
            return
        for y in range(bar_top, bar_top + bar_height):
            put(win, y, right, TRACK, 1, attr)
        put(win, bar_top + self.thumb_offset(bar_height), right, THUMB, 1, attr)
