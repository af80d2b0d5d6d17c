import curses
from typing import NamedTuple, Optional

from rich.cells import cell_len

from component import Drawable, EventConsumer, EventState
from key_config import KeyConfig
from layout import Length, Min, Rect, resolve_widths, split_vertical
from painting import clear, draw_block, put
from table_value import TableValue
from vertical_scroll import VerticalScroll


class ColumnWindow(NamedTuple):
    selected_column_index: int
    headers: list
    rows: list
    constraints: list


class TableViewer(Drawable, EventConsumer):
    """Scrollable grid of string cells with cell and rectangle selection."""

    PAIR_SELECTED_CELL = 20
    MIN_COL_WIDTH = 3
    MAX_COL_WIDTH = 20
    FLEX_COL_WIDTH = 10
    PAGE_LINES = 10
    VALUE_HEIGHT = 3
    MIN_WIDTH = 4
    MIN_HEIGHT = 7

    def __init__(self, rows=None, headers=None, key_config: Optional[KeyConfig] = None):
        self.headers = list(headers or [])
        self.rows = self._checked_rows(rows or [])
        self.key_config = key_config or KeyConfig()
        self.eod = False

        self.selected_row: Optional[int] = 0 if self.rows else None
        self.selected_column = 0
        # (column, row) of the corner opposite the cursor
        self.selection_area_corner: Optional[tuple[int, int]] = None

        # leftmost rendered column, rewritten by calculate_cell_widths()
        self.column_page_start = 0
        self.row_offset = 0
        self.scroll = VerticalScroll()

        try:
            curses.start_color()
            curses.use_default_colors()
            curses.init_pair(
                self.PAIR_SELECTED_CELL, curses.COLOR_WHITE, curses.COLOR_BLUE
            )
            self.selected_attr = curses.color_pair(self.PAIR_SELECTED_CELL)
        except curses.error:
            self.selected_attr = curses.A_REVERSE

    # ---------- state helpers ----------
    def _checked_rows(self, rows, first_index=0):
        checked = [list(row) for row in rows]
        for idx, row in enumerate(checked, start=first_index):
            if len(row) != len(self.headers):
                raise ValueError(
                    f"Row {idx} has {len(row)} cells, expected {len(self.headers)}"
                )
        return checked

    def reset(self):
        self.selection_area_corner = None

    def mark_end_of_data(self):
        self.eod = True

    def append_rows(self, rows):
        """Add a fetched page; rejects the whole page if any row has the wrong width."""
        checked = self._checked_rows(rows, first_index=len(self.rows))
        self.rows.extend(checked)
        if self.selected_row is None and self.rows:
            self.selected_row = 0
        return len(checked)

    # ---------- navigation ----------
    def next_row(self, lines=1):
        if self.selected_row is not None and self.rows:
            self.selected_row = min(self.selected_row + lines, len(self.rows) - 1)
        self.reset()

    def previous_row(self, lines=1):
        if self.selected_row is not None and self.rows:
            self.selected_row = max(0, self.selected_row - lines)
        self.reset()

    def scroll_top(self):
        if not self.rows:
            return
        self.reset()
        self.selected_row = 0

    def scroll_bottom(self):
        if not self.rows:
            return
        self.reset()
        self.selected_row = len(self.rows) - 1

    def next_column(self):
        if not self.rows:
            return
        if self.selected_column >= max(0, len(self.headers) - 1):
            return
        self.reset()
        self.selected_column += 1

    def previous_column(self):
        if not self.rows:
            return
        if self.selected_column == 0:
            return
        self.reset()
        self.selected_column -= 1

    def _anchor_selection_area(self):
        if self.selection_area_corner is None:
            row = self.selected_row if self.selected_row is not None else 0
            self.selection_area_corner = (self.selected_column, row)

    def expand_selected_area_x(self, positive):
        self._anchor_selection_area()
        x, y = self.selection_area_corner
        if positive:
            x = min(x + 1, max(0, len(self.headers) - 1))
        else:
            x = max(0, x - 1)
        self.selection_area_corner = (x, y)

    def expand_selected_area_y(self, positive):
        self._anchor_selection_area()
        x, y = self.selection_area_corner
        if positive:
            y = min(y + 1, max(0, len(self.rows) - 1))
        else:
            y = max(0, y - 1)
        self.selection_area_corner = (x, y)

    # ---------- selection ----------
    def selected_cells(self) -> Optional[str]:
        """Selected value(s): commas between cells, newlines between rows."""
        if self.selected_row is None:
            return None
        if self.selection_area_corner is not None:
            x, y = self.selection_area_corner
            top, bottom = sorted((y, self.selected_row))
            left, right = sorted((x, self.selected_column))
            return "\n".join(
                ",".join(row[left : right + 1]) for row in self.rows[top : bottom + 1]
            )
        if self.selected_row >= len(self.rows):
            return None
        row = self.rows[self.selected_row]
        if self.selected_column >= len(row):
            return None
        return row[self.selected_column]

    def is_selected_cell(self, row_index, column_index, selected_column_index):
        # column indexes are band relative; 0 is the row number column
        if self.selected_row is None:
            return False
        if self.selection_area_corner is not None:
            x, y = self.selection_area_corner
            x_in_page = max(0, x + 1 - self.column_page_start)
            left = max(1, min(x_in_page, selected_column_index))
            right = max(x_in_page, selected_column_index)
            top, bottom = sorted((y, self.selected_row))
            return left <= column_index <= right and top <= row_index <= bottom
        return row_index == self.selected_row and column_index == selected_column_index

    def is_number_column(self, row_index, column_index):
        return (
            self.selected_row is not None
            and row_index == self.selected_row
            and column_index == 0
        )

    # ---------- column windowing ----------
    def visible_headers(self, left, right):
        return [""] + self.headers[left:right]

    def visible_rows(self, left, right):
        return [
            [str(index + 1)] + row[left:right] for index, row in enumerate(self.rows)
        ]

    def column_width(self, column_index):
        widest = (
            cell_len(self.headers[column_index])
            if column_index < len(self.headers)
            else self.MIN_COL_WIDTH
        )
        for row in self.rows:
            if column_index >= len(row):
                continue
            for line in str(row[column_index]).split("\n"):
                widest = max(widest, cell_len(line))
        return max(self.MIN_COL_WIDTH, min(self.MAX_COL_WIDTH, widest))

    def _anchor_column(self):
        # the growing edge of a rectangle, otherwise the cursor
        if self.selection_area_corner is not None:
            return self.selection_area_corner[0]
        return self.selected_column

    def calculate_cell_widths(self, viewport_width) -> ColumnWindow:
        """Choose the band of columns rendered in a viewport `viewport_width` cells wide.

        The band is built around the anchor column: the rectangle corner
        while a rectangle exists, otherwise the selected column. It grows
        left from the anchor down to ``column_page_start`` and then right
        while space remains. When it stops short of the last column, its
        final column becomes a flexible ``Min`` column so clipped text is
        visible.

        The reported index is the cursor's position in the band, offset from
        the anchor; it saturates at 0 when the cursor lies left of the band.

        Side effect: ``column_page_start`` is set to the band's first column,
        which keeps the band still while the anchor moves inside it.
        """
        if not self.rows:
            return ColumnWindow(0, [], [], [])
        anchor = self._anchor_column()
        if anchor < self.column_page_start:
            self.column_page_start = anchor

        number_column_width = cell_len(str(len(self.rows) + 1))
        budget = max(0, viewport_width - number_column_width)

        widths = []
        column_index = anchor
        while True:
            width = self.column_width(column_index)
            if widths and sum(widths) + width + len(widths) >= budget:
                column_index += 1
                break
            widths.append(width)
            if column_index <= self.column_page_start:
                break
            column_index -= 1
        widths.reverse()

        far_left = column_index
        anchor_in_band = len(widths) - 1

        column_index = anchor + 1
        while sum(widths) + len(widths) <= budget and column_index < len(self.headers):
            widths.append(self.column_width(column_index))
            column_index += 1
        far_right = column_index

        constraints = [Length(width) for width in widths]
        if far_right < len(self.headers):
            constraints[-1] = Min(self.FLEX_COL_WIDTH)
        constraints.insert(0, Length(number_column_width))
        self.column_page_start = far_left

        selected_index = max(0, anchor_in_band + 1 + self.selected_column - anchor)
        return ColumnWindow(
            selected_index,
            self.visible_headers(far_left, far_right),
            self.visible_rows(far_left, far_right),
            constraints,
        )

    # ---------- rendering ----------
    @staticmethod
    def row_height(cells):
        return 1 + max((str(cell).count("\n") for cell in cells), default=0)

    def _row_bounds(self, heights, focus, max_height):
        offset = min(self.row_offset, max(0, len(heights) - 1))
        start = end = offset
        used = 0
        for height in heights[offset:]:
            if used + height > max_height:
                break
            used += height
            end += 1

        focus = min(focus, len(heights) - 1)
        while focus >= end:
            used += heights[end]
            end += 1
            while used > max_height:
                used -= heights[start]
                start += 1
        while focus < start:
            start -= 1
            used += heights[start]
            while used > max_height:
                end -= 1
                used -= heights[end]
        if end <= start:
            # a single row taller than the viewport; show it clipped
            return focus, focus + 1
        return start, end

    def draw(self, win, area: Rect, focused: bool) -> None:
        if area.width < self.MIN_WIDTH or area.height < self.MIN_HEIGHT:
            return
        value_area, records_area = split_vertical(
            area, [Length(self.VALUE_HEIGHT), Min(0)]
        )

        if self.selected_row is None:
            self.scroll.reset()
        else:
            self.scroll.update(
                self.selected_row, len(self.rows), max(0, records_area.height - 2)
            )

        TableValue(self.selected_cells() or "").draw(win, value_area, focused)

        base_attr = 0 if focused else curses.A_DIM
        inner = draw_block(win, records_area, title="Records", attr=base_attr)
        clear(win, inner, base_attr)

        window = self.calculate_cell_widths(inner.width)
        widths = resolve_widths(window.constraints, inner.width)
        xs = []
        x = inner.x
        for width in widths:
            xs.append(x)
            x += width + 1

        def put_cell(y, column_index, text, attr):
            width = min(widths[column_index], inner.right - xs[column_index])
            put(win, y, xs[column_index], text, width, attr)

        for column_index, header in enumerate(window.headers):
            attr = base_attr
            if column_index == window.selected_column_index:
                attr |= curses.A_BOLD
            put_cell(inner.y, column_index, header, attr)

        body_top = inner.y + 2
        body_height = inner.height - 2
        if window.rows and body_height > 0:
            heights = [self.row_height(row) + 1 for row in window.rows]
            if self.selection_area_corner is not None:
                focus = self.selection_area_corner[1]
            else:
                focus = self.selected_row or 0
            start, end = self._row_bounds(heights, focus, body_height)
            self.row_offset = start

            y = body_top
            for row_index in range(start, end):
                for column_index, cell in enumerate(window.rows[row_index]):
                    if self.is_selected_cell(
                        row_index, column_index, window.selected_column_index
                    ):
                        attr = self.selected_attr
                    elif self.is_number_column(row_index, column_index):
                        attr = base_attr | curses.A_BOLD
                    else:
                        attr = base_attr
                    for line_no, line in enumerate(str(cell).split("\n")):
                        if y + line_no >= inner.bottom:
                            break
                        put_cell(y + line_no, column_index, line, attr)
                y += heights[row_index]
                if y >= inner.bottom:
                    break

        self.scroll.draw(win, records_area, base_attr)

    # ---------- input ----------
    def event(self, key: int) -> EventState:
        kc = self.key_config
        if key == kc.scroll_left:
            self.previous_column()
            return EventState.CONSUMED
        if key == kc.scroll_down:
            # left unconsumed so the caller can fetch more rows
            self.next_row(1)
            return EventState.NOT_CONSUMED
        if key == kc.scroll_down_multiple_lines:
            self.next_row(self.PAGE_LINES)
            return EventState.NOT_CONSUMED
        if key == kc.scroll_up:
            self.previous_row(1)
            return EventState.CONSUMED
        if key == kc.scroll_up_multiple_lines:
            self.previous_row(self.PAGE_LINES)
            return EventState.CONSUMED
        if key == kc.scroll_to_top:
            self.scroll_top()
            return EventState.CONSUMED
        if key == kc.scroll_to_bottom:
            self.scroll_bottom()
            return EventState.CONSUMED
        if key == kc.scroll_right:
            self.next_column()
            return EventState.CONSUMED
        if key == kc.extend_selection_by_one_cell_left:
            self.expand_selected_area_x(False)
            return EventState.CONSUMED
        if key == kc.extend_selection_by_one_cell_up:
            self.expand_selected_area_y(False)
            return EventState.CONSUMED
        if key == kc.extend_selection_by_one_cell_down:
            self.expand_selected_area_y(True)
            return EventState.CONSUMED
        if key == kc.extend_selection_by_one_cell_right:
            self.expand_selected_area_x(True)
            return EventState.CONSUMED
        return EventState.NOT_CONSUMED
