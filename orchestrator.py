import curses
import logging
import time

from completion_popup import RESERVED_WORDS, CompletionPopup
from component import EventState
from error_dialog import ErrorDialog
from filter_prompt import FilterPrompt
from key_config import KeyConfig
from pagination import Paginator
from screen_layout import ScreenLayout
from status_bar import render_status
from table_viewer import TableViewer

logger = logging.getLogger(__name__)

FOCUS_TABLE = "table"
FOCUS_FILTER = "filter"


class Orchestrator:
    def __init__(self, stdscr, source, config=None):
        self.stdscr = stdscr
        config = config or {}
        try:
            curses.curs_set(0)
            curses.raw()
        except curses.error:
            pass
        self.stdscr.nodelay(False)
        self.stdscr.timeout(100)

        self.source = source
        self.layout = ScreenLayout(stdscr)
        self.key_config = KeyConfig.from_mapping(config.get("KEY_CONFIG", {}))
        self.paginator = Paginator(page_size=config.get("PAGE_SIZE", 200))

        self.filter = FilterPrompt()
        self.completion = CompletionPopup(
            self.key_config, reserved_words=config.get("RESERVED_WORDS") or RESERVED_WORDS
        )
        self.error = ErrorDialog()
        self.table = self._new_table()

        self.focus = FOCUS_TABLE
        self.exit_requested = False

        # ---- status ----
        self.status_msg = None
        self.status_msg_until = 0

    # ---------------- helpers ----------------

    def _set_status(self, msg, seconds=3):
        self.status_msg = msg
        self.status_msg_until = time.time() + seconds

    def _new_table(self):
        """Fresh viewer over the first page, so no selection outlives its rows."""
        self.paginator.reset()
        rows = self.source.fetch(0, self.paginator.page_size)
        self.paginator.record(len(rows))
        table = TableViewer(rows, self.source.headers, key_config=self.key_config)
        if self.paginator.is_short_page(len(rows)):
            table.mark_end_of_data()
        return table

    def _fetch_more(self):
        offset = self.paginator.next_offset
        try:
            rows = self.source.fetch(offset, self.paginator.page_size)
            added = self.table.append_rows(rows)
        except Exception as exc:
            logger.exception("Fetching rows from %d failed", offset)
            self.error.set(f"Fetching rows failed: {exc}")
            return
        logger.debug("Fetched %d rows from offset %d", added, offset)
        self.paginator.record(added)
        if self.paginator.is_short_page(len(rows)):
            self.table.mark_end_of_data()

    def _apply_filter(self):
        expression = self.filter.get_buffer()
        try:
            self.source.apply_filter(expression)
        except Exception as exc:
            logger.warning("Filter %r failed: %s", expression, exc)
            self.error.set(f"Filter failed: {exc}")
            return
        self.table = self._new_table()
        self.completion.update("")
        self.focus = FOCUS_TABLE
        if expression.strip():
            self._set_status(f"{self.source.total_rows} rows match", 3)
        else:
            self._set_status("Filter cleared", 3)

    def components(self):
        """Every widget, bottom of the overlay stack first."""
        return [self.table, self.filter, self.completion, self.error]

    def collect_commands(self):
        out = []
        for component in self.components():
            if hasattr(component, "commands"):
                component.commands(out)
        return out

    # ---------------- UI ----------------

    def _status_context(self):
        return {
            "status_msg": self.status_msg,
            "status_until": self.status_msg_until,
            "focus": self.focus,
            "file_path": getattr(self.source, "path", ""),
            "loaded_rows": len(self.table.rows),
            "total_rows": self.source.total_rows,
            "eod": self.table.eod,
            "row": self.table.selected_row,
            "column": self.table.selected_column,
            "column_count": len(self.table.headers),
            "filter": getattr(self.source, "filter_expression", ""),
        }

    def redraw(self):
        win = self.stdscr
        win.erase()
        layout = self.layout

        self.filter.draw(win, layout.filter_area, self.focus == FOCUS_FILTER)
        self.table.draw(win, layout.table_area, self.focus == FOCUS_TABLE)

        status = render_status(self._status_context(), layout.status_area.width)
        try:
            win.addnstr(layout.status_area.y, 0, status, max(0, layout.W - 1), curses.A_REVERSE)
        except curses.error:
            pass

        # overlays, lowest first
        if self.focus == FOCUS_FILTER:
            self.completion.draw(
                win, layout.filter_area, True, x=self.filter.caret_x(), y=-1
            )
        self.error.draw(win, layout.screen, True)

        try:
            show_caret = self.focus == FOCUS_FILTER and not self.error.visible
            curses.curs_set(1 if show_caret else 0)
        except curses.error:
            pass
        if self.focus == FOCUS_FILTER and not self.error.visible:
            try:
                win.move(layout.filter_area.y, min(self.filter.caret_x(), layout.W - 1))
            except curses.error:
                pass
        win.refresh()

    # ---------------- input ----------------

    def handle_key(self, ch):
        kc = self.key_config

        if self.error.visible:
            if self.error.event(ch).is_consumed():
                return
            if ch in (kc.exit_popup, kc.enter, 13, kc.quit):
                self.error.clear()
            return

        if self.focus == FOCUS_FILTER:
            self._handle_filter_key(ch)
            return

        if ch == kc.focus_filter:
            self.focus = FOCUS_FILTER
            self.completion.update(self.filter.current_word())
            return
        if ch == kc.quit:
            self.exit_requested = True
            return

        state = self.table.event(ch)
        if state is EventState.NOT_CONSUMED and self.paginator.should_fetch(
            self.table.selected_row, self.table.eod
        ):
            self._fetch_more()

    def _handle_filter_key(self, ch):
        kc = self.key_config
        if self.completion.event(ch).is_consumed():
            return

        if ch == kc.complete:
            text = self.completion.text_to_insert()
            if text:
                self.filter.insert(text)
            self.completion.update(self.filter.current_word())
            return

        result = self.filter.handle_key(ch)
        if result == "submit":
            self._apply_filter()
            return
        if result == "cancel":
            self.completion.update("")
            self.focus = FOCUS_TABLE
            return
        self.completion.update(self.filter.current_word())

    # ---------------- main loop ----------------

    def run(self):
        self.stdscr.clear()
        self.stdscr.refresh()
        self.redraw()

        while True:
            ch = self.stdscr.getch()

            if ch in (3, 24):  # Ctrl+C / Ctrl+X
                break

            if ch == curses.KEY_RESIZE:
                self.layout.resize()
                self.redraw()
                continue

            if ch == -1:
                self.redraw()
                continue

            self.handle_key(ch)
            if self.exit_requested:
                break
            self.redraw()
