import curses
import logging
from dataclasses import dataclass, fields

logger = logging.getLogger(__name__)

NAMED_KEYS = {
    "up": curses.KEY_UP,
    "down": curses.KEY_DOWN,
    "left": curses.KEY_LEFT,
    "right": curses.KEY_RIGHT,
    "enter": 10,
    "esc": 27,
    "tab": 9,
    "backspace": curses.KEY_BACKSPACE,
    "pageup": curses.KEY_PPAGE,
    "pagedown": curses.KEY_NPAGE,
    "home": curses.KEY_HOME,
    "end": curses.KEY_END,
}


def ctrl(ch: str) -> int:
    return ord(ch.lower()) & 0x1F


def parse_key(spec) -> int:
    """Turn 'j', 'ctrl-d' or 'down' into a curses key code."""
    if isinstance(spec, int):
        return spec
    if not isinstance(spec, str) or spec == "":
        raise ValueError(f"Invalid key: {spec!r}")
    if len(spec) == 1:
        return ord(spec)
    lowered = spec.lower()
    if lowered.startswith("ctrl-") and len(spec) == 6:
        return ctrl(spec[-1])
    if lowered in NAMED_KEYS:
        return NAMED_KEYS[lowered]
    raise ValueError(f"Invalid key: {spec!r}")


@dataclass
class KeyConfig:
    scroll_up: int = ord("k")
    scroll_down: int = ord("j")
    scroll_left: int = ord("h")
    scroll_right: int = ord("l")
    scroll_up_multiple_lines: int = ctrl("u")
    scroll_down_multiple_lines: int = ctrl("d")
    scroll_to_top: int = ord("g")
    scroll_to_bottom: int = ord("G")
    extend_selection_by_one_cell_left: int = ord("H")
    extend_selection_by_one_cell_right: int = ord("L")
    extend_selection_by_one_cell_up: int = ord("K")
    extend_selection_by_one_cell_down: int = ord("J")
    move_up: int = curses.KEY_UP
    move_down: int = curses.KEY_DOWN
    enter: int = 10
    exit_popup: int = 27
    focus_filter: int = ord("/")
    complete: int = 9
    quit: int = ord("q")

    @classmethod
    def from_mapping(cls, mapping) -> "KeyConfig":
        config = cls()
        if not isinstance(mapping, dict):
            return config
        names = {f.name for f in fields(cls)}
        for name, spec in mapping.items():
            if name not in names:
                logger.warning("Unknown key binding %r ignored", name)
                continue
            try:
                setattr(config, name, parse_key(spec))
            except ValueError as exc:
                logger.warning("Key binding %r ignored: %s", name, exc)
        return config
