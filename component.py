from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

from layout import Rect


class EventState(Enum):
    CONSUMED = "consumed"
    NOT_CONSUMED = "not_consumed"

    def is_consumed(self) -> bool:
        return self is EventState.CONSUMED


@dataclass
class CommandInfo:
    key: str
    description: str


class Drawable(ABC):
    """Something that paints itself into a rect of a curses window each frame."""

    @abstractmethod
    def draw(self, win, area: Rect, focused: bool) -> None:
        ...


class EventConsumer(ABC):
    """Something that accepts key codes and reports whether it used them."""

    @abstractmethod
    def event(self, key: int) -> EventState:
        ...

    def commands(self, out: list) -> None:
        # help overlay hook; nothing registers yet
        return None
