from dataclasses import dataclass


@dataclass(frozen=True)
class Rect:
    x: int
    y: int
    width: int
    height: int

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    @property
    def area(self) -> int:
        return self.width * self.height

    def inner(self, margin: int = 1) -> "Rect":
        """Rect left after removing a border of `margin` cells on every side."""
        if self.width < 2 * margin or self.height < 2 * margin:
            return Rect(self.x + margin, self.y + margin, 0, 0)
        return Rect(
            self.x + margin,
            self.y + margin,
            self.width - 2 * margin,
            self.height - 2 * margin,
        )

    def clamp_to(self, width: int, height: int) -> "Rect":
        return Rect(self.x, self.y, min(self.width, width), min(self.height, height))


@dataclass(frozen=True)
class Length:
    value: int


@dataclass(frozen=True)
class Min:
    value: int


def split_vertical(area: Rect, constraints) -> list[Rect]:
    """Stack rects top to bottom; Min takes what is left, the last rect absorbs slack."""
    if not constraints:
        return []
    fixed = sum(c.value for c in constraints if isinstance(c, Length))
    mins = [c for c in constraints if isinstance(c, Min)]
    spare = max(0, area.height - fixed)

    heights = []
    for c in constraints:
        if isinstance(c, Min):
            heights.append(max(c.value, spare // len(mins)))
        else:
            heights.append(c.value)

    rects = []
    y = area.y
    for idx, h in enumerate(heights):
        h = max(0, min(h, area.bottom - y))
        if idx == len(heights) - 1:
            h = max(0, area.bottom - y)
        rects.append(Rect(area.x, y, area.width, h))
        y += h
    return rects


def resolve_widths(constraints, width: int, spacing: int = 1) -> list[int]:
    if not constraints:
        return []
    fixed = sum(c.value for c in constraints if isinstance(c, Length))
    flexible = [c for c in constraints if isinstance(c, Min)]
    spare = max(0, width - fixed - spacing * (len(constraints) - 1))

    widths = []
    for c in constraints:
        if isinstance(c, Min):
            widths.append(max(c.value, spare // len(flexible)))
        else:
            widths.append(c.value)
    return widths
