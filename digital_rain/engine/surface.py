# digital_rain/engine/surface.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Tuple, Union

from .rgb import RGB

# Foreground is either a 24-bit colour or the terminal's named black.
NAMED_BLACK = "black"
Foreground = Union[RGB, str]


@dataclass(frozen=True)
class Rect:
    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0

    @property
    def area(self) -> int:
        return self.width * self.height

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0


@dataclass
class Cell:
    symbol: str = " "
    fg: Foreground = NAMED_BLACK


class Buffer:
    """
    Rectangular grid of cells stored row-major, addressed by absolute
    (column, row) coordinates inside `area`.
    """

    def __init__(self, area: Rect) -> None:
        self.area = area
        self.content: List[Cell] = [Cell() for _ in range(max(0, area.area))]

    @classmethod
    def empty(cls, area: Rect) -> "Buffer":
        return cls(area)

    def resize(self, area: Rect) -> None:
        self.area = area
        self.content = [Cell() for _ in range(max(0, area.area))]

    def index_of(self, x: int, y: int) -> int:
        a = self.area
        if not (a.x <= x < a.x + a.width and a.y <= y < a.y + a.height):
            raise IndexError(f"({x}, {y}) is outside {a}")
        return (y - a.y) * a.width + (x - a.x)

    def get(self, x: int, y: int) -> Cell:
        return self.content[self.index_of(x, y)]

    def __getitem__(self, xy: Tuple[int, int]) -> Cell:
        return self.get(*xy)

    def swap_symbols(self, i: int, j: int) -> None:
        if i == j:
            return
        a, b = self.content[i], self.content[j]
        a.symbol, b.symbol = b.symbol, a.symbol

    def symbols(self) -> List[str]:
        return [c.symbol for c in self.content]

    def rows(self) -> Iterator[List[Cell]]:
        w = self.area.width
        for row in range(self.area.height):
            yield self.content[row * w : (row + 1) * w]
