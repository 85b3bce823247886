# digital_rain/engine/sampling.py

from __future__ import annotations

from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from .rgb import BLACK, RGB

Stop = Tuple[float, RGB]


def sample_range(start: float, end: float, v: float) -> Optional[float]:
    """
    Map `v` to its normalized offset inside the closed range [start, end].

    Returns None when `v` lies outside the range, so an in-band 0.0 is
    never confused with "out of band".
    """
    if v < start or v > end:
        return None
    return (v - start) / (end - start)


class Gradient:
    """
    Piecewise-linear colour map defined by (position, colour) stops.

    Stops are expected in non-decreasing position order; that is not
    checked here.
    """

    __slots__ = ("_stops",)

    def __init__(self, stops: Iterable[Stop] = ()) -> None:
        self._stops: List[Stop] = [(float(p), c) for p, c in stops]

    @property
    def stops(self) -> Tuple[Stop, ...]:
        return tuple(self._stops)

    @property
    def first_color(self) -> RGB:
        return self._stops[0][1] if self._stops else BLACK

    def __len__(self) -> int:
        return len(self._stops)

    def __iter__(self) -> Iterator[Stop]:
        return iter(self._stops)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Gradient):
            return NotImplemented
        return self._stops == other._stops

    def __repr__(self) -> str:
        return f"Gradient({self._stops!r})"

    def sample(self, s: float) -> RGB:
        stops = self._stops
        if not stops:
            return BLACK
        if len(stops) == 1:
            return stops[0][1]

        for i, (pos, color) in enumerate(stops):
            if pos >= s:
                i0 = max(0, i - 1)
                # at or before the first stop
                if i0 == i:
                    return color
                s0, c0 = stops[i0]
                w = (s - s0) / (pos - s0)
                return color.lerp(c0, w)

        return stops[-1][1]


def as_gradient(value: "Gradient | Sequence[Stop]") -> Gradient:
    if isinstance(value, Gradient):
        return value
    return Gradient(value)
