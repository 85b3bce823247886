# digital_rain/engine/streams.py

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List

from .random_source import RandomSource

MAX_SPEED = 3

# Every speed class ticks together once per period.
FRAME_PERIOD = math.lcm(*range(1, MAX_SPEED + 1))


@dataclass
class Raindrop:
    """Head row (negative while above the screen) and ticks-per-row of one column."""

    pos: int
    speed: int


def spawn_streams(width: int, height: int, tail: int, rng: RandomSource) -> List[Raindrop]:
    """
    One raindrop per column, each starting somewhere between the top
    edge and one screen plus one tail above it, so the first frames are
    blank and columns enter staggered.
    """
    drops = []
    for _ in range(width):
        pos = -rng.gen_range(0, height + tail)
        speed = rng.gen_range(1, MAX_SPEED + 1)
        drops.append(Raindrop(pos=pos, speed=speed))
    return drops


def advance_streams(drops: List[Raindrop], frame: int, height: int, tail: int) -> None:
    for d in drops:
        if frame % d.speed == 0:
            d.pos += 1
            if d.pos > height + tail:
                d.pos -= height * 2
