# digital_rain/engine/widget.py

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Union

from .random_source import RandomSource
from .sampling import Gradient, Stop, as_gradient, sample_range
from .streams import FRAME_PERIOD, Raindrop, advance_streams, spawn_streams
from .surface import NAMED_BLACK, Buffer, Rect

logger = logging.getLogger(__name__)

MUTATION_PROBABILITY = 0.05


class MatrixWidget:
    """
    Digital rain painter.

    Owns the per-column streams, the colour gradient, the glyph alphabet
    and its own random source. Each `render` call is one animation tick:
    the streams move, a few glyphs are shuffled around and every cell in
    the area gets a foreground colour from its distance to the stream
    head.
    """

    def __init__(
        self,
        tail: int,
        alphabet: Union[str, Sequence[str]],
        gradient: Union[Gradient, Sequence[Stop]],
        rng: Optional[RandomSource] = None,
    ) -> None:
        self.tail = int(tail)
        self.alphabet: List[str] = list(alphabet)
        self.gradient = as_gradient(gradient)
        self.rng = rng if rng is not None else RandomSource()

        self._frame = 0
        self._area: Optional[Rect] = None
        self._drops: List[Raindrop] = []

    @property
    def frame(self) -> int:
        return self._frame

    @property
    def area(self) -> Optional[Rect]:
        return self._area

    @property
    def streams(self) -> List[Raindrop]:
        return self._drops

    def _init(self, area: Rect, buf: Buffer) -> None:
        logger.debug("initialising rain for %dx%d at (%d, %d)", area.width, area.height, area.x, area.y)
        self._drops = spawn_streams(area.width, area.height, self.tail, self.rng)

        # Fill once up front; afterwards glyphs only move by swapping.
        first = self.gradient.first_color
        for y in range(area.y, area.y + area.height):
            for x in range(area.x, area.x + area.width):
                cell = buf.get(x, y)
                cell.symbol = self.rng.choose(self.alphabet)
                cell.fg = first

        self._area = area

    def render(self, area: Rect, buf: Buffer) -> None:
        if self._area != area:
            self._init(area, buf)

        self._frame = (self._frame + 1) % FRAME_PERIOD
        advance_streams(self._drops, self._frame, area.height, self.tail)

        rng = self.rng
        tail = self.tail
        grad = self.gradient

        for dy in range(area.height):
            y = area.y + dy
            for dx in range(area.width):
                x = area.x + dx
                p = self._drops[dx].pos

                is_head = dy == p
                is_rand = rng.gen_bool(MUTATION_PROBABILITY)
                idx = buf.index_of(x, y)

                if is_head or is_rand:
                    rx = area.x + rng.gen_range(0, area.width)
                    ry = area.y + rng.gen_range(0, area.height)
                    buf.swap_symbols(idx, buf.index_of(rx, ry))

                v = sample_range(p - tail, p, dy)
                cell = buf.content[idx]
                cell.fg = grad.sample(v) if v is not None else NAMED_BLACK
