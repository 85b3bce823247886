# digital_rain/engine/rgb.py

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import ClassVar, Tuple


def _to_u8(channel: float) -> int:
    """Truncate `channel * 255` toward zero and saturate into 0..255."""
    if math.isnan(channel):
        return 0
    return int(max(0.0, min(255.0, channel * 255.0)))


@dataclass(frozen=True)
class RGB:
    """
    A colour with three linear float channels, nominally in [0, 1].
    """

    r: float
    g: float
    b: float

    BLACK: ClassVar["RGB"]
    WHITE: ClassVar["RGB"]
    RED: ClassVar["RGB"]
    GREEN: ClassVar["RGB"]
    BLUE: ClassVar["RGB"]

    def lerp(self, other: "RGB", w: float) -> "RGB":
        """
        Blend two colours: `self` gets weight `w`, `other` gets `1 - w`.
        """
        x = 1.0 - w
        return RGB(
            self.r * w + other.r * x,
            self.g * w + other.g * x,
            self.b * w + other.b * x,
        )

    def to_rgb24(self) -> Tuple[int, int, int]:
        return _to_u8(self.r), _to_u8(self.g), _to_u8(self.b)

    @classmethod
    def from_hex(cls, value: str) -> "RGB":
        """Parse `#rrggbb` (leading '#' optional)."""
        text = value.strip().lstrip("#")
        if len(text) != 6:
            raise ValueError(f"expected a #rrggbb colour, got {value!r}")
        r, g, b = (int(text[i : i + 2], 16) for i in (0, 2, 4))
        return cls(r / 255.0, g / 255.0, b / 255.0)


RGB.BLACK = RGB(0.0, 0.0, 0.0)
RGB.WHITE = RGB(1.0, 1.0, 1.0)
RGB.RED = RGB(1.0, 0.0, 0.0)
RGB.GREEN = RGB(0.0, 1.0, 0.0)
RGB.BLUE = RGB(0.0, 0.0, 1.0)

BLACK = RGB.BLACK
WHITE = RGB.WHITE
RED = RGB.RED
GREEN = RGB.GREEN
BLUE = RGB.BLUE
