# digital_rain/ui/theme.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple

from ..engine.rgb import BLACK, GREEN, RGB, WHITE
from ..engine.sampling import Gradient, Stop

# Short alphabet: digits, '=' and a handful of half-width katakana
DEFAULT_CHARSET = "8=ｱｲｳｷｸｵﾔﾃﾂﾕ"

# Katakana and symbols inspired by The Matrix film
MATRIX_CHARS = (
    "ﾊﾐﾑﾒﾓﾔﾕﾖﾗﾘﾙﾚﾛﾜｦﾝ"  # Common katakana
    "ｱｲｳｴｵｶｷｸｹｺｻｼｽｾｿﾀﾁﾂﾃﾄﾅﾆﾇﾈﾉ"  # Additional katakana
    "0123456789"            # Numerals for variety
)


@dataclass(frozen=True)
class Theme:
    name: str
    description: str
    stops: Tuple[Stop, ...]
    charset: str = DEFAULT_CHARSET

    def gradient(self) -> Gradient:
        return Gradient(self.stops)


def _tail(hue: RGB, head: RGB = WHITE) -> Tuple[Stop, ...]:
    # black at the end of the tail, full hue most of the way, white-hot head
    return ((0.0, BLACK), (0.8, hue), (1.0, head))


THEMES: Dict[str, Theme] = {
    t.name: t
    for t in (
        Theme("classic", "Green rain with a white head", _tail(GREEN)),
        Theme("amber", "Phosphor amber monitor", _tail(RGB(1.0, 0.69, 0.0), RGB(1.0, 0.95, 0.8))),
        Theme("ice", "Cold cyan fading to deep blue", ((0.0, BLACK), (0.5, RGB(0.0, 0.2, 0.6)), (0.85, RGB(0.3, 0.85, 1.0)), (1.0, WHITE))),
        Theme("crimson", "Red rain", _tail(RGB(0.85, 0.05, 0.1), RGB(1.0, 0.8, 0.8))),
        Theme("katakana", "Classic colours, full katakana alphabet", _tail(GREEN), MATRIX_CHARS),
    )
}

DEFAULT_THEME = "classic"


def get_theme(name: str) -> Theme:
    try:
        return THEMES[name.lower()]
    except KeyError:
        raise KeyError(f"unknown theme {name!r}; choose from {', '.join(sorted(THEMES))}") from None
