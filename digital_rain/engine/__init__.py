from .random_source import RandomSource
from .rgb import BLACK, BLUE, GREEN, RED, RGB, WHITE
from .sampling import Gradient, sample_range
from .streams import FRAME_PERIOD, MAX_SPEED, Raindrop, advance_streams, spawn_streams
from .surface import NAMED_BLACK, Buffer, Cell, Rect
from .widget import MUTATION_PROBABILITY, MatrixWidget

__all__ = [
    "BLACK",
    "BLUE",
    "Buffer",
    "Cell",
    "FRAME_PERIOD",
    "GREEN",
    "Gradient",
    "MAX_SPEED",
    "MUTATION_PROBABILITY",
    "MatrixWidget",
    "NAMED_BLACK",
    "RED",
    "RGB",
    "RandomSource",
    "Raindrop",
    "Rect",
    "WHITE",
    "advance_streams",
    "sample_range",
    "spawn_streams",
]
