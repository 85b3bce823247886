# digital_rain/ui/screen.py

from __future__ import annotations

import logging
import os
import select
import sys
import threading
import time
from typing import IO, Optional

from rich.color import Color
from rich.console import Console
from rich.live import Live
from rich.style import Style
from rich.text import Text

from ..config import RainConfig
from ..engine.random_source import RandomSource
from ..engine.rgb import RGB
from ..engine.surface import Buffer, Foreground, Rect
from ..engine.widget import MatrixWidget

if os.name == "nt":
    import msvcrt
else:
    import termios
    import tty

logger = logging.getLogger(__name__)


def _style_for(fg: Foreground) -> Style:
    if isinstance(fg, RGB):
        return Style(color=Color.from_rgb(*fg.to_rgb24()))
    return Style(color=fg)


def buffer_to_text(buf: Buffer) -> Text:
    """
    Convert a painted buffer into one Rich Text, emitting a single style
    run per stretch of equal foreground instead of one span per cell.
    """
    text = Text(no_wrap=True, overflow="crop", end="")
    for row_index, row in enumerate(buf.rows()):
        if row_index:
            text.append("\n")
        run = []
        current: Optional[Foreground] = None
        for cell in row:
            if cell.fg != current and run:
                text.append("".join(run), style=_style_for(current))
                run.clear()
            current = cell.fg
            run.append(cell.symbol)
        if run:
            text.append("".join(run), style=_style_for(current))
    return text


def build_widget(config: RainConfig) -> MatrixWidget:
    return MatrixWidget(
        tail=config.tail,
        alphabet=config.alphabet(),
        gradient=config.build_gradient(),
        rng=RandomSource(config.seed),
    )


class KeyWatch:
    """
    Poll for a key press while the rain runs, doubling as the frame clock.

    On a POSIX tty the input is switched to cbreak mode: line buffering
    and echo go off but output processing stays on, so the bare newlines
    Rich writes between rows still return the cursor to column 0. The
    previous mode is restored on exit.
    """

    def __init__(self, stop: threading.Event, stream: Optional[IO] = None, enabled: bool = True) -> None:
        self.stop = stop
        self.stream = stream if stream is not None else sys.stdin
        self.enabled = enabled
        self._fd: Optional[int] = None
        self._saved = None

    def __enter__(self) -> "KeyWatch":
        if not self.enabled or os.name == "nt":
            return self
        try:
            if not self.stream.isatty():
                return self
            fd = self.stream.fileno()
            self._saved = termios.tcgetattr(fd)
            tty.setcbreak(fd, termios.TCSANOW)
        except (AttributeError, ValueError, OSError, termios.error) as exc:
            logger.debug("key input unavailable: %r", exc)
            self._saved = None
            return self
        self._fd = fd
        return self

    def __exit__(self, *exc_info) -> None:
        if self._fd is not None and self._saved is not None:
            termios.tcsetattr(self._fd, termios.TCSADRAIN, self._saved)
        self._fd = None
        self._saved = None

    def wait(self, timeout: float) -> bool:
        """Block up to `timeout` seconds; True once a key arrived or stop was set."""
        if self.stop.is_set():
            return True
        if self._fd is not None:
            ready, _, _ = select.select([self._fd], [], [], timeout)
            if ready:
                os.read(self._fd, 1024)
                self.stop.set()
        elif self.enabled and os.name == "nt":
            deadline = time.monotonic() + timeout
            while not self.stop.is_set():
                if msvcrt.kbhit():
                    msvcrt.getwch()
                    self.stop.set()
                    break
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    break
                self.stop.wait(min(0.01, remaining))
        else:
            self.stop.wait(timeout)
        return self.stop.is_set()


def run_rain(
    config: RainConfig,
    console: Optional[Console] = None,
    stop_event: Optional[threading.Event] = None,
    max_frames: Optional[int] = None,
    wait_for_key: bool = True,
    key_input: Optional[IO] = None,
) -> int:
    """
    Take over the terminal and animate until a key is pressed.

    `key_input` defaults to stdin. Returns the number of frames drawn.
    """
    console = console or Console()
    stop = stop_event or threading.Event()
    widget = build_widget(config)
    period = config.frame_seconds

    width, height = console.size
    buf = Buffer.empty(Rect(0, 0, width, height))
    frames = 0
    logger.info("starting rain %dx%d, tail=%d, frame=%dms", width, height, config.tail, config.frame_ms)

    with KeyWatch(stop, key_input, enabled=wait_for_key) as keys, Live(
        "", console=console, screen=True, auto_refresh=False, transient=False
    ) as live:
        console.show_cursor(False)
        try:
            # wait() doubles as the frame clock and the input poll
            while not keys.wait(period if frames else 0):
                width, height = console.size
                if (width, height) != (buf.area.width, buf.area.height):
                    buf.resize(Rect(0, 0, width, height))

                widget.render(buf.area, buf)
                live.update(buffer_to_text(buf), refresh=True)

                frames += 1
                if max_frames is not None and frames >= max_frames:
                    break
        except KeyboardInterrupt:
            logger.debug("interrupted")
        finally:
            stop.set()
            console.show_cursor(True)

    logger.info("rain stopped after %d frames", frames)
    return frames
