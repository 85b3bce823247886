# digital_rain/util/console.py

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

console = Console()
err_console = Console(stderr=True)


def error(msg: str) -> None:
    err_console.print(f"[bold red]✗[/] {msg}")

def setup_logging(verbose: bool = False) -> None:
    """
    Route `logging` through Rich on stderr. Quiet by default since the
    rain owns the screen; `--verbose` turns on debug output.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    root = logging.getLogger("digital_rain")
    root.handlers[:] = [
        RichHandler(console=err_console, show_path=False, rich_tracebacks=verbose)
    ]
    root.setLevel(level)
    root.propagate = False
