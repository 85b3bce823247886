from __future__ import annotations

import sys
from importlib import metadata
from pathlib import Path
from typing import Optional

import typer
from rich.table import Table

from . import __version__
from .config import ConfigError, RainConfig, load_config
from .ui.theme import THEMES
from .util.console import console, error, setup_logging

# Create the top-level Typer app
app = typer.Typer(
    name="digital-rain",
    help="Digital rain in your terminal. Press any key to exit.",
    add_completion=False,
)


def _version_string() -> str:
    try:
        return metadata.version("digital-rain")
    except metadata.PackageNotFoundError:  # pragma: no cover
        return __version__


def _resolve_config(path: Optional[Path], **overrides) -> RainConfig:
    try:
        return load_config(path).with_overrides(**overrides)
    except ConfigError as exc:
        error(f"Invalid configuration: {exc}")
        raise typer.Exit(code=2)


@app.callback(invoke_without_command=True)
def _main(
    ctx: typer.Context,
    tail: Optional[int] = typer.Option(
        None, "--tail", "-t", help="Rows of fading tail behind each head.", show_default=False
    ),
    theme: Optional[str] = typer.Option(
        None, "--theme", help="Colour theme (see `digital-rain themes`).", show_default=False
    ),
    charset: Optional[str] = typer.Option(
        None, "--charset", help="Glyphs to rain, one per character.", show_default=False
    ),
    frame_ms: Optional[int] = typer.Option(
        None, "--frame-ms", help="Frame period in milliseconds.", show_default=False
    ),
    seed: Optional[int] = typer.Option(
        None, "--seed", help="Seed the random source for reproducible rain.", show_default=False
    ),
    config_path: Optional[Path] = typer.Option(
        None, "--config", help="Read settings from this TOML file.", show_default=False
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging on stderr."),
    version: Optional[bool] = typer.Option(
        None, "--version", help="Show digital-rain version and exit.", is_eager=True
    ),
) -> None:
    """
    Run the rain until a key is pressed. Settings come from defaults,
    the config file, DIGITAL_RAIN_* variables and finally these flags.
    """
    if version:
        typer.echo(f"digital-rain {_version_string()}")
        raise typer.Exit(code=0)

    setup_logging(verbose)
    if ctx.invoked_subcommand:
        return

    cfg = _resolve_config(
        config_path, tail=tail, theme=theme, charset=charset, frame_ms=frame_ms, seed=seed
    )
    ctx.obj = cfg

    # imported late so `themes` and `--version` never touch the terminal layer
    from .ui.screen import run_rain

    try:
        run_rain(cfg, console=console)
    except OSError as exc:
        error(f"Terminal error: {exc}")
        raise typer.Exit(code=1)


@app.command("themes", help="List the built-in colour themes.")
def themes_cmd() -> None:
    table = Table(title="Themes", header_style="bold green")
    table.add_column("Name", style="bold")
    table.add_column("Description")
    table.add_column("Stops")
    for t in THEMES.values():
        stops = ", ".join(f"{p:g}:#{r:02x}{g:02x}{b:02x}" for p, c in t.stops for r, g, b in [c.to_rgb24()])
        table.add_row(t.name, t.description, stops)
    console.print(table)


def main() -> None:
    app()


if __name__ == "__main__":
    # When run as a module: python -m digital_rain
    sys.exit(main())
