# digital_rain/config.py

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from .engine.rgb import RGB
from .engine.sampling import Gradient, Stop
from .ui.theme import DEFAULT_CHARSET, DEFAULT_THEME, THEMES, get_theme

logger = logging.getLogger(__name__)

ENV_PREFIX = "DIGITAL_RAIN_"
ENV_CONFIG_PATH = ENV_PREFIX + "CONFIG"
DEFAULT_CONFIG_PATH = Path("~/.config/digital-rain/config.toml")


class ConfigError(ValueError):
    """Invalid configuration value from a file, the environment or the CLI."""


@dataclass
class RainConfig:
    tail: int = 15
    theme: str = DEFAULT_THEME
    charset: Optional[str] = None
    frame_ms: int = 60
    seed: Optional[int] = None
    gradient: Optional[List[Stop]] = field(default=None)

    def validate(self) -> "RainConfig":
        if self.tail < 1:
            raise ConfigError(f"tail must be at least 1 (got {self.tail})")
        if self.frame_ms < 1:
            raise ConfigError(f"frame_ms must be at least 1 (got {self.frame_ms})")
        if self.charset is not None and not self.charset:
            raise ConfigError("charset must contain at least one character")
        if self.theme.lower() not in THEMES:
            raise ConfigError(
                f"unknown theme {self.theme!r}; choose from {', '.join(sorted(THEMES))}"
            )
        if self.gradient is not None:
            positions = [p for p, _ in self.gradient]
            if any(b < a for a, b in zip(positions, positions[1:])):
                raise ConfigError("gradient positions must be non-decreasing")
        return self

    def alphabet(self) -> str:
        if self.charset:
            return self.charset
        return get_theme(self.theme).charset or DEFAULT_CHARSET

    def build_gradient(self) -> Gradient:
        if self.gradient is not None:
            return Gradient(self.gradient)
        return get_theme(self.theme).gradient()

    @property
    def frame_seconds(self) -> float:
        return self.frame_ms / 1000.0

    def with_overrides(self, **overrides: Any) -> "RainConfig":
        """Return a copy with every non-None override applied, validated."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes).validate()


def _int(value: Any, name: str) -> int:
    if isinstance(value, bool):
        raise ConfigError(f"{name} must be an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{name} must be an integer, got {value!r}") from None


def _parse_gradient(raw: Any) -> List[Stop]:
    if not isinstance(raw, list):
        raise ConfigError("gradient must be a list of [position, \"#rrggbb\"] pairs")
    stops: List[Stop] = []
    for entry in raw:
        if not isinstance(entry, (list, tuple)) or len(entry) != 2:
            raise ConfigError(f"bad gradient stop {entry!r}")
        pos, colour = entry
        if isinstance(pos, bool) or not isinstance(pos, (int, float)):
            raise ConfigError(f"gradient position must be a number, got {pos!r}")
        try:
            stops.append((float(pos), RGB.from_hex(str(colour))))
        except ValueError as exc:
            raise ConfigError(f"bad gradient colour {colour!r}: {exc}") from None
    return stops


def _from_mapping(data: Dict[str, Any], source: str) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for key, value in data.items():
        if key in ("tail", "frame_ms", "seed"):
            out[key] = _int(value, f"{source}: {key}")
        elif key in ("theme", "charset"):
            out[key] = str(value)
        elif key == "gradient":
            out[key] = _parse_gradient(value)
        else:
            logger.warning("%s: ignoring unknown key %r", source, key)
    return out


def _config_path(path: Optional[Path]) -> Tuple[Path, bool]:
    """Return the file to read and whether it was asked for explicitly."""
    if path is not None:
        return Path(path).expanduser(), True
    env = os.getenv(ENV_CONFIG_PATH)
    if env:
        return Path(env).expanduser(), True
    return DEFAULT_CONFIG_PATH.expanduser(), False


def _read_file(path: Path, required: bool) -> Dict[str, Any]:
    if not path.is_file():
        if required:
            raise ConfigError(f"config file not found: {path}")
        return {}
    try:
        with path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"{path}: {exc}") from None
    logger.debug("loaded config from %s", path)
    # allow either a top-level table or a [rain] section
    section = data.get("rain", data)
    if not isinstance(section, dict):
        raise ConfigError(f"{path}: [rain] must be a table")
    return _from_mapping(section, str(path))


def _read_env() -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for key in ("tail", "frame_ms", "seed"):
        raw = os.getenv(ENV_PREFIX + key.upper())
        if raw:
            out[key] = _int(raw.strip(), ENV_PREFIX + key.upper())
    for key in ("theme", "charset"):
        raw = os.getenv(ENV_PREFIX + key.upper())
        if raw:
            out[key] = raw
    return out


def load_config(path: Optional[Path] = None) -> RainConfig:
    """
    Defaults, then the TOML file, then DIGITAL_RAIN_* environment
    variables. CLI flags are applied on top by the caller.
    """
    cfg_path, required = _config_path(path)
    values = _read_file(cfg_path, required)
    values.update(_read_env())
    return RainConfig(**values).validate()
