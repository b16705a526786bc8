# loom/config.py
# Host configuration: defaults < LOOM_* environment variables < CLI flags.

from __future__ import annotations
import os
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Mapping, Optional

DISPLAYS = ("window", "terminal", "none")

DEFAULT_DISPLAY = "window"
DEFAULT_CELL_SIZE = 20      # pixels per cell in the canvas window
DEFAULT_PACING_MS = 1.0     # pause after each commit so the window can repaint

ENV_VARS = {
    "display": "LOOM_DISPLAY",
    "cell_size": "LOOM_CELL_SIZE",
    "pacing_ms": "LOOM_PACING_MS",
    "seed": "LOOM_SEED",
    "max_steps": "LOOM_MAX_STEPS",
    "log_level": "LOOM_LOG",
}


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class LoomConfig:
    display: str = DEFAULT_DISPLAY
    cell_size: int = DEFAULT_CELL_SIZE
    pacing_ms: float = DEFAULT_PACING_MS
    seed: Optional[int] = None
    max_steps: Optional[int] = None
    log_level: Optional[str] = None

    def __post_init__(self):
        if self.display not in DISPLAYS:
            raise ConfigError(f"display must be one of {', '.join(DISPLAYS)}, got {self.display!r}")
        if self.cell_size < 1:
            raise ConfigError(f"cell_size must be positive, got {self.cell_size}")
        if self.pacing_ms < 0:
            raise ConfigError(f"pacing_ms must not be negative, got {self.pacing_ms}")
        if self.max_steps is not None and self.max_steps < 1:
            raise ConfigError(f"max_steps must be positive, got {self.max_steps}")

    @property
    def pacing(self) -> float:
        """Pacing in seconds; a headless run never sleeps."""
        if self.display == "none":
            return 0.0
        return self.pacing_ms / 1000.0

    def merged(self, overrides: Mapping[str, Any]) -> "LoomConfig":
        """Return a copy with every non-None override applied."""
        known = {f.name for f in fields(self)}
        changes = {k: v for k, v in overrides.items() if k in known and v is not None}
        return replace(self, **changes)


def _coerce(name: str, raw: str) -> Any:
    raw = raw.strip()
    try:
        if name in ("cell_size", "seed", "max_steps"):
            return int(raw)
        if name == "pacing_ms":
            return float(raw)
    except ValueError as e:
        raise ConfigError(f"{ENV_VARS[name]}: expected a number, got {raw!r}") from e
    if name == "display":
        return raw.lower()
    return raw


def config_from_env(environ: Optional[Mapping[str, str]] = None) -> LoomConfig:
    env = os.environ if environ is None else environ
    values: Dict[str, Any] = {}
    for name, var in ENV_VARS.items():
        raw = env.get(var)
        if raw is not None and raw.strip():
            values[name] = _coerce(name, raw)
    return LoomConfig().merged(values)
