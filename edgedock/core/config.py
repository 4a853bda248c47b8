"""Configuration loading, saving, and defaults for the edge dock."""

from __future__ import annotations

import enum
import json
import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

from edgedock.core.geometry import PANEL_HEIGHT, PANEL_WIDTH, SLIDE_STEPS, PanelGeometry

DEFAULT_CONFIG_DIR = (
    Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")) / "edgedock"
)
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "edgedock.json"


class Policy(str, enum.Enum):
    """How the panel reacts to the pointer at the edge."""

    SLIDE = "slide"  # step the window by `velocity` every tick
    DISCRETE = "discrete"  # toggle window visibility


class SamplerKind(str, enum.Enum):
    """Pointer acquisition strategy."""

    SEAT = "seat"  # global seat pointer query
    WINDOW = "window"  # window-local cursor position, translated to screen


# Debounce threshold and tick rate per policy:
# slide    -- 15 ticks at 60 Hz ~ 250 ms
# discrete --  4 ticks at 15 Hz ~ 267 ms
POLICY_DEFAULTS: dict[Policy, tuple[int, int]] = {
    Policy.SLIDE: (15, 60),
    Policy.DISCRETE: (4, 15),
}


@dataclass
class Config:
    """Edge dock configuration with sensible defaults."""

    # Decision policy: "slide" or "discrete"
    policy: str = "slide"
    # Panel size in logical pixels
    panel_width: float = PANEL_WIDTH
    panel_height: float = PANEL_HEIGHT
    # Distance moved per tick by the slide policy (0 = width / 5)
    velocity: float = 0.0
    # Consecutive samples required before a transition (0 = policy default)
    threshold: int = 0
    # Polling rate in Hz (0 = policy default)
    tick_hz: int = 0
    # Pointer acquisition strategy: "seat" or "window"
    sampler: str = "seat"
    # Seconds to wait after placing the window before polling starts
    settle_delay_s: float = 1.0

    @property
    def pol(self) -> Policy:
        """Policy as enum."""
        return Policy(self.policy)

    @property
    def geometry(self) -> PanelGeometry:
        velocity = self.velocity if self.velocity > 0 else self.panel_width / SLIDE_STEPS
        return PanelGeometry(
            width=self.panel_width, height=self.panel_height, velocity=velocity
        )

    @property
    def effective_threshold(self) -> int:
        if self.threshold > 0:
            return self.threshold
        return POLICY_DEFAULTS[self.pol][0]

    @property
    def tick_interval(self) -> float:
        """Seconds per tick."""
        hz = self.tick_hz if self.tick_hz > 0 else POLICY_DEFAULTS[self.pol][1]
        return 1.0 / hz

    def __post_init__(self) -> None:
        self._path: Path = DEFAULT_CONFIG_FILE

    @classmethod
    def load(cls, path: Path | str | None = None) -> Config:
        """Load config from JSON file, falling back to defaults for missing keys."""
        path = Path(path) if path else DEFAULT_CONFIG_FILE
        if not path.exists():
            config = cls()
            config._path = path
            config.save(path)
            return config

        with open(path) as f:
            data: dict[str, Any] = json.load(f)

        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in data.items() if k in valid_fields}
        config = cls(**filtered)
        config._path = path
        # Unknown enum values fall back to defaults
        try:
            Policy(config.policy)
        except ValueError:
            config.policy = Policy.SLIDE.value
        try:
            SamplerKind(config.sampler)
        except ValueError:
            config.sampler = SamplerKind.SEAT.value
        return config

    def save(self, path: Path | str | None = None) -> None:
        """Save config to JSON file."""
        path = Path(path) if path else self._path
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(asdict(self), f, indent=2)
            f.write("\n")
