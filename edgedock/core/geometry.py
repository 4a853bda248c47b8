"""Coordinate and panel geometry types (logical screen units)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple

PANEL_WIDTH = 180.0
PANEL_HEIGHT = 800.0
# Five ticks from fully hidden to fully shown
SLIDE_STEPS = 5


class Coordinate(NamedTuple):
    """Point in logical (scale-independent) screen coordinates."""

    x: float
    y: float


@dataclass(frozen=True)
class PanelGeometry:
    """Fixed panel dimensions and per-tick slide step."""

    width: float = PANEL_WIDTH
    height: float = PANEL_HEIGHT
    velocity: float = PANEL_WIDTH / SLIDE_STEPS

    @property
    def hidden_x(self) -> float:
        """Window x when the panel sits fully off the left edge."""
        return -self.width

    def clamp_x(self, x: float) -> float:
        """Clamp a slide target to [-width, 0]."""
        return max(self.hidden_x, min(0.0, x))

    def is_fully_shown(self, window_x: float) -> bool:
        return window_x >= 0.0

    def is_fully_hidden(self, window_x: float) -> bool:
        return window_x <= self.hidden_x
