"""HUD card drawing and placement math for the panel window."""

from __future__ import annotations

import math
from typing import Any, Sequence

import cairo

from edgedock.core.edge import EDGE_X
from edgedock.core.geometry import Coordinate

CORNER_RADIUS = 16.0
# Dark translucent fill with a faint inner stroke
FILL_RGBA = (0.11, 0.11, 0.13, 0.82)
STROKE_RGBA = (1.0, 1.0, 1.0, 0.12)


def rounded_rect(
    cr: cairo.Context,
    x: float,
    y: float,
    width: float,
    height: float,
    radius: float,
) -> None:
    """Rounded rectangle path, radius clamped to half the shorter side."""
    radius = max(0.0, min(radius, width / 2, height / 2))
    cr.new_sub_path()
    cr.arc(x + width - radius, y + radius, radius, -math.pi / 2, 0)
    cr.arc(x + width - radius, y + height - radius, radius, 0, math.pi / 2)
    cr.arc(x + radius, y + height - radius, radius, math.pi / 2, math.pi)
    cr.arc(x + radius, y + radius, radius, math.pi, 3 * math.pi / 2)
    cr.close_path()


def draw_panel_background(cr: cairo.Context, width: float, height: float) -> None:
    """Clear to transparent, then paint the HUD card."""
    cr.save()
    cr.set_operator(cairo.OPERATOR_SOURCE)
    cr.set_source_rgba(0, 0, 0, 0)
    cr.paint()
    cr.restore()

    rounded_rect(cr, 0.5, 0.5, width - 1, height - 1, CORNER_RADIUS)
    cr.set_source_rgba(*FILL_RGBA)
    cr.fill_preserve()
    cr.set_source_rgba(*STROKE_RGBA)
    cr.set_line_width(1.0)
    cr.stroke()


def leftmost_geometry(geometries: Sequence[Any]) -> Any:
    """Monitor rectangle holding the screen's left edge (smallest x, then y)."""
    return min(geometries, key=lambda g: (g.x, g.y))


def left_center_position(monitor_y: float, monitor_h: float, panel_h: float) -> Coordinate:
    """Window origin against the left screen edge, vertically centered.

    x is always the screen edge the pointer is tested against, never a work
    area offset; the slide travel [-W, 0] is measured from it.
    """
    return Coordinate(EDGE_X, monitor_y + (monitor_h - panel_h) / 2)
