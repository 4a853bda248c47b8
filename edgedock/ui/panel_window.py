"""Panel window -- translucent HUD card docked to the left screen edge."""

from __future__ import annotations

from typing import TYPE_CHECKING

import cairo
import gi

gi.require_version("Gtk", "3.0")
gi.require_version("Gdk", "3.0")
from gi.repository import Gtk  # noqa: E402

from edgedock.core.geometry import Coordinate  # noqa: E402
from edgedock.log import get_logger  # noqa: E402
from edgedock.ui.hud import (  # noqa: E402
    draw_panel_background,
    left_center_position,
    leftmost_geometry,
)

log = get_logger(name="panel_window")

if TYPE_CHECKING:
    from edgedock.core.geometry import PanelGeometry


class PanelWindow(Gtk.Window):
    """Undecorated RGBA panel of fixed logical size.

    A POPUP (override-redirect) window, so the window manager leaves its
    position alone while it sits partly off-screen.
    """

    def __init__(self, geometry: PanelGeometry) -> None:
        super().__init__(type=Gtk.WindowType.POPUP)
        self.geometry = geometry
        self._setup_window()

    def _setup_window(self) -> None:
        self.set_title("Edge Dock")
        self.set_decorated(False)
        self.set_skip_taskbar_hint(True)
        self.set_skip_pager_hint(True)
        self.set_keep_above(True)
        self.set_app_paintable(True)
        self.set_resizable(False)

        screen = self.get_screen()
        visual = screen.get_rgba_visual()
        if visual is None:
            log.warning("no RGBA visual; panel will be opaque")
            visual = screen.get_system_visual()
        self.set_visual(visual)

        width, height = int(self.geometry.width), int(self.geometry.height)
        self.set_size_request(width, height)
        self.resize(width, height)
        self.connect("draw", self._on_draw)

    def place_left_center(self) -> Coordinate:
        """Move against the left screen edge, centered on that edge's monitor."""
        display = self.get_display()
        geometries = [
            display.get_monitor(i).get_geometry() for i in range(display.get_n_monitors())
        ]
        geom = leftmost_geometry(geometries)
        pos = left_center_position(geom.y, geom.height, self.geometry.height)
        self.move(int(pos.x), int(pos.y))
        log.debug("placed at %s", pos)
        return pos

    def _on_draw(self, _widget: Gtk.Widget, cr: cairo.Context) -> bool:
        alloc = self.get_allocation()
        draw_panel_background(cr, alloc.width, alloc.height)
        return False
