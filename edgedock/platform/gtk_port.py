"""GTK/Gdk implementations of the pointer sampler and window port.

The tick loop runs on its own thread, but GTK may only be touched from the
thread running the main loop. Every call below is therefore marshalled with
GLib.idle_add and the worker blocks until the main loop has run it:

    worker thread                    GTK main thread
    ─────────────                    ───────────────
    call_on_main(fn) ──idle_add──>   fn() runs between events
         │ wait(timeout)                 │
         <──────── done.set() ───────────┘

A call that does not complete within MAIN_CALL_TIMEOUT_S (main loop stalled
or already quit) counts as a failed call for that tick.
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING, Any, Callable

import gi

gi.require_version("Gtk", "3.0")
gi.require_version("Gdk", "3.0")
from gi.repository import Gdk, GLib  # noqa: E402

from edgedock.core.config import SamplerKind  # noqa: E402
from edgedock.core.geometry import Coordinate  # noqa: E402
from edgedock.log import get_logger  # noqa: E402
from edgedock.platform.port import Sampler, WindowOperationFailed, WindowPort  # noqa: E402

log = get_logger(name="gtk_port")

if TYPE_CHECKING:
    from gi.repository import Gtk

MAIN_CALL_TIMEOUT_S = 0.5


def call_on_main(func: Callable[..., Any], *args: Any, timeout: float = MAIN_CALL_TIMEOUT_S) -> Any:
    """Run `func(*args)` on the GTK main loop and return its result.

    Runs inline when already on the main thread. Exceptions raised by
    `func` are re-raised in the caller.
    """
    if threading.current_thread() is threading.main_thread():
        return func(*args)

    done = threading.Event()
    outcome: dict[str, Any] = {}

    def runner() -> bool:
        try:
            outcome["value"] = func(*args)
        except Exception as exc:
            outcome["error"] = exc
        finally:
            done.set()
        return False  # one-shot idle source

    GLib.idle_add(runner)
    if not done.wait(timeout):
        raise TimeoutError(f"main loop did not run {func!r} within {timeout}s")
    if "error" in outcome:
        raise outcome["error"]
    return outcome.get("value")


def _default_pointer(display: Gdk.Display | None) -> Gdk.Device | None:
    """Core pointer of the display's default seat, if there is one."""
    if display is None:
        return None
    seat = display.get_default_seat()
    if seat is None:
        return None
    return seat.get_pointer()


class SeatPointerSampler(Sampler):
    """Global pointer position from the default seat."""

    def __init__(self, display: Gdk.Display | None = None) -> None:
        self._display = display

    def _query(self) -> Coordinate | None:
        pointer = _default_pointer(self._display or Gdk.Display.get_default())
        if pointer is None:
            return None
        _screen, x, y = pointer.get_position()
        return Coordinate(float(x), float(y))

    def sample(self) -> Coordinate | None:
        try:
            return call_on_main(self._query)
        except Exception as exc:
            log.debug("pointer query failed: %s", exc)
            return None


class WindowCursorSampler(Sampler):
    """Pointer position relative to the managed window, moved to screen space.

    Adds the window origin to the window-local device position, so the
    result matches SeatPointerSampler even while the window sits off-screen.
    """

    def __init__(self, window: Gtk.Window) -> None:
        self._window = window

    def _query(self) -> Coordinate | None:
        gdk_window = self._window.get_window()
        if gdk_window is None:
            return None
        pointer = _default_pointer(self._window.get_display())
        if pointer is None:
            return None
        _child, local_x, local_y, _mask = gdk_window.get_device_position(pointer)
        origin_x, origin_y = self._window.get_position()
        return Coordinate(float(origin_x + local_x), float(origin_y + local_y))

    def sample(self) -> Coordinate | None:
        try:
            return call_on_main(self._query)
        except Exception as exc:
            log.debug("window cursor query failed: %s", exc)
            return None


def make_sampler(window: Gtk.Window, kind: SamplerKind) -> Sampler:
    if kind == SamplerKind.WINDOW:
        return WindowCursorSampler(window)
    return SeatPointerSampler(window.get_display())


class GtkWindowPort(WindowPort):
    """WindowPort over a Gtk.Window. GTK3 window positions are logical."""

    def __init__(self, window: Gtk.Window) -> None:
        self._window = window

    def _call(self, what: str, func: Callable[..., Any], *args: Any) -> Any:
        try:
            return call_on_main(func, *args)
        except Exception as exc:
            raise WindowOperationFailed(f"{what}: {exc}") from exc

    def get_position(self) -> Coordinate:
        x, y = self._call("get_position", self._window.get_position)
        return Coordinate(float(x), float(y))

    def set_position(self, position: Coordinate) -> None:
        self._call(
            "set_position",
            self._window.move,
            int(round(position.x)),
            int(round(position.y)),
        )

    def get_size(self) -> tuple[float, float]:
        w, h = self._call("get_size", self._window.get_size)
        return float(w), float(h)

    def get_scale_factor(self) -> int:
        return int(self._call("get_scale_factor", self._window.get_scale_factor))

    def show(self) -> None:
        self._call("show", self._window.show_all)

    def hide(self) -> None:
        self._call("hide", self._window.hide)
