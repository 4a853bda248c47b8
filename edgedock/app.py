"""Application entry point -- builds the panel, starts the edge loop, runs GTK."""

from __future__ import annotations

import faulthandler
import signal

# Print Python traceback on SIGSEGV/SIGABRT/SIGFPE to stderr.
# Also dumps on SIGUSR1 for on-demand debugging (kill -USR1 <pid>).
faulthandler.enable()
faulthandler.register(signal.SIGUSR1)

import gi  # noqa: E402

gi.require_version("Gtk", "3.0")
from gi.repository import GLib, Gtk  # noqa: E402

from edgedock.core.config import Config, SamplerKind  # noqa: E402
from edgedock.core.policy import build_state_machine  # noqa: E402
from edgedock.core.scheduler import TickScheduler  # noqa: E402
from edgedock.log import get_logger  # noqa: E402
from edgedock.platform.gtk_port import GtkWindowPort, make_sampler  # noqa: E402
from edgedock.ui.autohide import EdgeAutoHideController  # noqa: E402
from edgedock.ui.panel_window import PanelWindow  # noqa: E402

log = get_logger(name="app")


def build_controller(config: Config, window: PanelWindow) -> EdgeAutoHideController:
    """Wire sampler, state machine, scheduler and port for `window`."""
    machine = build_state_machine(config)
    return EdgeAutoHideController(
        sampler=make_sampler(window, SamplerKind(config.sampler)),
        port=GtkWindowPort(window),
        machine=machine,
        scheduler=TickScheduler(config.tick_interval),
        settle_delay_s=config.settle_delay_s,
    )


def main() -> None:
    """Entry point for the edge dock."""
    config = Config.load()
    window = PanelWindow(config.geometry)
    window.realize()
    window.place_left_center()

    controller = build_controller(config, window)
    # Slide starts docked open and slides away; discrete starts hidden
    if controller.machine.shown:
        window.show_all()

    def _quit() -> bool:
        controller.stop()
        Gtk.main_quit()
        return False

    # Graceful shutdown on SIGINT/SIGTERM
    GLib.unix_signal_add(GLib.PRIORITY_HIGH, signal.SIGINT, _quit)
    GLib.unix_signal_add(GLib.PRIORITY_HIGH, signal.SIGTERM, _quit)

    log.info(
        "edge dock: policy=%s threshold=%d interval=%.4fs",
        config.policy,
        controller.machine.threshold,
        controller.scheduler.interval,
    )
    controller.start()
    Gtk.main()
    controller.stop()


if __name__ == "__main__":
    main()
