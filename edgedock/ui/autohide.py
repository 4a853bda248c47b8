"""Edge auto-hide controller -- the per-tick sample/decide/apply pipeline.

    ┌─────────┐  sample   ┌──────────────────┐  action   ┌────────────┐
    │ Sampler │──────────>│ EdgeStateMachine │──────────>│ WindowPort │
    └─────────┘           └──────────────────┘           └────────────┘
         ^                        ^                            │
         │                        └──── window position ───────┘
    TickScheduler (worker thread, one call to tick() per tick)

Window operations are best-effort: a failure is logged and that tick's
visual effect is skipped. Visibility is only recorded once the port call
succeeded, so the next tick decides again from fresh samples.
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

from edgedock.core.edge import Action, ActionKind
from edgedock.core.geometry import Coordinate
from edgedock.log import get_logger
from edgedock.platform.port import WindowOperationFailed

log = get_logger(name="autohide")

if TYPE_CHECKING:
    from edgedock.core.edge import EdgeStateMachine
    from edgedock.core.scheduler import TickScheduler
    from edgedock.platform.port import Sampler, WindowPort

JOIN_TIMEOUT_S = 2.0


class EdgeAutoHideController:
    """Owns the tick loop that slides or toggles the docked panel."""

    def __init__(
        self,
        sampler: Sampler,
        port: WindowPort,
        machine: EdgeStateMachine,
        scheduler: TickScheduler,
        settle_delay_s: float = 0.0,
    ) -> None:
        self._sampler = sampler
        self._port = port
        self.machine = machine
        self.scheduler = scheduler
        self._settle_delay_s = settle_delay_s
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def tick(self) -> Action:
        """One loop iteration: sample, update, decide, apply."""
        sample = self._sampler.sample()
        try:
            window_position = self._port.get_position()
        except WindowOperationFailed as exc:
            log.warning("get_position failed: %s", exc)
            self.machine.update(sample)
            return Action.none()

        self.machine.update(sample, window_position)
        action = self.machine.decide(window_position)
        self.apply(action, window_position)
        return action

    def apply(self, action: Action, window_position: Coordinate) -> bool:
        """Carry out an action on the window. Returns True if anything changed."""
        if action.is_none:
            return False

        try:
            if action.kind in (ActionKind.SLIDE_IN, ActionKind.SLIDE_OUT):
                target_x = self.machine.geometry.clamp_x(window_position.x + action.delta)
                self._port.set_position(Coordinate(target_x, window_position.y))
                self.machine.track_offset(target_x)
                return True
            if action.kind == ActionKind.SHOW:
                if self.machine.shown:
                    return False
                self._port.show()
            elif action.kind == ActionKind.HIDE:
                if not self.machine.shown:
                    return False
                self._port.hide()
        except WindowOperationFailed as exc:
            log.warning("%s failed: %s", action.kind.value, exc)
            return False

        return self.machine.apply(action)

    def run(self, max_ticks: int | None = None) -> None:
        """Settle, then tick until stopped. Blocks the calling thread."""
        self.scheduler.delay(self._settle_delay_s)
        self.scheduler.run(self.tick, max_ticks=max_ticks)

    def start(self) -> None:
        """Run the loop on a daemon worker thread."""
        if self.running:
            return
        self._thread = threading.Thread(
            target=self.run, name="edgedock-tick", daemon=True
        )
        self._thread.start()
        log.debug("worker started")

    def stop(self) -> None:
        """Signal the loop to stop and wait briefly for the worker."""
        self.scheduler.stop()
        thread, self._thread = self._thread, None
        if thread is not None and thread is not threading.current_thread():
            thread.join(JOIN_TIMEOUT_S)
