"""Edge detection state machine -- debounce counters, visibility, decisions."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import TYPE_CHECKING

from edgedock.core.geometry import Coordinate, PanelGeometry
from edgedock.log import get_logger

log = get_logger(name="edge")

if TYPE_CHECKING:
    from edgedock.core.policy import DecisionPolicy

# Pointer x when pinned against the left screen edge
EDGE_X = 0.0


class VisibilityState(enum.Enum):
    HIDDEN = "hidden"
    SHOWN = "shown"


class ActionKind(enum.Enum):
    NONE = "none"
    SLIDE_IN = "slide_in"
    SLIDE_OUT = "slide_out"
    SHOW = "show"
    HIDE = "hide"


@dataclass(frozen=True)
class Action:
    """One tick's decision. `delta` is the x step for slide actions."""

    kind: ActionKind
    delta: float = 0.0

    @classmethod
    def none(cls) -> Action:
        return cls(ActionKind.NONE)

    @classmethod
    def slide_in(cls, velocity: float) -> Action:
        return cls(ActionKind.SLIDE_IN, abs(velocity))

    @classmethod
    def slide_out(cls, velocity: float) -> Action:
        return cls(ActionKind.SLIDE_OUT, -abs(velocity))

    @classmethod
    def show(cls) -> Action:
        return cls(ActionKind.SHOW)

    @classmethod
    def hide(cls) -> Action:
        return cls(ActionKind.HIDE)

    @property
    def is_none(self) -> bool:
        return self.kind == ActionKind.NONE


@dataclass
class DebounceCounters:
    """Consecutive-sample counters. At most one is non-zero after a sample."""

    edge_hits: int = 0
    outside_hits: int = 0

    def record(self, x: float) -> None:
        if x == EDGE_X:
            self.edge_hits += 1
            self.outside_hits = 0
        else:
            self.edge_hits = 0
            self.outside_hits += 1


def is_at_edge(sample: Coordinate) -> bool:
    """True when the pointer is pinned at the left screen edge."""
    return sample.x == EDGE_X


class EdgeStateMachine:
    """Owned per-loop state: counters, visibility and the latest sample.

    Mutated only by the tick loop. `update` folds in one sample, `decide`
    asks the configured policy what to do with the managed window, and
    `apply` records a successful show/hide.
    """

    def __init__(
        self,
        policy: DecisionPolicy,
        geometry: PanelGeometry,
        threshold: int,
        visibility: VisibilityState = VisibilityState.HIDDEN,
    ) -> None:
        self.policy = policy
        self.geometry = geometry
        self.threshold = threshold
        self.visibility = visibility
        self.counters = DebounceCounters()
        self.sample: Coordinate | None = None
        self.window_position: Coordinate | None = None

    @property
    def shown(self) -> bool:
        return self.visibility == VisibilityState.SHOWN

    def update(
        self, sample: Coordinate | None, window_position: Coordinate | None = None
    ) -> None:
        """Fold one pointer sample into the counters.

        A missing sample is "no new information": counters are untouched,
        but it replaces the previous sample so stale data never drives a
        decision.
        """
        self.sample = sample
        if window_position is not None:
            self.window_position = window_position
        if sample is None:
            return
        self.counters.record(sample.x)

    def decide(self, window_position: Coordinate | None = None) -> Action:
        if window_position is not None:
            self.window_position = window_position
        if self.sample is None:
            return Action.none()
        return self.policy.decide(self)

    def apply(self, action: Action) -> bool:
        """Record a show/hide. Returns False when it changes nothing."""
        if action.kind == ActionKind.SHOW:
            if self.shown:
                return False
            self.visibility = VisibilityState.SHOWN
        elif action.kind == ActionKind.HIDE:
            if not self.shown:
                return False
            self.visibility = VisibilityState.HIDDEN
        else:
            return False
        log.debug(
            "visibility -> %s (edge_hits=%d outside_hits=%d)",
            self.visibility.value,
            self.counters.edge_hits,
            self.counters.outside_hits,
        )
        return True

    def track_offset(self, window_x: float) -> None:
        """Derive visibility from the slide offset at either end of travel."""
        if self.geometry.is_fully_shown(window_x):
            visibility = VisibilityState.SHOWN
        elif self.geometry.is_fully_hidden(window_x):
            visibility = VisibilityState.HIDDEN
        else:
            return
        if visibility != self.visibility:
            self.visibility = visibility
            log.debug("slide reached %s at x=%.1f", visibility.value, window_x)
