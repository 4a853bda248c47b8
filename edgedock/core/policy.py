"""Decision policies -- turn debounced edge state into window actions.

Two strategies share one state machine:

    slide     The window moves by a fixed velocity each tick while the
              pointer holds the edge (after the debounce) and moves back
              out once the pointer passes the panel's right side. The
              window's x offset in [-W, 0] is the visibility state.

    discrete  The window is shown/hidden outright. Show after `threshold`
              edge samples, hide after `threshold` samples away from the
              edge with the pointer right of the panel.

Both compare exactly: x == 0 is "at edge", and the hide test is strict
(x == panel right side still counts as inside).
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from edgedock.core.config import Config, Policy
from edgedock.core.edge import Action, EdgeStateMachine, VisibilityState, is_at_edge


class DecisionPolicy(ABC):
    """Strategy deciding one tick's action from the machine's state."""

    initial_visibility: VisibilityState = VisibilityState.HIDDEN

    @abstractmethod
    def decide(self, machine: EdgeStateMachine) -> Action: ...


class SlidePolicy(DecisionPolicy):
    """Continuous slide: step toward visible/hidden by `velocity` per tick."""

    initial_visibility = VisibilityState.SHOWN

    def decide(self, machine: EdgeStateMachine) -> Action:
        sample = machine.sample
        window = machine.window_position
        if sample is None or window is None:
            return Action.none()

        geom = machine.geometry
        if (
            is_at_edge(sample)
            and machine.counters.edge_hits >= machine.threshold
            and sample.x <= window.x + geom.width
            and window.x < 0.0
        ):
            return Action.slide_in(geom.velocity)
        if sample.x > window.x + geom.width and window.x > geom.hidden_x:
            return Action.slide_out(geom.velocity)
        return Action.none()


class DiscretePolicy(DecisionPolicy):
    """Show/hide outright once a run of samples crosses the threshold."""

    def decide(self, machine: EdgeStateMachine) -> Action:
        sample = machine.sample
        if sample is None:
            return Action.none()

        counters = machine.counters
        if counters.edge_hits >= machine.threshold and not machine.shown:
            return Action.show()
        if (
            counters.outside_hits >= machine.threshold
            and machine.shown
            and sample.x > machine.geometry.width
        ):
            return Action.hide()
        return Action.none()


def make_policy(policy: Policy) -> DecisionPolicy:
    if policy == Policy.DISCRETE:
        return DiscretePolicy()
    return SlidePolicy()


def build_state_machine(config: Config) -> EdgeStateMachine:
    """State machine wired with the configured policy, geometry and threshold."""
    policy = make_policy(config.pol)
    return EdgeStateMachine(
        policy=policy,
        geometry=config.geometry,
        threshold=config.effective_threshold,
        visibility=policy.initial_visibility,
    )
