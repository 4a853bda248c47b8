"""Tests for the slide and discrete decision policies."""

import pytest

from edgedock.core.config import Config, Policy
from edgedock.core.edge import Action, ActionKind, EdgeStateMachine, VisibilityState
from edgedock.core.geometry import Coordinate, PanelGeometry
from edgedock.core.policy import (
    DiscretePolicy,
    SlidePolicy,
    build_state_machine,
    make_policy,
)

EDGE = Coordinate(0.0, 400.0)
HIDDEN_WINDOW = Coordinate(-180.0, 140.0)
OPEN_WINDOW = Coordinate(0.0, 140.0)


def _slide(threshold=15):
    return EdgeStateMachine(
        policy=SlidePolicy(),
        geometry=PanelGeometry(),
        threshold=threshold,
        visibility=VisibilityState.SHOWN,
    )


def _discrete(threshold=4, visibility=VisibilityState.HIDDEN):
    return EdgeStateMachine(
        policy=DiscretePolicy(),
        geometry=PanelGeometry(),
        threshold=threshold,
        visibility=visibility,
    )


def _step(machine, sample, window=HIDDEN_WINDOW):
    machine.update(sample, window)
    return machine.decide(window)


class TestSlidePolicy:
    def test_slide_in_on_threshold_tick(self):
        # Given -- pointer pinned at the edge, window fully hidden
        machine = _slide()
        # When
        actions = [_step(machine, EDGE) for _ in range(15)]
        # Then
        assert all(a.is_none for a in actions[:14])
        assert actions[14] == Action(ActionKind.SLIDE_IN, 36.0)
        assert HIDDEN_WINDOW.x + actions[14].delta == pytest.approx(-144.0)

    def test_keeps_sliding_in_while_held(self):
        # Given
        machine = _slide()
        for _ in range(15):
            _step(machine, EDGE)
        # When
        action = _step(machine, EDGE, Coordinate(-144.0, 140.0))
        # Then
        assert action.kind == ActionKind.SLIDE_IN

    def test_no_slide_in_once_fully_open(self):
        # Given
        machine = _slide()
        for _ in range(15):
            _step(machine, EDGE)
        # When
        action = _step(machine, EDGE, OPEN_WINDOW)
        # Then
        assert action.is_none

    def test_no_slide_out_from_fully_hidden(self):
        # Given -- pointer far right, window already at -W
        machine = _slide()
        # When
        action = _step(machine, Coordinate(200.0, 400.0), HIDDEN_WINDOW)
        # Then
        assert action.is_none

    def test_slide_out_when_pointer_leaves_open_panel(self):
        # Given
        machine = _slide()
        # When
        action = _step(machine, Coordinate(200.0, 400.0), OPEN_WINDOW)
        # Then
        assert action == Action(ActionKind.SLIDE_OUT, -36.0)

    def test_pointer_on_panel_right_side_stays(self):
        # Given -- x == window.x + W is still inside
        machine = _slide()
        # When
        action = _step(machine, Coordinate(180.0, 400.0), OPEN_WINDOW)
        # Then
        assert action.is_none

    def test_slide_out_follows_partial_window(self):
        # Given -- window half out, pointer right of its visible extent
        machine = _slide()
        window = Coordinate(-90.0, 140.0)
        # When
        action = _step(machine, Coordinate(91.0, 400.0), window)
        # Then
        assert action.kind == ActionKind.SLIDE_OUT

    def test_no_window_position_means_no_action(self):
        # Given
        machine = _slide(threshold=1)
        machine.update(EDGE)
        # When / Then
        assert machine.decide().is_none


class TestDiscretePolicy:
    def test_show_on_fourth_tick_only(self):
        # Given
        machine = _discrete()
        # When
        actions = []
        for _ in range(4):
            action = _step(machine, EDGE)
            machine.apply(action)
            actions.append(action)
        # Then
        assert [a.kind for a in actions] == [
            ActionKind.NONE,
            ActionKind.NONE,
            ActionKind.NONE,
            ActionKind.SHOW,
        ]
        assert machine.visibility == VisibilityState.SHOWN

    def test_holding_edge_after_show_does_not_reshow(self):
        # Given
        machine = _discrete()
        for _ in range(4):
            machine.apply(_step(machine, EDGE))
        # When
        actions = [_step(machine, EDGE) for _ in range(20)]
        # Then
        assert all(a.is_none for a in actions)

    def test_hide_requires_pointer_right_of_panel(self):
        # Given
        machine = _discrete(visibility=VisibilityState.SHOWN)
        # When -- pointer on the panel's right side, strict test keeps it inside
        actions = [_step(machine, Coordinate(180.0, 400.0)) for _ in range(10)]
        # Then
        assert all(a.is_none for a in actions)

    def test_hide_after_threshold_outside(self):
        # Given
        machine = _discrete(visibility=VisibilityState.SHOWN)
        # When
        actions = [_step(machine, Coordinate(181.0, 400.0)) for _ in range(4)]
        # Then
        assert [a.kind for a in actions[:3]] == [ActionKind.NONE] * 3
        assert actions[3].kind == ActionKind.HIDE

    def test_full_cycle_transitions_once_each(self):
        # Given
        machine = _discrete()
        run = [EDGE] * 6 + [Coordinate(300.0, 400.0)] * 6
        # When
        fired = []
        for sample in run:
            action = _step(machine, sample)
            if machine.apply(action):
                fired.append(action.kind)
        # Then
        assert fired == [ActionKind.SHOW, ActionKind.HIDE]
        assert machine.visibility == VisibilityState.HIDDEN

    def test_interrupted_edge_run_does_not_show(self):
        # Given
        machine = _discrete()
        run = [EDGE, EDGE, EDGE, Coordinate(1.0, 400.0), EDGE, EDGE, EDGE]
        # When
        actions = [_step(machine, sample) for sample in run]
        # Then
        assert all(a.is_none for a in actions)

    def test_none_run_changes_nothing(self):
        # Given
        machine = _discrete()
        for _ in range(2):
            _step(machine, EDGE)
        before = (machine.counters.edge_hits, machine.counters.outside_hits)
        # When
        actions = [_step(machine, None) for _ in range(100)]
        # Then
        assert all(a.is_none for a in actions)
        assert (machine.counters.edge_hits, machine.counters.outside_hits) == before
        assert machine.visibility == VisibilityState.HIDDEN

    def test_hide_ignores_window_position(self):
        # Given -- discrete hide has no window.x guard
        machine = _discrete(threshold=1, visibility=VisibilityState.SHOWN)
        # When
        action = _step(machine, Coordinate(300.0, 0.0), HIDDEN_WINDOW)
        # Then
        assert action.kind == ActionKind.HIDE


class TestFactories:
    def test_make_policy(self):
        assert isinstance(make_policy(Policy.SLIDE), SlidePolicy)
        assert isinstance(make_policy(Policy.DISCRETE), DiscretePolicy)

    def test_build_slide_machine_defaults(self):
        # Given / When
        machine = build_state_machine(Config())
        # Then
        assert isinstance(machine.policy, SlidePolicy)
        assert machine.threshold == 15
        assert machine.visibility == VisibilityState.SHOWN
        assert machine.geometry.velocity == 36.0

    def test_build_discrete_machine_defaults(self):
        # Given / When
        machine = build_state_machine(Config(policy="discrete"))
        # Then
        assert isinstance(machine.policy, DiscretePolicy)
        assert machine.threshold == 4
        assert machine.visibility == VisibilityState.HIDDEN
