"""Tests for the confirm-press-inside-range win condition."""

import random

import pytest

from dotline.config import LevelConfig
from dotline.geometry import GoalRange, Line
from dotline.machine import advance, tick
from dotline.state import Dot, LevelState
from dotline.types import InputEvent, InputKind, Mode, Outcome, Side

LEFT = InputEvent(Side.LEFT, InputKind.LAUNCH)
RIGHT = InputEvent(Side.RIGHT, InputKind.LAUNCH)
CONFIRM_LEFT = InputEvent(Side.LEFT, InputKind.CONFIRM)
CONFIRM_RIGHT = InputEvent(Side.RIGHT, InputKind.CONFIRM)
GOAL = GoalRange(0.0, 1.0)


def make_state() -> LevelState:
    return LevelState(
        mode=Mode.CONFIRM,
        line=Line(-5.0, 5.0),
        goal=GOAL,
        left=Dot(-5.0),
        right=Dot(5.0),
    )


@pytest.fixture
def config() -> LevelConfig:
    return LevelConfig(mode=Mode.CONFIRM, dot_speed=1.0)


@pytest.fixture
def rng() -> random.Random:
    return random.Random(3)


def frames(state, config, script, n, dt=0.5):
    """Advance ``n`` frames; ``script`` maps frame index to events."""
    for i in range(n):
        state = advance(state, dt, script.get(i, []), config)
    return state


# --- Confirmation ---


def test_confirm_inside_range_registers(config):
    # Frame 8 starts with the left dot at exactly goal_left.
    state = frames(make_state(), config, {0: [LEFT]}, 8)
    assert state.left.position == -1.0

    state = advance(state, 0.5, [CONFIRM_LEFT], config)
    assert state.left.confirmed
    assert state.left.highlighted
    assert state.active


def test_confirm_outside_range_is_ignored(config):
    state = frames(make_state(), config, {0: [LEFT]}, 2)
    assert state.left.position == -4.0

    state = advance(state, 0.5, [CONFIRM_LEFT], config)
    assert not state.left.confirmed
    assert not state.left.highlighted
    assert state.left.launched
    assert state.left.position == -3.5
    assert state.active


def test_confirmed_dot_keeps_moving(config):
    state = frames(make_state(), config, {0: [LEFT], 8: [CONFIRM_LEFT]}, 10)
    assert state.left.confirmed
    assert state.left.position == 0.0


def test_repeat_confirm_is_harmless(config):
    state = frames(
        make_state(), config, {0: [LEFT], 8: [CONFIRM_LEFT], 9: [CONFIRM_LEFT]}, 10
    )
    assert state.left.confirmed
    assert state.active


def test_both_confirmed_is_success(config):
    state = frames(
        make_state(), config, {0: [LEFT, RIGHT], 8: [CONFIRM_LEFT, CONFIRM_RIGHT]}, 9
    )
    assert not state.active
    assert state.outcome is Outcome.SUCCESS


def test_success_regenerates_and_clears_confirmations(config, rng):
    script = {0: [LEFT, RIGHT], 8: [CONFIRM_LEFT, CONFIRM_RIGHT]}
    state = make_state()
    for i in range(9):
        state = tick(state, 0.5, script.get(i, []), config, rng)

    assert state.active
    assert state.outcome is Outcome.SUCCESS
    assert state.level == 2
    assert state.left == Dot(-5.0)
    assert state.right == Dot(5.0)
    assert not state.left.highlighted and not state.right.highlighted


def test_one_confirmation_is_not_enough(config):
    state = frames(make_state(), config, {0: [LEFT, RIGHT], 8: [CONFIRM_LEFT]}, 9)
    assert state.left.confirmed
    assert not state.right.confirmed
    assert state.active


# --- Early failure ---


def test_left_overrun_fails_even_when_left_confirmed(config):
    """Left passes goal_right while right is unconfirmed: fail on that frame."""
    state = frames(make_state(), config, {0: [LEFT], 8: [CONFIRM_LEFT]}, 12)
    assert state.left.position == 1.0
    assert state.active

    state = advance(state, 0.5, [], config)
    assert state.left.position == 1.5
    assert not state.active
    assert state.outcome is Outcome.FAILURE


def test_overrun_resets_with_same_goal(config, rng):
    script = {0: [LEFT], 8: [CONFIRM_LEFT]}
    state = make_state()
    for i in range(13):
        state = tick(state, 0.5, script.get(i, []), config, rng)

    assert state.outcome is Outcome.FAILURE
    assert state.goal == GOAL
    assert state.active
    assert state.attempt == 2
    assert not state.left.confirmed
    assert not state.left.launched
    assert state.left.position == -5.0


def test_right_retreat_past_goal_left_fails(config):
    state = frames(make_state(), config, {0: [RIGHT]}, 12)
    assert state.right.position == -1.0
    assert state.active

    state = advance(state, 0.5, [], config)
    assert state.outcome is Outcome.FAILURE


def test_no_failure_at_exact_goal_edge(config):
    """Reaching goal_right exactly is not yet an overrun."""
    state = frames(make_state(), config, {0: [LEFT]}, 12)
    assert state.left.position == GOAL.goal_right
    assert state.active


def test_dots_may_cross_inside_range(config):
    """Crossing is not an outcome in confirm mode."""
    state = frames(make_state(), config, {0: [LEFT, RIGHT]}, 11)
    assert state.left.position > state.right.position
    assert state.active


def test_late_confirm_on_overrun_frame_still_fails(config):
    """A confirm at goal_right registers, then motion carries the dot past."""
    state = frames(make_state(), config, {0: [LEFT], 12: [CONFIRM_LEFT]}, 13)
    assert state.left.confirmed
    assert state.outcome is Outcome.FAILURE
