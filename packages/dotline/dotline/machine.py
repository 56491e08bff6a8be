"""Level state machine: launch, motion, evaluation and regeneration.

Every function takes a ``LevelState`` and returns a new one. A frame runs
three phases in a fixed order: inputs, motion, evaluation. Evaluation is the
only phase that can end an attempt; it freezes the state (``active=False``)
and records the outcome. ``resolve`` then turns a pending outcome into the
next attempt.
"""

from __future__ import annotations

import dataclasses
import logging
import random
from typing import Iterable

from dotline.config import LevelConfig
from dotline.geometry import Line, generate_goal_range
from dotline.state import Dot, LevelState
from dotline.types import InputEvent, MissPolicy, Mode, Outcome, Side

logger = logging.getLogger(__name__)


def _home_dots(line: Line) -> tuple[Dot, Dot]:
    return Dot(line.left_x), Dot(line.right_x)


def _with_dot(state: LevelState, side: Side, dot: Dot) -> LevelState:
    if side is Side.LEFT:
        return dataclasses.replace(state, left=dot)
    return dataclasses.replace(state, right=dot)


def new_level(config: LevelConfig, rng: random.Random) -> LevelState:
    """Build the first level of a session."""
    line = config.line()
    goal = generate_goal_range(
        line, config.goal_min_width, config.goal_max_width, config.goal_margin, rng
    )
    left, right = _home_dots(line)
    return LevelState(mode=config.mode, line=line, goal=goal, left=left, right=right)


def reset(state: LevelState) -> LevelState:
    """Retry the current level: dots home, flags cleared, goal kept."""
    left, right = _home_dots(state.line)
    return dataclasses.replace(
        state, left=left, right=right, active=True, attempt=state.attempt + 1
    )


def regenerate(
    state: LevelState, config: LevelConfig, rng: random.Random
) -> LevelState:
    """Start a fresh level with a new goal range."""
    goal = generate_goal_range(
        state.line,
        config.goal_min_width,
        config.goal_max_width,
        config.goal_margin,
        rng,
    )
    left, right = _home_dots(state.line)
    return dataclasses.replace(
        state,
        goal=goal,
        left=left,
        right=right,
        active=True,
        level=state.level + 1,
        attempt=1,
    )


def skip(state: LevelState, config: LevelConfig, rng: random.Random) -> LevelState:
    """Abandon the current level and regenerate."""
    return dataclasses.replace(regenerate(state, config, rng), outcome=Outcome.SKIPPED)


def resolve(state: LevelState, config: LevelConfig, rng: random.Random) -> LevelState:
    """Apply a pending outcome. Returns ``state`` unchanged if none is pending."""
    pending = state.pending
    if pending is Outcome.SUCCESS:
        return regenerate(state, config, rng)
    if pending is Outcome.FAILURE:
        if config.miss_policy is MissPolicy.REGENERATE:
            return regenerate(state, config, rng)
        return reset(state)
    return state


def _apply_inputs(state: LevelState, events: Iterable[InputEvent]) -> LevelState:
    for event in events:
        dot = state.dot(event.side)
        if not dot.launched:
            dot = dataclasses.replace(dot, launched=True)
        elif state.mode is Mode.CONFIRM and not dot.confirmed:
            if not state.goal.contains(dot.position):
                logger.debug(
                    "ignored %s confirm at %.3f outside [%.3f, %.3f]",
                    event.side.value, dot.position,
                    state.goal.goal_left, state.goal.goal_right,
                )
                continue
            dot = dataclasses.replace(dot, confirmed=True)
        else:
            continue
        state = _with_dot(state, event.side, dot)
    return state


def _integrate(state: LevelState, distance: float) -> LevelState:
    left, right = state.left, state.right
    if left.launched:
        left = dataclasses.replace(left, position=left.position + distance)
    if right.launched:
        right = dataclasses.replace(right, position=right.position - distance)
    return dataclasses.replace(state, left=left, right=right)


def _evaluate(state: LevelState) -> Outcome | None:
    goal = state.goal
    if state.mode is Mode.MEET:
        if state.left.position < state.right.position:
            return None
        return Outcome.SUCCESS if goal.contains(state.meet_x) else Outcome.FAILURE

    if state.left.confirmed and state.right.confirmed:
        return Outcome.SUCCESS
    if state.left.position > goal.goal_right or state.right.position < goal.goal_left:
        return Outcome.FAILURE
    return None


def advance(
    state: LevelState,
    dt: float,
    events: Iterable[InputEvent],
    config: LevelConfig,
) -> LevelState:
    """Run inputs, motion and evaluation for one frame without resolving.

    An attempt that ends this frame comes back frozen with its outcome set,
    dots left where they ended.
    """
    if dt < 0:
        raise ValueError(f"dt must be >= 0, got {dt}")
    if not state.active:
        return state

    state = _apply_inputs(state, events)
    state = _integrate(state, config.dot_speed * dt)
    outcome = _evaluate(state)
    if outcome is None:
        return state
    return dataclasses.replace(state, active=False, outcome=outcome)


def tick(
    state: LevelState,
    dt: float,
    events: Iterable[InputEvent],
    config: LevelConfig,
    rng: random.Random,
) -> LevelState:
    """Advance one frame.

    With no ``resolve_delay`` configured, an attempt that ends this frame is
    resolved before returning, so the result is already the next attempt.
    Resolution does not evaluate again.
    """
    state = advance(state, dt, events, config)
    if state.pending is not None and config.resolve_delay == 0:
        state = resolve(state, config, rng)
    return state
