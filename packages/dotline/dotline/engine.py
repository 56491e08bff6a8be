"""Engine - frame driver, resolve pacing, signals and snapshots."""

from __future__ import annotations

import logging
import os
import random
from typing import Any, Callable, Iterable, Mapping, Sequence

from dotline.config import LevelConfig, config_from_dict
from dotline.machine import advance, new_level, resolve, skip
from dotline.signals import (
    DOT_CONFIRMED,
    DOT_LAUNCHED,
    LEVEL_MISSED,
    LEVEL_SKIPPED,
    LEVEL_STARTED,
    LEVEL_WON,
    SignalBus,
)
from dotline.state import LevelState
from dotline.types import InputEvent, Mode, Outcome, Side, SnapshotError

logger = logging.getLogger(__name__)

_SNAPSHOT_VERSION = 1

Hook = Callable[[LevelState], None]


class Engine:
    """Owns one play session: config, seeded RNG, and the current LevelState.

    Signals published on ``bus`` (flushed at the end of every step):
    ``dot_launched(side)``, ``dot_confirmed(side, position)``,
    ``level_won(level, attempt)``, ``level_missed(level, attempt)``,
    ``level_started(level, goal_left, goal_right)`` and
    ``level_skipped(level)``. In meet mode ``level_won`` and ``level_missed``
    also carry ``meet_x``.
    """

    def __init__(self, config: LevelConfig | None = None, seed: int | None = None) -> None:
        self._config = config if config is not None else LevelConfig()
        self._bus = SignalBus()
        self._start_hooks: list[Hook] = []
        self._stop_hooks: list[Hook] = []
        self._stop_requested: bool = False
        self._frame = 0
        self._elapsed = 0.0
        self._resolve_timer = 0.0

        if seed is None:
            seed = int.from_bytes(os.urandom(8))
        self._seed = seed
        self._rng = random.Random(seed)
        self._state = new_level(self._config, self._rng)

    @property
    def state(self) -> LevelState:
        return self._state

    @property
    def config(self) -> LevelConfig:
        return self._config

    @property
    def bus(self) -> SignalBus:
        return self._bus

    @property
    def seed(self) -> int:
        return self._seed

    @property
    def frame(self) -> int:
        return self._frame

    @property
    def elapsed(self) -> float:
        return self._elapsed

    def on_start(self, hook: Hook) -> None:
        self._start_hooks.append(hook)

    def on_stop(self, hook: Hook) -> None:
        self._stop_hooks.append(hook)

    def request_stop(self) -> None:
        """Ask ``run`` to stop after the current frame."""
        self._stop_requested = True

    def _publish_inputs(self, before: LevelState, after: LevelState) -> None:
        for side in Side:
            old, new = before.dot(side), after.dot(side)
            if new.launched and not old.launched:
                self._bus.publish(DOT_LAUNCHED, side=side)
            if new.confirmed and not old.confirmed:
                # Confirmation is judged before motion, at the old position.
                self._bus.publish(DOT_CONFIRMED, side=side, position=old.position)

    def _publish_outcome(self, state: LevelState) -> None:
        data: dict[str, Any] = {"level": state.level, "attempt": state.attempt}
        if state.mode is Mode.MEET:
            data["meet_x"] = state.meet_x

        if state.outcome is Outcome.SUCCESS:
            logger.info("level %d won on attempt %d", state.level, state.attempt)
            self._bus.publish(LEVEL_WON, **data)
        else:
            logger.info(
                "level %d missed on attempt %d, goal [%.3f, %.3f]",
                state.level, state.attempt,
                state.goal.goal_left, state.goal.goal_right,
            )
            self._bus.publish(LEVEL_MISSED, **data)

    def _publish_started(self) -> None:
        goal = self._state.goal
        self._bus.publish(
            LEVEL_STARTED,
            level=self._state.level,
            goal_left=goal.goal_left,
            goal_right=goal.goal_right,
        )

    def _resolve(self) -> None:
        before = self._state
        self._state = resolve(before, self._config, self._rng)
        self._resolve_timer = 0.0
        if self._state.level != before.level:
            self._publish_started()

    def _tick(self, dt: float, events: Sequence[InputEvent]) -> None:
        self._frame += 1
        self._elapsed += dt

        if self._state.pending is not None:
            # Frozen between attempts: inputs are dropped until resolve.
            self._resolve_timer -= dt
            if self._resolve_timer <= 0:
                self._resolve()
        else:
            before = self._state
            self._state = advance(before, dt, events, self._config)
            self._publish_inputs(before, self._state)
            if self._state.pending is not None:
                self._publish_outcome(self._state)
                if self._config.resolve_delay == 0:
                    self._resolve()
                else:
                    self._resolve_timer = self._config.resolve_delay

        self._bus.flush()

    def step(self, dt: float, events: Iterable[InputEvent] = ()) -> LevelState:
        """Advance one frame of ``dt`` seconds with this frame's events."""
        if dt < 0:
            raise ValueError(f"dt must be >= 0, got {dt}")
        self._stop_requested = False
        self._tick(dt, list(events))
        return self._state

    def run(
        self,
        n: int,
        dt: float,
        script: Mapping[int, Sequence[InputEvent]] | None = None,
    ) -> LevelState:
        """Run ``n`` fixed frames. ``script`` maps a 0-based frame offset to events."""
        if dt < 0:
            raise ValueError(f"dt must be >= 0, got {dt}")
        self._stop_requested = False
        for hook in self._start_hooks:
            hook(self._state)

        script = script or {}
        for i in range(n):
            self._tick(dt, list(script.get(i, ())))
            if self._stop_requested:
                break

        for hook in self._stop_hooks:
            hook(self._state)
        return self._state

    def skip(self) -> LevelState:
        """Drop the current level and start a new one."""
        skipped = self._state.level
        self._state = skip(self._state, self._config, self._rng)
        self._resolve_timer = 0.0
        logger.info("level %d skipped", skipped)
        self._bus.publish(LEVEL_SKIPPED, level=skipped)
        self._publish_started()
        self._bus.flush()
        return self._state

    def snapshot(self) -> dict[str, Any]:
        return {
            "version": _SNAPSHOT_VERSION,
            "frame": self._frame,
            "elapsed": self._elapsed,
            "seed": self._seed,
            "rng_state": _rng_state_to_json(self._rng),
            "resolve_timer": self._resolve_timer,
            "config": self._config.to_dict(),
            "state": self._state.snapshot(),
        }

    def restore(self, data: dict[str, Any]) -> None:
        """Resume from a ``snapshot`` dict. Nothing changes if it is rejected."""
        version = data.get("version")
        if version != _SNAPSHOT_VERSION:
            raise SnapshotError(
                f"Unsupported snapshot version {version!r}, expected {_SNAPSHOT_VERSION}"
            )

        try:
            snap_config = config_from_dict(data["config"])
            frame = int(data["frame"])
            elapsed = float(data["elapsed"])
            seed = int(data["seed"])
            rng = _rng_from_json(data["rng_state"])
            resolve_timer = float(data["resolve_timer"])
            state = LevelState.from_snapshot(data["state"])
        except (KeyError, TypeError, ValueError) as exc:
            raise SnapshotError(f"Malformed snapshot: {exc!r}") from exc

        if snap_config != self._config:
            raise SnapshotError(
                f"Config mismatch: snapshot has {snap_config}, engine has {self._config}"
            )

        self._frame = frame
        self._elapsed = elapsed
        self._seed = seed
        self._rng = rng
        self._resolve_timer = resolve_timer
        self._state = state


def _rng_state_to_json(rng: random.Random) -> dict[str, Any]:
    """Mersenne Twister state as plain JSON values (CPython layout)."""
    version, words, gauss_next = rng.getstate()
    return {"version": version, "words": list(words), "gauss_next": gauss_next}


def _rng_from_json(data: dict[str, Any]) -> random.Random:
    rng = random.Random()
    rng.setstate((data["version"], tuple(data["words"]), data["gauss_next"]))
    return rng
