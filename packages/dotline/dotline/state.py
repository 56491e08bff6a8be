"""Dot and level state values."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from dotline.geometry import GoalRange, Line
from dotline.types import Mode, Outcome, Side


@dataclass(frozen=True, slots=True)
class Dot:
    position: float
    launched: bool = False
    confirmed: bool = False

    @property
    def highlighted(self) -> bool:
        """True once a confirmation inside the goal range has registered."""
        return self.confirmed


@dataclass(frozen=True, slots=True)
class LevelState:
    """Everything the machine owns for one level.

    ``outcome`` holds the most recent resolution. While ``active`` is False
    and ``outcome`` is SUCCESS or FAILURE, that resolution is still pending.
    """

    mode: Mode
    line: Line
    goal: GoalRange
    left: Dot
    right: Dot
    active: bool = True
    level: int = 1
    attempt: int = 1
    outcome: Outcome | None = None

    def dot(self, side: Side) -> Dot:
        return self.left if side is Side.LEFT else self.right

    @property
    def pending(self) -> Outcome | None:
        """Resolution waiting to be applied, or None."""
        if self.active:
            return None
        return self.outcome

    @property
    def meet_x(self) -> float:
        return (self.left.position + self.right.position) / 2.0

    def snapshot(self) -> dict[str, Any]:
        return {
            "mode": self.mode.value,
            "line": [self.line.left_x, self.line.right_x],
            "goal": [self.goal.center, self.goal.half_width],
            "left": _dot_to_list(self.left),
            "right": _dot_to_list(self.right),
            "active": self.active,
            "level": self.level,
            "attempt": self.attempt,
            "outcome": self.outcome.value if self.outcome is not None else None,
        }

    @classmethod
    def from_snapshot(cls, data: dict[str, Any]) -> LevelState:
        outcome = data["outcome"]
        return cls(
            mode=Mode(data["mode"]),
            line=Line(*data["line"]),
            goal=GoalRange(*data["goal"]),
            left=Dot(*data["left"]),
            right=Dot(*data["right"]),
            active=data["active"],
            level=data["level"],
            attempt=data["attempt"],
            outcome=Outcome(outcome) if outcome is not None else None,
        )


def _dot_to_list(dot: Dot) -> list[Any]:
    return [dot.position, dot.launched, dot.confirmed]
