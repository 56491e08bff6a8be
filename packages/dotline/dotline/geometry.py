"""Playable line and goal range geometry."""

from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass

from dotline.types import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Line:
    left_x: float
    right_x: float

    @property
    def length(self) -> float:
        return self.right_x - self.left_x


@dataclass(frozen=True, slots=True)
class GoalRange:
    """Target sub-range of the line. Bounds are inclusive."""

    center: float
    half_width: float

    @property
    def goal_left(self) -> float:
        return self.center - self.half_width

    @property
    def goal_right(self) -> float:
        return self.center + self.half_width

    @property
    def width(self) -> float:
        return 2.0 * self.half_width

    def contains(self, x: float) -> bool:
        return self.goal_left <= x <= self.goal_right


def _require_finite(**values: float) -> None:
    for name, value in values.items():
        if not math.isfinite(value):
            raise ConfigurationError(f"{name} must be finite, got {value}")


def viewport_half_width(ortho_size: float, aspect: float) -> float:
    """Half the visible width of an orthographic camera.

    ``ortho_size`` is the half height of the view and ``aspect`` is
    width / height, so the half width is their product.
    """
    _require_finite(ortho_size=ortho_size, aspect=aspect)
    if ortho_size <= 0 or aspect <= 0:
        raise ConfigurationError(
            f"ortho_size and aspect must be positive, got {ortho_size} and {aspect}"
        )
    return ortho_size * aspect


def compute_line_extent(
    viewport_half_width: float, center_x: float, margin: float
) -> Line:
    """Inset the visible extent around ``center_x`` by ``margin`` on each side."""
    _require_finite(
        viewport_half_width=viewport_half_width, center_x=center_x, margin=margin
    )
    left_x = center_x - viewport_half_width + margin
    right_x = center_x + viewport_half_width - margin
    if right_x <= left_x:
        raise ConfigurationError(
            f"Side margin {margin} leaves no line inside a viewport half width "
            f"of {viewport_half_width}"
        )
    return Line(left_x, right_x)


def check_goal_bounds(
    line: Line, min_width: float, max_width: float, margin: float
) -> None:
    """Raise ConfigurationError unless every width draw has room for a center."""
    _require_finite(
        left_x=line.left_x,
        right_x=line.right_x,
        min_width=min_width,
        max_width=max_width,
        margin=margin,
        line_length=line.length,
    )
    if min_width <= 0:
        raise ConfigurationError(f"goal_min_width must be positive, got {min_width}")
    if min_width > max_width:
        raise ConfigurationError(
            f"goal_min_width ({min_width}) exceeds goal_max_width ({max_width})"
        )
    if margin < 0:
        raise ConfigurationError(f"goal_margin must be >= 0, got {margin}")
    if max_width + 2 * margin >= line.length:
        raise ConfigurationError(
            f"goal_max_width ({max_width}) plus twice goal_margin ({margin}) "
            f"must be shorter than the line ({line.length})"
        )


def generate_goal_range(
    line: Line,
    min_width: float,
    max_width: float,
    margin: float,
    rng: random.Random,
) -> GoalRange:
    """Draw a goal range that fits inside ``line`` with ``margin`` on both ends.

    Width is uniform in ``[min_width, max_width]``; the center is then uniform
    over every position that keeps the whole range inside the margins.
    """
    check_goal_bounds(line, min_width, max_width, margin)
    width = rng.uniform(min_width, max_width)
    low = line.left_x + margin + width / 2.0
    high = line.right_x - margin - width / 2.0
    center = rng.uniform(low, high)
    goal = GoalRange(center=center, half_width=width / 2.0)
    logger.debug(
        "goal range [%.3f, %.3f] on line [%.3f, %.3f]",
        goal.goal_left, goal.goal_right, line.left_x, line.right_x,
    )
    return goal
