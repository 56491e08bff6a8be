"""Static level configuration and YAML loading."""

from __future__ import annotations

import dataclasses
import math
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

import yaml

from dotline.geometry import Line, check_goal_bounds, compute_line_extent
from dotline.types import ConfigurationError, MissPolicy, Mode


@dataclass(frozen=True)
class LevelConfig:
    """Immutable configuration for a play session.

    Attributes:
        mode: Win-condition policy (meet inside range, or confirm each dot).
        dot_speed: World units per second a launched dot travels.
        goal_min_width: Smallest goal range width.
        goal_max_width: Largest goal range width.
        goal_margin: Gap kept between the goal range and the line ends.
        side_margin: Gap kept between the line ends and the viewport edge.
        viewport_half_width: Half the visible world width.
        center_x: World x of the viewport center.
        miss_policy: Whether a miss retries the same goal or draws a new one.
        resolve_delay: Seconds the level stays frozen after a win or miss.

    Construction validates every numeric range and raises
    ``ConfigurationError`` instead of clamping.
    """

    mode: Mode = Mode.MEET
    dot_speed: float = 3.0
    goal_min_width: float = 0.5
    goal_max_width: float = 2.0
    goal_margin: float = 0.0
    side_margin: float = 0.0
    viewport_half_width: float = 5.0
    center_x: float = 0.0
    miss_policy: MissPolicy = MissPolicy.RETRY
    resolve_delay: float = 0.0

    def __post_init__(self) -> None:
        if not isinstance(self.mode, Mode):
            raise ConfigurationError(f"mode must be a Mode, got {self.mode!r}")
        if not isinstance(self.miss_policy, MissPolicy):
            raise ConfigurationError(
                f"miss_policy must be a MissPolicy, got {self.miss_policy!r}"
            )
        for f in dataclasses.fields(self):
            value = getattr(self, f.name)
            if isinstance(value, (int, float)) and not math.isfinite(value):
                raise ConfigurationError(f"{f.name} must be finite, got {value}")
        if self.dot_speed <= 0:
            raise ConfigurationError(f"dot_speed must be positive, got {self.dot_speed}")
        if self.side_margin < 0:
            raise ConfigurationError(
                f"side_margin must be >= 0, got {self.side_margin}"
            )
        if self.resolve_delay < 0:
            raise ConfigurationError(
                f"resolve_delay must be >= 0, got {self.resolve_delay}"
            )
        check_goal_bounds(
            self.line(), self.goal_min_width, self.goal_max_width, self.goal_margin
        )

    def line(self) -> Line:
        return compute_line_extent(
            self.viewport_half_width, self.center_x, self.side_margin
        )

    def to_dict(self) -> dict[str, Any]:
        data = dataclasses.asdict(self)
        data["mode"] = self.mode.value
        data["miss_policy"] = self.miss_policy.value
        return data


_ENUM_FIELDS: dict[str, type[Enum]] = {"mode": Mode, "miss_policy": MissPolicy}


def _parse_enum(enum_type: type[Enum], key: str, value: Any) -> Enum:
    if isinstance(value, enum_type):
        return value
    if isinstance(value, str):
        wanted = value.strip().lower()
        for member in enum_type:
            if wanted in (member.value, member.name.lower()):
                return member
    choices = ", ".join(m.value for m in enum_type)
    raise ConfigurationError(f"{key} must be one of {choices}, got {value!r}")


def config_from_dict(data: dict[str, Any]) -> LevelConfig:
    """Build a LevelConfig from plain data, e.g. a parsed YAML mapping."""
    known = {f.name for f in dataclasses.fields(LevelConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigurationError(f"Unknown configuration keys: {', '.join(unknown)}")

    kwargs: dict[str, Any] = {}
    for key, value in data.items():
        if key in _ENUM_FIELDS:
            kwargs[key] = _parse_enum(_ENUM_FIELDS[key], key, value)
        elif isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ConfigurationError(f"{key} must be a number, got {value!r}")
        else:
            kwargs[key] = float(value)
    return LevelConfig(**kwargs)


def load_config(path: str | Path) -> LevelConfig:
    """Read a YAML mapping of LevelConfig fields. A missing key keeps its default."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Missing config file {path}")
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"{path} must contain a mapping, got {type(data).__name__}")
    return config_from_dict(data)
