"""dotline - Two-dot reflex minigame core: level state machine and geometry."""

from dotline.config import LevelConfig, config_from_dict, load_config
from dotline.engine import Engine
from dotline.geometry import (
    GoalRange,
    Line,
    compute_line_extent,
    generate_goal_range,
    viewport_half_width,
)
from dotline.input import InputQueue, KeyBindings, screen_to_world_x, side_for_x
from dotline.machine import advance, new_level, regenerate, reset, resolve, skip, tick
from dotline.signals import SignalBus
from dotline.state import Dot, LevelState
from dotline.types import (
    ConfigurationError,
    InputEvent,
    InputKind,
    MissPolicy,
    Mode,
    Outcome,
    Side,
    SnapshotError,
    UnknownSignalError,
)

__all__ = [
    "Engine",
    "LevelConfig",
    "LevelState",
    "Dot",
    "Line",
    "GoalRange",
    "InputEvent",
    "InputKind",
    "InputQueue",
    "KeyBindings",
    "Side",
    "Mode",
    "MissPolicy",
    "Outcome",
    "SignalBus",
    "ConfigurationError",
    "SnapshotError",
    "UnknownSignalError",
    "advance",
    "compute_line_extent",
    "config_from_dict",
    "generate_goal_range",
    "load_config",
    "new_level",
    "regenerate",
    "reset",
    "resolve",
    "screen_to_world_x",
    "side_for_x",
    "skip",
    "tick",
    "viewport_half_width",
]
