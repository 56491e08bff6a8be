"""Shared enums, input events and error types for dotline."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Side(Enum):
    LEFT = "left"
    RIGHT = "right"


class InputKind(Enum):
    LAUNCH = "launch"
    CONFIRM = "confirm"


class Mode(Enum):
    """Win-condition policy, fixed for the lifetime of a configuration."""

    MEET = "meet"
    CONFIRM = "confirm"


class MissPolicy(Enum):
    """What a failed attempt does to the goal range.

    Applies in both modes: a meet outside the range, and a confirm-mode
    overrun. RETRY keeps the goal; REGENERATE draws a new one.
    """

    RETRY = "retry"
    REGENERATE = "regenerate"


class Outcome(Enum):
    SUCCESS = "success"
    FAILURE = "failure"
    SKIPPED = "skipped"


@dataclass(frozen=True, slots=True)
class InputEvent:
    side: Side
    kind: InputKind = InputKind.LAUNCH


class ConfigurationError(ValueError):
    """Raised when numeric settings leave no room for a valid level."""


class SnapshotError(Exception):
    """Raised on restore failures (version or configuration mismatch)."""


class UnknownSignalError(KeyError):
    """Raised for a signal name outside the fixed set, or an incomplete payload."""

    def __init__(self, signal_name: str, message: str | None = None) -> None:
        self.signal_name = signal_name
        super().__init__(message or f"Unknown signal {signal_name!r}")
