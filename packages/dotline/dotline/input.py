"""Input collaborator: turns raw presses into per-frame InputEvents."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field

from dotline.state import LevelState
from dotline.types import InputEvent, InputKind, Side


def side_for_x(world_x: float, center_x: float = 0.0) -> Side:
    """Left of center is the left zone; center itself belongs to the right."""
    return Side.LEFT if world_x < center_x else Side.RIGHT


def screen_to_world_x(
    screen_x: float, screen_width: float, half_width: float, center_x: float = 0.0
) -> float:
    """Map a pixel column to world x for a view spanning ``2 * half_width``."""
    if screen_width <= 0:
        raise ValueError(f"screen_width must be positive, got {screen_width}")
    return center_x - half_width + (screen_x / screen_width) * 2.0 * half_width


def world_to_screen_x(
    world_x: float, screen_width: float, half_width: float, center_x: float = 0.0
) -> float:
    return (world_x - center_x + half_width) / (2.0 * half_width) * screen_width


@dataclass
class KeyBindings:
    """Key name to side. Names are matched case-insensitively."""

    keys: dict[str, Side] = field(
        default_factory=lambda: {"a": Side.LEFT, "l": Side.RIGHT}
    )

    def bind(self, key: str, side: Side) -> None:
        self.keys[key.lower()] = side

    def side_for(self, key: str) -> Side | None:
        return self.keys.get(key.lower())


class InputQueue:
    """Collects presses between frames and hands out one batch per frame.

    A side pressed several times in the same frame yields a single event.
    ``drain`` labels each event LAUNCH or CONFIRM from the dot's current
    launch flag; the state machine still decides what the press means.
    """

    def __init__(
        self, bindings: KeyBindings | None = None, center_x: float = 0.0
    ) -> None:
        self._bindings = bindings if bindings is not None else KeyBindings()
        self._center_x = center_x
        self._pending: deque[Side] = deque()

    @property
    def bindings(self) -> KeyBindings:
        return self._bindings

    def press(self, side: Side) -> None:
        """Record a press for ``side``. Safe to call any time between frames."""
        if side not in self._pending:
            self._pending.append(side)

    def press_key(self, key: str) -> bool:
        """Record a bound key. Returns False for unbound keys."""
        side = self._bindings.side_for(key)
        if side is None:
            return False
        self.press(side)
        return True

    def press_at(self, world_x: float) -> Side:
        """Record a pointer or touch press at ``world_x``."""
        side = side_for_x(world_x, self._center_x)
        self.press(side)
        return side

    def pending(self) -> int:
        return len(self._pending)

    def clear(self) -> None:
        self._pending.clear()

    def drain(self, state: LevelState) -> list[InputEvent]:
        """Return this frame's events in press order and empty the queue."""
        events: list[InputEvent] = []
        while self._pending:
            side = self._pending.popleft()
            kind = InputKind.CONFIRM if state.dot(side).launched else InputKind.LAUNCH
            events.append(InputEvent(side, kind))
        return events
