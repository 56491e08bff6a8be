"""Gameplay notifications: the fixed set of dotline signals and their bus."""

from __future__ import annotations

from typing import Any, Callable

from dotline.types import UnknownSignalError

DOT_LAUNCHED = "dot_launched"
DOT_CONFIRMED = "dot_confirmed"
LEVEL_WON = "level_won"
LEVEL_MISSED = "level_missed"
LEVEL_STARTED = "level_started"
LEVEL_SKIPPED = "level_skipped"

# Signal name -> payload keys every publish must carry. ``level_won`` and
# ``level_missed`` also carry ``meet_x`` in meet mode.
SIGNALS: dict[str, frozenset[str]] = {
    DOT_LAUNCHED: frozenset({"side"}),
    DOT_CONFIRMED: frozenset({"side", "position"}),
    LEVEL_WON: frozenset({"level", "attempt"}),
    LEVEL_MISSED: frozenset({"level", "attempt"}),
    LEVEL_STARTED: frozenset({"level", "goal_left", "goal_right"}),
    LEVEL_SKIPPED: frozenset({"level"}),
}

Handler = Callable[[str, dict[str, Any]], None]


def _check_name(signal_name: str) -> None:
    if signal_name not in SIGNALS:
        raise UnknownSignalError(signal_name)


class SignalBus:
    """Queues level and dot notifications until the end of an engine step.

    Only the names in ``SIGNALS`` exist; subscribing to or publishing any
    other name raises ``UnknownSignalError``, as does a publish missing one
    of the signal's payload keys.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, list[Handler]] = {name: [] for name in SIGNALS}
        self._queued: list[tuple[str, dict[str, Any]]] = []

    def subscribe(self, signal_name: str, handler: Handler) -> None:
        _check_name(signal_name)
        self._handlers[signal_name].append(handler)

    def unsubscribe(self, signal_name: str, handler: Handler) -> None:
        _check_name(signal_name)
        if handler in self._handlers[signal_name]:
            self._handlers[signal_name].remove(handler)

    def publish(self, signal_name: str, **data: Any) -> None:
        _check_name(signal_name)
        missing = SIGNALS[signal_name] - data.keys()
        if missing:
            raise UnknownSignalError(
                signal_name, f"{signal_name} is missing {', '.join(sorted(missing))}"
            )
        self._queued.append((signal_name, data))

    def pending(self) -> int:
        return len(self._queued)

    def flush(self) -> None:
        """Dispatch everything queued so far. Publishes made by handlers wait
        for the next flush."""
        batch, self._queued = self._queued, []
        for signal_name, data in batch:
            for handler in list(self._handlers[signal_name]):
                handler(signal_name, data)

    def clear(self) -> None:
        self._queued.clear()
