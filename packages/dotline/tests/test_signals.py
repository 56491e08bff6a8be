"""Unit tests for SignalBus and the fixed signal set."""
from __future__ import annotations

import pytest

from dotline.signals import (
    DOT_LAUNCHED,
    LEVEL_MISSED,
    LEVEL_STARTED,
    LEVEL_WON,
    SIGNALS,
    SignalBus,
)
from dotline.types import Side, UnknownSignalError


def test_publish_is_deferred_until_flush():
    bus = SignalBus()
    received = []
    bus.subscribe(LEVEL_WON, lambda name, data: received.append((name, data)))

    bus.publish(LEVEL_WON, level=3, attempt=1)
    assert received == []
    assert bus.pending() == 1

    bus.flush()
    assert received == [("level_won", {"level": 3, "attempt": 1})]
    assert bus.pending() == 0


def test_publish_without_subscribers():
    """Flush with nobody listening is a no-op."""
    bus = SignalBus()
    bus.publish(LEVEL_MISSED, level=1, attempt=2)
    bus.flush()


def test_handlers_called_in_subscription_order():
    bus = SignalBus()
    order = []
    bus.subscribe(DOT_LAUNCHED, lambda n, d: order.append("first"))
    bus.subscribe(DOT_LAUNCHED, lambda n, d: order.append("second"))

    bus.publish(DOT_LAUNCHED, side=Side.LEFT)
    bus.flush()
    assert order == ["first", "second"]


def test_extra_payload_keys_allowed():
    bus = SignalBus()
    received = []
    bus.subscribe(LEVEL_WON, lambda n, d: received.append(d))
    bus.publish(LEVEL_WON, level=1, attempt=1, meet_x=0.25)
    bus.flush()
    assert received == [{"level": 1, "attempt": 1, "meet_x": 0.25}]


def test_unsubscribe():
    bus = SignalBus()
    received = []

    def handler(name: str, data: dict) -> None:
        received.append(name)

    bus.subscribe(LEVEL_WON, handler)
    bus.unsubscribe(LEVEL_WON, handler)
    bus.publish(LEVEL_WON, level=1, attempt=1)
    bus.flush()
    assert received == []


def test_unsubscribe_unregistered_handler_is_silent():
    bus = SignalBus()
    bus.unsubscribe(LEVEL_WON, lambda n, d: None)


def test_signals_published_during_flush_wait_for_next_flush():
    bus = SignalBus()
    received = []

    def chain(name: str, data: dict) -> None:
        received.append(name)
        bus.publish(LEVEL_STARTED, level=2, goal_left=-1.0, goal_right=1.0)

    bus.subscribe(LEVEL_WON, chain)
    bus.subscribe(LEVEL_STARTED, lambda n, d: received.append(n))

    bus.publish(LEVEL_WON, level=1, attempt=1)
    bus.flush()
    assert received == ["level_won"]
    bus.flush()
    assert received == ["level_won", "level_started"]


def test_clear_drops_queued_signals():
    bus = SignalBus()
    received = []
    bus.subscribe(LEVEL_WON, lambda n, d: received.append(n))
    bus.publish(LEVEL_WON, level=1, attempt=1)
    bus.clear()
    bus.flush()
    assert received == []


# --- Fixed signal set ---


def test_known_signals():
    assert set(SIGNALS) == {
        "dot_launched",
        "dot_confirmed",
        "level_won",
        "level_missed",
        "level_started",
        "level_skipped",
    }


def test_publish_unknown_name_fails_loudly():
    bus = SignalBus()
    with pytest.raises(UnknownSignalError) as excinfo:
        bus.publish("level_wonn", level=1, attempt=1)
    assert excinfo.value.signal_name == "level_wonn"
    assert bus.pending() == 0


def test_subscribe_unknown_name_fails_loudly():
    bus = SignalBus()
    with pytest.raises(UnknownSignalError):
        bus.subscribe("dot_lanched", lambda n, d: None)


def test_unsubscribe_unknown_name_fails_loudly():
    bus = SignalBus()
    with pytest.raises(UnknownSignalError):
        bus.unsubscribe("never", lambda n, d: None)


def test_publish_missing_payload_key_rejected():
    bus = SignalBus()
    with pytest.raises(UnknownSignalError, match="attempt"):
        bus.publish(LEVEL_WON, level=1)


def test_unknown_signal_error_is_key_error():
    assert issubclass(UnknownSignalError, KeyError)
