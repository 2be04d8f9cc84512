from __future__ import annotations

from agentcraft.dedup import DedupGuard


def test_window_suppresses_then_allows():
    guard = DedupGuard()
    t = 1_000_000
    assert guard.should_suppress("Stop", t) is False
    assert guard.should_suppress("Stop", t + 1000) is True
    assert guard.should_suppress("Stop", t + 3500) is False


def test_suppressed_attempts_do_not_extend_window():
    guard = DedupGuard()
    assert guard.should_suppress("Stop", 0) is False
    assert guard.should_suppress("Stop", 2900) is True
    assert guard.should_suppress("Stop", 3000) is False


def test_first_event_at_time_zero_is_allowed():
    assert DedupGuard().should_suppress("SessionStart", 0) is False


def test_keys_are_independent():
    guard = DedupGuard()
    assert guard.should_suppress("Stop", 100) is False
    assert guard.should_suppress("PreToolUse:some-skill", 200) is False
    assert guard.should_suppress("PreToolUse:other-skill", 300) is False
    assert guard.should_suppress("Stop", 400) is True
    assert len(guard) == 3


def test_instances_and_reset():
    first, second = DedupGuard(), DedupGuard()
    assert first.should_suppress("Stop", 0) is False
    assert second.should_suppress("Stop", 10) is False

    first.reset()
    assert first.should_suppress("Stop", 20) is False


def test_custom_window():
    guard = DedupGuard(window_ms=100)
    assert guard.should_suppress("Stop", 0) is False
    assert guard.should_suppress("Stop", 150) is False


def test_wall_clock_default():
    guard = DedupGuard()
    assert guard.should_suppress("Stop") is False
    assert guard.should_suppress("Stop") is True
