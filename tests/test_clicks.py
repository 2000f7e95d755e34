"""Tests for single/double click detection."""

from __future__ import annotations

import pytest

from tray_item.clicks import DOUBLE_CLICK_THRESHOLD_MS, ClickTracker


def test_first_activation_is_never_double() -> None:
    tracker = ClickTracker()
    outcome = tracker.on_activate(0.0)
    assert outcome.fired_single is True
    assert outcome.fired_double is False
    assert tracker.armed


def test_second_click_within_threshold_is_double() -> None:
    tracker = ClickTracker()
    tracker.on_activate(0.0)
    outcome = tracker.on_activate(0.100)
    assert outcome.fired_double is True
    assert not tracker.armed


def test_second_click_after_threshold_is_single() -> None:
    tracker = ClickTracker()
    tracker.on_activate(0.0)
    outcome = tracker.on_activate(0.151)
    assert outcome.fired_single is True
    assert outcome.fired_double is False
    assert not tracker.armed


def test_threshold_is_inclusive() -> None:
    tracker = ClickTracker()
    tracker.on_activate(0.0)
    assert tracker.on_activate(DOUBLE_CLICK_THRESHOLD_MS / 1000.0).fired_double


def test_detection_is_pairwise() -> None:
    tracker = ClickTracker()
    results = [tracker.on_activate(t).fired_double for t in (0.0, 0.100, 0.120)]
    assert results == [False, True, False]


@pytest.mark.parametrize(
    ("times", "expected"),
    [
        ((0.0, 0.2, 0.25, 0.3), [False, False, False, True]),
        ((10.0, 10.05, 10.1, 10.15), [False, True, False, True]),
    ],
)
def test_slow_pair_rearms_tracker(times, expected) -> None:
    tracker = ClickTracker()
    assert [tracker.on_activate(t).fired_double for t in times] == expected
