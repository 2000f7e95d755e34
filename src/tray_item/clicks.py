"""Single/double click detection for activations of the tray icon."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

DOUBLE_CLICK_THRESHOLD_MS = 150


@dataclass(frozen=True)
class ClickOutcome:
    """Result of feeding one activation into the tracker."""

    fired_double: bool
    fired_single: bool = True


class ClickTracker:
    """Pairwise double-click detector driven by monotonic timestamps.

    The first activation arms the tracker. The next activation always
    disarms it and counts as a double click when it arrives within
    ``DOUBLE_CLICK_THRESHOLD_MS`` (inclusive) of the first one.
    """

    def __init__(self) -> None:
        self._last_click: Optional[float] = None

    @property
    def armed(self) -> bool:
        """Return whether a previous click is waiting for its pair."""
        return self._last_click is not None

    def on_activate(self, now: float) -> ClickOutcome:
        """Register an activation at ``now`` (seconds, monotonic clock)."""
        last_click = self._last_click
        if last_click is None:
            self._last_click = now
            return ClickOutcome(fired_double=False)
        self._last_click = None
        elapsed = now - last_click
        return ClickOutcome(fired_double=elapsed <= DOUBLE_CLICK_THRESHOLD_MS / 1000.0)
