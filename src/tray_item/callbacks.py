"""Replaceable icon click callbacks."""

from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

LOGGER = logging.getLogger("tray_item.callbacks")

IconCallback = Callable[[], None]


class CallbackRegistry:
    """Hold at most one click and one double-click callback."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._click: Optional[IconCallback] = None
        self._double_click: Optional[IconCallback] = None

    @property
    def click(self) -> Optional[IconCallback]:
        with self._lock:
            return self._click

    @property
    def double_click(self) -> Optional[IconCallback]:
        with self._lock:
            return self._double_click

    def set_click(self, callback: Optional[IconCallback]) -> None:
        """Replace the click callback; ``None`` clears it."""
        with self._lock:
            self._click = callback

    def set_double_click(self, callback: Optional[IconCallback]) -> None:
        """Replace the double-click callback; ``None`` clears it."""
        with self._lock:
            self._double_click = callback

    def fire_click(self) -> None:
        """Invoke the click callback if one is registered."""
        self._dispatch(self.click, "click")

    def fire_double_click(self) -> None:
        """Invoke the double-click callback if one is registered."""
        self._dispatch(self.double_click, "double-click")

    def _dispatch(self, handler: Optional[IconCallback], kind: str) -> None:
        if handler is None:
            return
        try:
            handler()
        except Exception:
            LOGGER.exception("Unhandled exception in icon %s callback", kind)
