"""The tray state exclusively owned by the tray service worker."""

from __future__ import annotations

from dataclasses import dataclass

from .callbacks import CallbackRegistry
from .clicks import ClickOutcome, ClickTracker
from .icons import IconSource
from .menu import MenuModel, MenuProjection


@dataclass(frozen=True)
class TrayRendering:
    """Everything a backend needs to draw the tray."""

    title: str
    icon: IconSource
    menu: MenuProjection


class TrayState:
    """Aggregate of menu, click tracking, callbacks, icon and title."""

    def __init__(self, title: str, icon: IconSource) -> None:
        self._title = title
        self.icon = icon
        self.menu = MenuModel()
        self.clicks = ClickTracker()
        self.callbacks = CallbackRegistry()

    @property
    def title(self) -> str:
        return self._title

    def activate(self, now: float) -> ClickOutcome:
        """Handle a click on the tray icon that happened at ``now``."""
        self.callbacks.fire_click()
        outcome = self.clicks.on_activate(now)
        if outcome.fired_double:
            self.callbacks.fire_double_click()
        return outcome

    def render(self) -> TrayRendering:
        """Snapshot the state for drawing."""
        return TrayRendering(
            title=self._title, icon=self.icon, menu=self.menu.projection()
        )
