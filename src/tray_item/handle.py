"""Public, thread-safe handle for a tray icon and its menu."""

from __future__ import annotations

import logging
import time
from types import TracebackType
from typing import Callable, Optional, Type

from .backend import TrayBackend, create_backend
from .callbacks import IconCallback
from .icons import IconSource
from .menu import MenuAction
from .service import TrayService
from .settings import TraySettings
from .state import TrayState

LOGGER = logging.getLogger("tray_item.handle")


class TrayItem:
    """Manage a tray icon, its menu and icon click callbacks.

    Every method may be called from any thread. Mutations are handed to the
    tray service and applied on its worker in the order they were made;
    only :meth:`add_menu_item_with_id` and :meth:`flush` wait for them.

    Click callbacks run on the service worker, so they must not call the
    blocking methods (doing so raises ``ReentrantCallError``). Menu item
    actions run on the backend's thread and may call anything.
    """

    def __init__(
        self,
        title: str,
        icon: IconSource,
        *,
        backend: Optional[TrayBackend] = None,
        settings: Optional[TraySettings] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._settings = settings or TraySettings()
        self._title = title
        backend = backend or create_backend(self._settings, name=title)
        self._service = TrayService(
            TrayState(title, icon),
            backend,
            clock=clock,
            join_timeout=self._settings.worker_join_timeout,
            name=f"tray-service[{title}]",
        )
        self._service.start()

    def __enter__(self) -> "TrayItem":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self.shutdown()

    @property
    def title(self) -> str:
        return self._title

    @property
    def running(self) -> bool:
        """Return whether the tray still accepts updates."""
        return self._service.running

    @property
    def service(self) -> TrayService:
        """Expose the tray service owning the state."""
        return self._service

    def set_icon(self, icon: IconSource) -> None:
        """Replace the tray icon."""
        self._service.submit(lambda state: setattr(state, "icon", icon))

    def add_label(self, text: str) -> None:
        """Append a disabled heading to the menu."""
        self._service.submit(lambda state: state.menu.append_label(text))

    def set_icon_click_callback(self, callback: Optional[IconCallback]) -> None:
        """Register the callback fired on every click of the icon."""
        self._service.submit(
            lambda state: state.callbacks.set_click(callback), refresh=False
        )

    def set_icon_double_click_callback(self, callback: Optional[IconCallback]) -> None:
        """Register the callback fired when two clicks land within 150ms."""
        self._service.submit(
            lambda state: state.callbacks.set_double_click(callback), refresh=False
        )

    def add_menu_item(self, text: str, action: MenuAction) -> None:
        """Append a clickable menu item."""
        self.add_menu_item_with_id(text, action)

    def add_menu_item_with_id(self, text: str, action: MenuAction) -> int:
        """Append a clickable menu item and return its identifier.

        Blocks until the tray service has applied the update.
        """
        item_id = self._service.call(lambda state: state.menu.append_action(text, action))
        LOGGER.debug("Added menu item %d (%r)", item_id, text)
        return item_id

    def rename_menu_item(self, item_id: int, text: str) -> None:
        """Change the text of a menu item; unknown ids are ignored."""

        def rename(state: TrayState) -> None:
            if not state.menu.rename_action(item_id, text):
                LOGGER.debug("Ignoring rename of unknown menu item %d", item_id)

        self._service.submit(rename)

    def add_separator(self) -> None:
        """Append a separator to the menu."""
        self._service.submit(lambda state: state.menu.append_separator())

    def flush(self, timeout: Optional[float] = None) -> None:
        """Block until all updates made so far have been applied."""
        self._service.flush(timeout)

    def shutdown(self) -> None:
        """Remove the icon and stop the tray service."""
        self._service.stop()
