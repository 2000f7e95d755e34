"""Backends that put the tray state on screen."""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future
from types import ModuleType
from typing import Any, Callable, Iterator, Optional, Sequence, Union

from PIL import Image

from .errors import ServiceUnavailableError
from .icons import DEFAULT_ICON_SEARCH_DIRS, IconSource, load_image
from .menu import EntryKind, MenuAction
from .settings import TraySettings
from .state import TrayRendering

_LOGGER = logging.getLogger(__name__)

ActivateHook = Callable[[], "Future[Any]"]


class HeadlessBackend:
    """Keep the latest rendering in memory without touching a display."""

    def __init__(self) -> None:
        self.rendering: Optional[TrayRendering] = None
        self.refresh_count = 0
        self.started = False
        self.stopped = False
        self._on_activate: Optional[ActivateHook] = None

    def start(self, rendering: TrayRendering, on_activate: ActivateHook) -> None:
        self.rendering = rendering
        self._on_activate = on_activate
        self.started = True

    def refresh(self, rendering: TrayRendering) -> None:
        self.rendering = rendering
        self.refresh_count += 1

    def stop(self) -> None:
        self.stopped = True

    def click(self) -> "Future[Any]":
        """Simulate a click on the tray icon."""
        if self._on_activate is None:
            raise ServiceUnavailableError("Headless backend has not been started")
        return self._on_activate()

    def select(self, item_id: int) -> bool:
        """Simulate choosing the menu item ``item_id`` from the last rendering."""
        if self.rendering is None:
            return False
        for entry in self.rendering.menu:
            if entry.item_id == item_id and entry.action is not None:
                entry.action()
                return True
        return False


class PystrayBackend:
    """Show the tray through pystray.

    The menu is a callable ``pystray.Menu`` so pystray regenerates the items
    from the most recent rendering every time it redraws. A hidden default
    item routes clicks on the icon itself to the activation hook.
    """

    def __init__(
        self,
        name: str = "tray-item",
        *,
        icon_search_dirs: Sequence[str] = DEFAULT_ICON_SEARCH_DIRS,
        icon_size: int = 32,
        pystray_module: Optional[ModuleType] = None,
    ) -> None:
        self._name = name
        self._icon_search_dirs = tuple(icon_search_dirs)
        self._icon_size = icon_size
        self._pystray = pystray_module
        self._icon: Optional[Any] = None
        self._thread: Optional[threading.Thread] = None
        self._rendering: Optional[TrayRendering] = None
        self._on_activate: Optional[ActivateHook] = None

    @property
    def icon(self) -> Optional[Any]:
        """Return the underlying pystray icon instance."""
        return self._icon

    def start(self, rendering: TrayRendering, on_activate: ActivateHook) -> None:
        """Create the pystray icon and run it on a daemon thread."""
        if self._icon is not None:
            return
        pystray = self._load_pystray()
        self._rendering = rendering
        self._on_activate = on_activate
        icon = pystray.Icon(
            self._name,
            icon=self._image_for(rendering.icon),
            title=rendering.title,
            menu=pystray.Menu(self._menu_items),
        )
        self._icon = icon
        self._thread = threading.Thread(
            target=icon.run, name=f"{self._name}-pystray", daemon=True
        )
        self._thread.start()

    def refresh(self, rendering: TrayRendering) -> None:
        """Push a new rendering to the running icon."""
        previous = self._rendering
        self._rendering = rendering
        icon = self._icon
        if icon is None:
            return
        if previous is None or previous.icon != rendering.icon:
            icon.icon = self._image_for(rendering.icon)
        if previous is None or previous.title != rendering.title:
            icon.title = rendering.title
        icon.update_menu()

    def stop(self) -> None:
        """Remove the icon from the tray."""
        icon = self._icon
        self._icon = None
        if icon is None:
            return
        try:
            icon.stop()
        except RuntimeError:  # pragma: no cover - pystray quirks
            _LOGGER.debug("pystray stop called after icon closed", exc_info=True)

    def _load_pystray(self) -> ModuleType:
        if self._pystray is None:
            try:
                import pystray  # noqa: PLC0415
            except ImportError as exc:
                raise ServiceUnavailableError(f"pystray is unavailable: {exc}") from exc
            self._pystray = pystray
        return self._pystray

    def _image_for(self, icon: IconSource) -> Image.Image:
        return load_image(
            icon, search_dirs=self._icon_search_dirs, size=self._icon_size
        )

    def _menu_items(self) -> Iterator[Any]:
        pystray = self._load_pystray()
        yield pystray.MenuItem(
            "Activate", self._handle_activate, default=True, visible=False
        )
        rendering = self._rendering
        if rendering is None:
            return
        for entry in rendering.menu:
            if entry.kind is EntryKind.SEPARATOR:
                yield pystray.Menu.SEPARATOR
            elif entry.kind is EntryKind.LABEL:
                yield pystray.MenuItem(entry.text, None, enabled=False)
            elif entry.action is not None:
                yield pystray.MenuItem(entry.text, self._wrap(entry.action))

    def _handle_activate(self, icon: Any, item: Any) -> None:
        del icon, item
        if self._on_activate is None:
            return
        try:
            self._on_activate()
        except ServiceUnavailableError:
            _LOGGER.debug("Icon activated after tray service stopped")

    def _wrap(self, func: MenuAction) -> Callable[[Any, Any], None]:
        def wrapper(icon: Any, item: Any) -> None:
            del icon, item
            try:
                func()
            except Exception:
                _LOGGER.exception("Unhandled exception in tray menu callback")

        return wrapper


TrayBackend = Union[PystrayBackend, HeadlessBackend]


def create_backend(settings: TraySettings, name: str = "tray-item") -> TrayBackend:
    """Instantiate the backend selected in ``settings``."""
    if settings.backend == "pystray":
        return PystrayBackend(
            name,
            icon_search_dirs=settings.icon_search_dirs,
            icon_size=settings.icon_size,
        )
    if settings.backend == "headless":
        return HeadlessBackend()
    raise ValueError(f"Unknown tray backend {settings.backend!r}")
