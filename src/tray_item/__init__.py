"""Thread-safe system tray icon with a dropdown menu."""

from .backend import HeadlessBackend, PystrayBackend, TrayBackend, create_backend
from .clicks import DOUBLE_CLICK_THRESHOLD_MS, ClickOutcome, ClickTracker
from .errors import ReentrantCallError, ServiceUnavailableError, TrayError
from .handle import TrayItem
from .icons import IconKind, IconSource
from .menu import ActionItem, Label, MenuModel, Separator
from .service import TrayService
from .settings import TraySettings
from .state import TrayRendering, TrayState

__all__ = [
    "ActionItem",
    "ClickOutcome",
    "ClickTracker",
    "DOUBLE_CLICK_THRESHOLD_MS",
    "HeadlessBackend",
    "IconKind",
    "IconSource",
    "Label",
    "MenuModel",
    "PystrayBackend",
    "ReentrantCallError",
    "Separator",
    "ServiceUnavailableError",
    "TrayBackend",
    "TrayError",
    "TrayItem",
    "TrayRendering",
    "TrayService",
    "TraySettings",
    "TrayState",
    "create_backend",
]
