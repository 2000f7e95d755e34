"""Exception types raised by the tray item API."""

from __future__ import annotations


class TrayError(Exception):
    """Base class for tray item errors."""


class ServiceUnavailableError(TrayError):
    """Raised when the tray service cannot accept or apply work."""


class ReentrantCallError(TrayError):
    """Raised when a blocking call is made from the tray service worker."""
