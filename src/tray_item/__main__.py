"""Command-line entry point showing a sample tray icon."""

from __future__ import annotations

import logging
import signal
import sys
import threading

from tray_item import IconSource, ServiceUnavailableError, TrayItem, TraySettings
from tray_item.logging_setup import configure_logging

LOGGER = logging.getLogger("tray_item")

DEMO_TITLE = "Tray Item"
DEMO_ICON_SIZE = 32


def demo_icon(color: tuple[int, int, int] = (30, 136, 229)) -> IconSource:
    """Build a solid square ARGB icon."""
    pixel = bytes((255, *color))
    return IconSource.pixels(pixel * DEMO_ICON_SIZE * DEMO_ICON_SIZE, DEMO_ICON_SIZE, DEMO_ICON_SIZE)


def main() -> int:
    """Show the demo tray until Quit is chosen or a signal arrives."""
    configure_logging()
    LOGGER.info(
        "Process starting (python=%s, platform=%s)",
        sys.version.split()[0],
        sys.platform,
    )
    settings = TraySettings.load()
    stop_event = threading.Event()

    try:
        tray = TrayItem(DEMO_TITLE, demo_icon(), settings=settings)
    except ServiceUnavailableError as exc:
        LOGGER.error("Tray is unavailable: %s", exc)
        return 1

    clicks = {"count": 0}
    item_ids: dict[str, int] = {}

    def on_click() -> None:
        clicks["count"] += 1
        LOGGER.info("Icon clicked (%d so far)", clicks["count"])

    def on_double_click() -> None:
        LOGGER.info("Icon double-clicked")
        tray.set_icon(demo_icon((67, 160, 71)))

    def count_item() -> None:
        if "counter" in item_ids:
            tray.rename_menu_item(item_ids["counter"], f"Clicks: {clicks['count']}")

    try:
        tray.add_label(DEMO_TITLE)
        tray.set_icon_click_callback(on_click)
        tray.set_icon_double_click_callback(on_double_click)
        item_ids["counter"] = tray.add_menu_item_with_id("Clicks: 0", count_item)
        tray.add_menu_item("Reset icon", lambda: tray.set_icon(demo_icon()))
        tray.add_separator()
        tray.add_menu_item("Quit", stop_event.set)
    except ServiceUnavailableError as exc:
        LOGGER.error("Tray stopped during setup: %s", exc)
        tray.shutdown()
        return 1

    def handle_signal(signum: int, frame: object) -> None:
        LOGGER.info("Received signal %s, shutting down", signum)
        stop_event.set()

    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            signal.signal(sig, handle_signal)
        except ValueError:
            pass

    try:
        while not stop_event.wait(0.2):
            pass
    finally:
        tray.shutdown()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
