"""Tests for the tray state activation handler and rendering."""

from __future__ import annotations

from typing import List

from tray_item.icons import IconSource
from tray_item.state import TrayState


def _state(events: List[str]) -> TrayState:
    state = TrayState("Demo", IconSource.resource("demo"))
    state.callbacks.set_click(lambda: events.append("click"))
    state.callbacks.set_double_click(lambda: events.append("double"))
    return state


def test_every_activation_fires_click_once() -> None:
    events: List[str] = []
    state = _state(events)
    for now in (0.0, 1.0, 2.0, 3.0):
        state.activate(now)
    assert events == ["click"] * 4


def test_double_click_fires_after_click() -> None:
    events: List[str] = []
    state = _state(events)
    assert state.activate(0.0).fired_double is False
    assert state.activate(0.1).fired_double is True
    assert state.activate(0.12).fired_double is False
    assert events == ["click", "click", "double", "click"]


def test_render_reports_title_icon_and_menu() -> None:
    state = TrayState("Demo", IconSource.resource("demo"))
    state.menu.append_label("Heading")
    state.icon = IconSource.resource("other")

    rendering = state.render()

    assert rendering.title == "Demo"
    assert rendering.icon == IconSource.resource("other")
    assert [row.text for row in rendering.menu] == ["Heading"]
