"""Tests for persisted tray settings and logging setup."""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

import pytest

from tray_item import settings as settings_module
from tray_item.logging_setup import configure_logging
from tray_item.settings import TraySettings, default_settings_path


def test_settings_roundtrip(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "settings.json"
    settings = TraySettings(
        backend="headless",
        icon_search_dirs=["/opt/icons"],
        icon_size=48,
        worker_join_timeout=0.5,
    )
    settings.save(path)
    assert TraySettings.load(path) == settings


def test_settings_defaults_when_missing_or_corrupt(tmp_path: Path) -> None:
    assert TraySettings.load(tmp_path / "missing.json") == TraySettings()
    corrupt = tmp_path / "corrupt.json"
    corrupt.write_text("{not json", encoding="utf-8")
    assert TraySettings.load(corrupt) == TraySettings()
    listing = tmp_path / "list.json"
    listing.write_text("[1, 2]", encoding="utf-8")
    assert TraySettings.load(listing) == TraySettings()


def test_from_dict_normalizes_and_ignores_unknown_keys() -> None:
    settings = TraySettings.from_dict(
        {"backend": " Headless ", "icon_size": "16", "legacy": True}
    )
    assert settings.backend == "headless"
    assert settings.icon_size == 16
    assert settings.icon_search_dirs == TraySettings().icon_search_dirs


def test_settings_path_env_override(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    target = tmp_path / "custom.json"
    monkeypatch.setenv(settings_module.SETTINGS_ENV_VAR, str(target))
    assert default_settings_path() == target

    monkeypatch.delenv(settings_module.SETTINGS_ENV_VAR)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    assert default_settings_path() == tmp_path / "tray-item" / "settings.json"


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for h in list(root.handlers):
        if h not in handlers:
            h.close()
        root.removeHandler(h)
    for h in handlers:
        root.addHandler(h)
    root.setLevel(level)


def test_configure_logging(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, restore_root_logger
) -> None:
    monkeypatch.setenv("TRAY_ITEM_LOG_LEVEL", "warning")
    log_path = tmp_path / "logs" / "tray.log"

    configure_logging(log_path)

    handlers = restore_root_logger.handlers
    assert len(handlers) == 2
    console, rolling = handlers
    assert console.level == logging.WARNING
    assert isinstance(rolling, RotatingFileHandler)
    assert rolling.level == logging.DEBUG

    logging.getLogger("tray_item.test").debug("hello file")
    rolling.flush()
    assert "hello file" in log_path.read_text(encoding="utf-8")
