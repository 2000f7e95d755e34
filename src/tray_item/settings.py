"""Persistent tray settings and convenience helpers."""

from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from .icons import DEFAULT_ICON_SEARCH_DIRS

SETTINGS_ENV_VAR = "TRAY_ITEM_SETTINGS_PATH"
BACKENDS = ("pystray", "headless")


@dataclass
class TraySettings:
    """User-adjustable settings persisted to disk."""

    backend: str = "pystray"
    icon_search_dirs: List[str] = field(
        default_factory=lambda: list(DEFAULT_ICON_SEARCH_DIRS)
    )
    icon_size: int = 32
    # Seconds to wait for the worker thread on shutdown
    worker_join_timeout: float = 2.0

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the settings to a dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "TraySettings":
        """Create a settings instance from a dictionary payload.

        Unknown keys are ignored so older or newer files still load.
        """
        defaults = cls()
        data = dict(payload)
        if isinstance(data.get("backend"), str):
            data["backend"] = data["backend"].strip().lower()
        if "icon_search_dirs" in data:
            data["icon_search_dirs"] = [str(p) for p in data["icon_search_dirs"]]
        if "icon_size" in data:
            data["icon_size"] = int(data["icon_size"])
        if "worker_join_timeout" in data:
            data["worker_join_timeout"] = float(data["worker_join_timeout"])
        return cls(
            **{
                name: data.get(name, getattr(defaults, name))
                for name in cls.__annotations__
            }
        )

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "TraySettings":
        """Load settings from disk, falling back to defaults."""
        settings_path = path or default_settings_path()
        if settings_path.is_file():
            try:
                payload = json.loads(settings_path.read_text(encoding="utf-8"))
            except (json.JSONDecodeError, OSError):
                payload = {}
            if not isinstance(payload, dict):
                payload = {}
            return cls.from_dict(payload)
        return cls()

    def save(self, path: Optional[Path] = None) -> None:
        """Persist the settings to disk."""
        settings_path = path or default_settings_path()
        settings_path.parent.mkdir(parents=True, exist_ok=True)
        serialized = json.dumps(self.to_dict(), indent=2, sort_keys=True)
        settings_path.write_text(serialized, encoding="utf-8")


def default_config_dir() -> Path:
    """Resolve the directory holding settings and logs."""
    xdg = os.getenv("XDG_CONFIG_HOME")
    base = Path(xdg) if xdg else Path.home() / ".config"
    return base / "tray-item"


def default_settings_path() -> Path:
    """Resolve the path used to persist settings."""
    override = os.getenv(SETTINGS_ENV_VAR)
    if override:
        return Path(override)
    return default_config_dir() / "settings.json"


def default_log_path() -> Path:
    """Resolve the rolling log file location."""
    return default_config_dir() / "tray_item.log"
