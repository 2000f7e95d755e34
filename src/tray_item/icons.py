"""Icon specifications and their conversion to Pillow images.

The tray state stores an :class:`IconSource` verbatim. Only the pystray
backend turns it into an image, resolving named icons against the usual
freedesktop locations and falling back to a transparent placeholder when
nothing usable is found.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterable, Optional, Sequence, Tuple

from PIL import Image

LOGGER = logging.getLogger("tray_item.icons")

DEFAULT_ICON_SEARCH_DIRS: Tuple[str, ...] = (
    "~/.local/share/icons/hicolor",
    "/usr/share/icons/hicolor",
    "/usr/share/pixmaps",
)
_THEME_SIZES = ("256x256", "128x128", "64x64", "48x48", "32x32", "24x24", "22x22", "16x16")
_EXTENSIONS = (".png", ".ico", ".xpm")


class IconKind(str, Enum):
    """How an icon source identifies its image."""

    RESOURCE = "resource"
    PIXELS = "pixels"


@dataclass(frozen=True)
class IconSource:
    """Either a named icon resource or raw ARGB32 pixel data."""

    kind: IconKind
    name: str = ""
    data: bytes = b""
    width: int = 0
    height: int = 0

    @classmethod
    def resource(cls, name: str) -> "IconSource":
        """Reference an icon by theme name or filesystem path."""
        return cls(kind=IconKind.RESOURCE, name=name)

    @classmethod
    def pixels(cls, data: bytes, width: int, height: int) -> "IconSource":
        """Wrap ARGB32 (network byte order) pixel data."""
        return cls(kind=IconKind.PIXELS, data=bytes(data), width=width, height=height)

    @property
    def icon_name(self) -> str:
        """Return the theme name, or an empty string for pixel data."""
        return self.name if self.kind is IconKind.RESOURCE else ""


def load_image(
    icon: IconSource,
    *,
    search_dirs: Sequence[str] = DEFAULT_ICON_SEARCH_DIRS,
    size: int = 32,
) -> Image.Image:
    """Build a Pillow image for ``icon``, never raising for bad input."""
    if icon.kind is IconKind.PIXELS:
        image = _image_from_pixels(icon)
    else:
        image = _image_from_resource(icon.name, search_dirs)
    if image is None:
        return placeholder_image(size)
    return image


def placeholder_image(size: int) -> Image.Image:
    """Return a fully transparent square image."""
    return Image.new("RGBA", (size, size), (0, 0, 0, 0))


def resolve_icon_path(name: str, search_dirs: Iterable[str]) -> Optional[Path]:
    """Locate a named icon on disk.

    Order:
    1) ``name`` itself when it points at an existing file
    2) ``<dir>/<size>/apps/<name><ext>`` for hicolor-style theme dirs
    3) ``<dir>/<name><ext>`` for flat dirs such as /usr/share/pixmaps
    """
    if not name:
        return None
    direct = Path(name).expanduser()
    if direct.is_file():
        return direct
    for raw_dir in search_dirs:
        base = Path(raw_dir).expanduser()
        if not base.is_dir():
            continue
        for size in _THEME_SIZES:
            found = _first_existing(base / size / "apps", name)
            if found:
                return found
        found = _first_existing(base, name)
        if found:
            return found
    return None


def _first_existing(folder: Path, name: str) -> Optional[Path]:
    for ext in _EXTENSIONS:
        path = folder / f"{name}{ext}"
        if path.is_file():
            return path
    return None


def _image_from_resource(name: str, search_dirs: Sequence[str]) -> Optional[Image.Image]:
    path = resolve_icon_path(name, search_dirs)
    if path is None:
        LOGGER.warning("Icon %r not found; using placeholder", name)
        return None
    try:
        with Image.open(path) as im:
            return im.convert("RGBA")
    except (OSError, ValueError):
        LOGGER.warning("Failed to open icon %s; using placeholder", path, exc_info=True)
        return None


def _image_from_pixels(icon: IconSource) -> Optional[Image.Image]:
    try:
        return Image.frombytes(
            "RGBA", (icon.width, icon.height), icon.data, "raw", "ARGB"
        )
    except (ValueError, SystemError):
        LOGGER.warning(
            "Invalid %dx%d pixel icon (%d bytes); using placeholder",
            icon.width,
            icon.height,
            len(icon.data),
        )
        return None
