"""Menu entries and the ordered menu model owned by the tray state."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Iterator, List, Optional, Tuple, Union

MenuAction = Callable[[], None]


@dataclass(frozen=True)
class Label:
    """Non-interactive heading; always rendered disabled."""

    text: str


@dataclass(frozen=True)
class ActionItem:
    """Clickable entry identified by a tray-unique numeric id."""

    id: int
    text: str
    action: MenuAction


@dataclass(frozen=True)
class Separator:
    """Visual divider between groups of entries."""


MenuEntry = Union[Label, ActionItem, Separator]


class EntryKind(str, Enum):
    """Kinds of rows produced by the rendering projection."""

    LABEL = "label"
    ACTION = "action"
    SEPARATOR = "separator"


@dataclass(frozen=True)
class RenderedEntry:
    """A menu row as a backend should draw it."""

    kind: EntryKind
    text: str = ""
    enabled: bool = False
    action: Optional[MenuAction] = None
    item_id: Optional[int] = None


class MenuProjection:
    """Lazy, restartable view over a snapshot of the menu entries."""

    def __init__(self, entries: Tuple[MenuEntry, ...]) -> None:
        self._entries = entries

    def __iter__(self) -> Iterator[RenderedEntry]:
        for entry in self._entries:
            yield _render(entry)

    def __len__(self) -> int:
        return len(self._entries)


class MenuModel:
    """Ordered menu entries plus the monotonic action id counter."""

    def __init__(self) -> None:
        self._entries: List[MenuEntry] = []
        self._next_id = 0

    @property
    def entries(self) -> Tuple[MenuEntry, ...]:
        """Return a snapshot of the entries in display order."""
        return tuple(self._entries)

    @property
    def next_id(self) -> int:
        """Return the identifier the next action item will receive."""
        return self._next_id

    def __len__(self) -> int:
        return len(self._entries)

    def append_label(self, text: str) -> None:
        self._entries.append(Label(text))

    def append_action(self, text: str, action: MenuAction) -> int:
        """Append a clickable item and return its newly allocated id."""
        item_id = self._next_id
        self._next_id += 1
        self._entries.append(ActionItem(id=item_id, text=text, action=action))
        return item_id

    def append_separator(self) -> None:
        self._entries.append(Separator())

    def find_action(self, item_id: int) -> Optional[ActionItem]:
        """Return the action item with ``item_id``, if any."""
        for entry in self._entries:
            if isinstance(entry, ActionItem) and entry.id == item_id:
                return entry
        return None

    def rename_action(self, item_id: int, text: str) -> bool:
        """Replace the text of the item with ``item_id`` in place.

        Unknown ids are ignored; the return value reports whether an item
        was renamed.
        """
        for index, entry in enumerate(self._entries):
            if isinstance(entry, ActionItem) and entry.id == item_id:
                self._entries[index] = replace(entry, text=text)
                return True
        return False

    def projection(self) -> MenuProjection:
        """Return the rendering projection of the current entries."""
        return MenuProjection(tuple(self._entries))


def _render(entry: MenuEntry) -> RenderedEntry:
    if isinstance(entry, Label):
        return RenderedEntry(EntryKind.LABEL, text=entry.text, enabled=False)
    if isinstance(entry, ActionItem):
        return RenderedEntry(
            EntryKind.ACTION,
            text=entry.text,
            enabled=True,
            action=entry.action,
            item_id=entry.id,
        )
    return RenderedEntry(EntryKind.SEPARATOR)
