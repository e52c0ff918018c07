"""Lazy iteration over the reading order."""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, BinaryIO

from epub_decoder.models.package import SpineEntry

if TYPE_CHECKING:
    from epub_decoder.core.epub import Epub


@dataclass(frozen=True)
class SpineItem:
    """One position of the reading order. Content is opened on demand."""

    index: int
    idref: str
    linear: bool
    epub: "Epub" = field(repr=False, compare=False)

    @property
    def path(self) -> str | None:
        """Manifest path of the item, or None if the id is not in the manifest."""
        item = self.epub.manifest.get(self.idref)
        return item.path if item is not None else None

    def open(self) -> BinaryIO:
        """Open the content file.

        Raises:
            UnknownManifestId: If the spine references an id missing from the manifest
        """
        return self.epub.open_file_by_id(self.idref)


class SpineCursor:
    """Iterator over the spine, starting before the first entry.

    Yields SpineItem objects; nothing is opened until SpineItem.open() is
    called. An empty spine simply yields nothing.
    """

    def __init__(self, epub: "Epub", entries: tuple[SpineEntry, ...]):
        self._epub = epub
        self._entries = entries
        self._index = -1

    def __iter__(self) -> "SpineCursor":
        return self

    def __next__(self) -> SpineItem:
        if self._index + 1 >= len(self._entries):
            self._index = len(self._entries)
            raise StopIteration
        self._index += 1
        return self._item(self._index)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"SpineCursor(position={self._index}, length={len(self._entries)})"

    def _item(self, index: int) -> SpineItem:
        entry = self._entries[index]
        return SpineItem(index=index, idref=entry.idref, linear=entry.linear, epub=self._epub)

    @property
    def position(self) -> int:
        """Index of the current entry: -1 before the first, len() once exhausted."""
        return self._index

    @property
    def current(self) -> SpineItem | None:
        if 0 <= self._index < len(self._entries):
            return self._item(self._index)
        return None

    @property
    def is_first(self) -> bool:
        return self._index == 0 and len(self._entries) > 0

    @property
    def is_last(self) -> bool:
        return len(self._entries) > 0 and self._index == len(self._entries) - 1

    def open(self) -> BinaryIO:
        """Open the content file of the current entry.

        Raises:
            IndexError: If the cursor is before the first or past the last entry
        """
        item = self.current
        if item is None:
            raise IndexError("Spine cursor is not positioned on an entry")
        return item.open()

    def rewind(self) -> None:
        """Go back to before the first entry."""
        self._index = -1
