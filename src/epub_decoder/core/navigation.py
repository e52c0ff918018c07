"""Stateful cursor over the navigation tree."""

from collections.abc import Sequence

from epub_decoder.exceptions import NoChildren, NoNextSibling, NoParent, NoPreviousSibling
from epub_decoder.models.navigation import NavPoint


class NavigationCursor:
    """Walk the table of contents one level at a time.

    The cursor only reads the tree, so any number of cursors may share it.
    A failed move raises a NavigationError and leaves the position unchanged.

    Example:
        nav = book.navigation()
        while True:
            print(nav.title, nav.url)
            if nav.is_last:
                break
            nav.next()
    """

    def __init__(self, forest: Sequence[NavPoint]):
        if not forest:
            raise ValueError("Navigation cursor needs at least one NavPoint")
        # Ancestor return points: (sibling list, index)
        self._parents: list[tuple[Sequence[NavPoint], int]] = []
        self._siblings: Sequence[NavPoint] = forest
        self._index = 0

    def __repr__(self) -> str:
        return f"NavigationCursor(position={self.position}, title={self.title!r})"

    @property
    def current(self) -> NavPoint:
        return self._siblings[self._index]

    @property
    def title(self) -> str:
        return self.current.title

    @property
    def url(self) -> str:
        """Target of the entry: a path, often followed by "#fragment".

        The path can be opened with Epub.open_file().
        """
        return self.current.target

    @property
    def has_children(self) -> bool:
        return len(self.current.children) > 0

    @property
    def has_parents(self) -> bool:
        return len(self._parents) > 0

    @property
    def is_first(self) -> bool:
        """Is this the first entry of its level?"""
        return self._index == 0

    @property
    def is_last(self) -> bool:
        """Is this the last entry of its level?"""
        return self._index == len(self._siblings) - 1

    @property
    def depth(self) -> int:
        return len(self._parents)

    @property
    def position(self) -> tuple[int, ...]:
        """Indices from the top level down to the current entry."""
        return tuple(index for _, index in self._parents) + (self._index,)

    def next(self) -> NavPoint:
        """Move to the next entry on the same level.

        Raises:
            NoNextSibling: If this is the last entry
        """
        if self.is_last:
            raise NoNextSibling(f"{self.title!r} is the last entry")
        self._index += 1
        return self.current

    def previous(self) -> NavPoint:
        """Move to the previous entry on the same level.

        Raises:
            NoPreviousSibling: If this is the first entry
        """
        if self.is_first:
            raise NoPreviousSibling(f"{self.title!r} is the first entry")
        self._index -= 1
        return self.current

    def descend(self) -> NavPoint:
        """Move one level in, to the first child.

        Raises:
            NoChildren: If the entry has no children
        """
        if not self.has_children:
            raise NoChildren(f"{self.title!r} has no children")
        children = self.current.children
        self._parents.append((self._siblings, self._index))
        self._siblings = children
        self._index = 0
        return self.current

    def ascend(self) -> NavPoint:
        """Move one level out, back to the entry descend() started from.

        Raises:
            NoParent: If the cursor is on the top level
        """
        if not self.has_parents:
            raise NoParent(f"{self.title!r} has no parent")
        self._siblings, self._index = self._parents.pop()
        return self.current

    def copy(self) -> "NavigationCursor":
        """Independent cursor at the same position."""
        clone = NavigationCursor.__new__(NavigationCursor)
        clone._parents = list(self._parents)
        clone._siblings = self._siblings
        clone._index = self._index
        return clone

    __copy__ = copy
