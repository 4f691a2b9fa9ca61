"""A simple ordered list of strings with lookup and deletion by value."""

from __future__ import annotations

from typing import Iterable, Iterator, Optional


class StringList:
    """Ordered collection of strings."""

    def __init__(self, items: Iterable[str] = ()) -> None:
        self._items = list(items)

    def add(self, name: str) -> None:
        """Append *name* to the list."""
        self._items.append(name)

    def find(self, name: str) -> Optional[str]:
        """Return the first stored string equal to *name*, or ``None``."""
        return next((item for item in self._items if item == name), None)

    def delete(self, name: str) -> None:
        """Remove the first string equal to *name*.

        Raises :class:`ValueError` if there is none.
        """
        try:
            self._items.remove(name)
        except ValueError:
            raise ValueError(f"{name!r} is not in the list") from None

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __contains__(self, name: object) -> bool:
        return name in self._items

    def __getitem__(self, index: int) -> str:
        return self._items[index]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._items!r})"