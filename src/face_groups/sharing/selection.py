"""Set-valued selection over photo URIs.

One store belongs to one screen and one photo collection. Screens create
their own store; stores are never shared.
"""

from collections.abc import Callable, Iterable
from typing import TypeVar

T = TypeVar("T")


class SelectionStore:
    """Which photo URIs are currently marked for export."""

    def __init__(self) -> None:
        self._selected: set[str] = set()

    def toggle(self, key: str) -> bool:
        """Flip membership of ``key`` and return whether it is now selected."""
        if key in self._selected:
            self._selected.discard(key)
            return False
        self._selected.add(key)
        return True

    def clear(self) -> None:
        self._selected.clear()

    def is_selected(self, key: str) -> bool:
        return key in self._selected

    def size(self) -> int:
        return len(self._selected)

    def selected_subset(self, items: Iterable[T], key: Callable[[T], str]) -> list[T]:
        """Return the selected items, in the order of ``items``."""
        return [item for item in items if key(item) in self._selected]

    def __contains__(self, key: object) -> bool:
        return key in self._selected

    def __len__(self) -> int:
        return len(self._selected)
