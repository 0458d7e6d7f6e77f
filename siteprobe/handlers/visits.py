"""Per-run record of locations already visited."""

from typing import Iterator, Set


class VisitTracker:
    """
    Set of visited locations, keyed by the exact location string.

    No normalisation is applied: ``/menus`` and ``/menus/`` or a URL with and
    without a query string are different entries. Entries are never removed.
    """

    def __init__(self):
        self._visited: Set[str] = set()

    def seen(self, location: str) -> bool:
        return location in self._visited

    def mark(self, location: str) -> None:
        self._visited.add(location)

    def __contains__(self, location: str) -> bool:
        return self.seen(location)

    def __len__(self) -> int:
        return len(self._visited)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._visited))
