"""Client-side selection state: compare queue, recently viewed, favorites."""
from __future__ import annotations

import enum
import logging
from typing import Awaitable, Callable, Iterable, Iterator

logger = logging.getLogger(__name__)

DEFAULT_COMPARE_CAPACITY = 4
DEFAULT_RECENT_LIMIT = 5


class AddResult(str, enum.Enum):
    ADDED = "added"
    DUPLICATE = "duplicate"
    FULL = "full"


class CompareSelection:
    """Ordered set of listing ids queued for comparison, capped at ``capacity``."""

    def __init__(self, capacity: int = DEFAULT_COMPARE_CAPACITY, ids: Iterable[str] = ()) -> None:
        if capacity < 1:
            raise ValueError("capacity must be positive")
        self.capacity = capacity
        self._ids: list[str] = []
        for listing_id in ids:
            self.add(listing_id)

    def add(self, listing_id: str) -> AddResult:
        """Append ``listing_id``; a full selection rejects it and stays unchanged."""

        if listing_id in self._ids:
            return AddResult.DUPLICATE
        if len(self._ids) >= self.capacity:
            return AddResult.FULL
        self._ids.append(listing_id)
        return AddResult.ADDED

    def remove(self, listing_id: str) -> None:
        if listing_id in self._ids:
            self._ids.remove(listing_id)

    def contains(self, listing_id: str) -> bool:
        return listing_id in self._ids

    def clear(self) -> None:
        self._ids.clear()

    @property
    def ids(self) -> tuple[str, ...]:
        return tuple(self._ids)

    @property
    def is_full(self) -> bool:
        return len(self._ids) >= self.capacity

    def __contains__(self, listing_id: object) -> bool:
        return listing_id in self._ids

    def __iter__(self) -> Iterator[str]:
        return iter(tuple(self._ids))

    def __len__(self) -> int:
        return len(self._ids)


class RecentlyViewed:
    """Most-recent-first trail of viewed listing ids."""

    def __init__(self, limit: int = DEFAULT_RECENT_LIMIT) -> None:
        self.limit = limit
        self._ids: list[str] = []

    def record_view(self, listing_id: str) -> None:
        if listing_id in self._ids:
            self._ids.remove(listing_id)
        self._ids.insert(0, listing_id)
        del self._ids[self.limit :]

    def recent(self) -> list[str]:
        return list(self._ids)


class FavoritesState:
    """Local favorites set kept in step with a remote store optimistically.

    The local flip happens before the remote command is awaited; if the
    command fails the flip is undone and the error is re-raised.
    """

    def __init__(self, favorites: Iterable[str] = ()) -> None:
        self._ids: set[str] = set(favorites)

    def contains(self, listing_id: str) -> bool:
        return listing_id in self._ids

    @property
    def ids(self) -> frozenset[str]:
        return frozenset(self._ids)

    async def set_favorite(
        self,
        listing_id: str,
        desired: bool,
        commit: Callable[[str, bool], Awaitable[None]],
    ) -> None:
        previous = listing_id in self._ids
        self._apply(listing_id, desired)
        try:
            await commit(listing_id, desired)
        except Exception:
            logger.warning("Reverting favorite %s after remote failure", listing_id)
            self._apply(listing_id, previous)
            raise

    def _apply(self, listing_id: str, present: bool) -> None:
        if present:
            self._ids.add(listing_id)
        else:
            self._ids.discard(listing_id)
