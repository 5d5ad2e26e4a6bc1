"""In-memory per-client registry of compare and recently-viewed state."""
from __future__ import annotations

import time
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Optional

from ..core.config import settings
from .selection import CompareSelection, RecentlyViewed


@dataclass
class ClientSelection:
    """Ephemeral selection state owned by one browser client."""

    client_id: str
    compare: CompareSelection = field(default_factory=lambda: CompareSelection(settings.compare_capacity))
    recent: RecentlyViewed = field(default_factory=lambda: RecentlyViewed(settings.recently_viewed_limit))


@dataclass
class _SelectionEntry:
    state: ClientSelection
    last_seen: float


class SelectionStore:
    """Very small in-memory selection registry with TTL eviction.

    Entries are kept in last-seen order; once ``max_clients`` is reached the
    least recently seen client is dropped to make room.
    """

    def __init__(self, ttl_seconds: int = 3600, max_clients: int = 10_000) -> None:
        if max_clients < 1:
            raise ValueError("max_clients must be positive")
        self._ttl = ttl_seconds
        self._max_clients = max_clients
        self._selections: "OrderedDict[str, _SelectionEntry]" = OrderedDict()

    def __len__(self) -> int:
        return len(self._selections)

    def get(self, client_id: str) -> Optional[ClientSelection]:
        self._evict_expired()
        entry = self._selections.get(client_id)
        if not entry:
            return None
        entry.last_seen = time.time()
        self._selections.move_to_end(client_id)
        return entry.state

    def get_or_create(self, client_id: str) -> ClientSelection:
        state = self.get(client_id)
        if state is None:
            while len(self._selections) >= self._max_clients:
                self._selections.popitem(last=False)
            state = ClientSelection(client_id=client_id)
            self._selections[client_id] = _SelectionEntry(state=state, last_seen=time.time())
        return state

    def _evict_expired(self) -> None:
        now = time.time()
        # oldest first, so stop at the first live entry
        while self._selections:
            key, entry = next(iter(self._selections.items()))
            if now - entry.last_seen <= self._ttl:
                break
            self._selections.pop(key, None)


selection_store = SelectionStore(
    ttl_seconds=settings.selection_ttl_seconds,
    max_clients=settings.selection_max_clients,
)
