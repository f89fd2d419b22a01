"""
Priority frontier for the weighted searches.

A heapq min-queue keyed on (priority, insertion sequence): equal priorities
come out in the order they were first inserted. Supports decrease-key by
invalidating the old heap entry and pushing a re-keyed copy that keeps the
original sequence number.
"""

import heapq
import itertools
from typing import Dict, Hashable, List, Tuple

_REMOVED = object()  # placeholder for an invalidated entry


class PriorityFrontier:
    """Min-priority frontier with FIFO tie-breaks and in-place decrease-key."""

    def __init__(self):
        self._heap: List[list] = []             # [priority, seq, item]
        self._entries: Dict[Hashable, list] = {}  # item -> newest live entry
        self._counter = itertools.count()
        self._live = 0

    def push(self, item: Hashable, priority: float) -> None:
        """Add a new entry. Earlier entries for the same item stay queued."""
        entry = [priority, next(self._counter), item]
        self._entries[item] = entry
        heapq.heappush(self._heap, entry)
        self._live += 1

    def replace(self, item: Hashable, priority: float) -> None:
        """
        Re-key item if it is queued, otherwise push it.

        The re-keyed entry keeps its original insertion sequence, so it
        tie-breaks exactly as if it had been updated where it stood.
        """
        entry = self._entries.get(item)
        if entry is None:
            self.push(item, priority)
            return
        seq = entry[1]
        entry[2] = _REMOVED
        new_entry = [priority, seq, item]
        self._entries[item] = new_entry
        heapq.heappush(self._heap, new_entry)

    def pop(self) -> Tuple[Hashable, float]:
        """Remove and return the (item, priority) with the lowest priority."""
        while self._heap:
            entry = heapq.heappop(self._heap)
            priority, _, item = entry
            if item is _REMOVED:
                continue
            self._live -= 1
            if self._entries.get(item) is entry:
                del self._entries[item]
            return item, priority
        raise IndexError("pop from an empty frontier")

    def __contains__(self, item: Hashable) -> bool:
        return item in self._entries

    def __len__(self) -> int:
        return self._live

    def __bool__(self) -> bool:
        return self._live > 0
