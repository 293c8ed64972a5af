from __future__ import annotations

import threading
from dataclasses import dataclass

from typeclosure.analysis.namespace import TypeId


@dataclass(frozen=True)
class ClosureCacheStats:
    hits: int
    misses: int
    stores: int
    size: int


class ClosureCache:
    """Append-only ``type -> filtered ancestor set`` memo shared by all callers.

    Reads and writes go straight to a dict with no lock around the
    lookup/store pair. Two threads may both miss and both store the same key;
    stored values are pure functions of immutable inputs, so the second store
    writes an equal value. Entries are never removed.
    """

    def __init__(self) -> None:
        self._values: dict[TypeId, frozenset[TypeId]] = {}
        self._stats_lock = threading.Lock()
        self.hits = 0
        self.misses = 0
        self.stores = 0

    def get(self, type_id: TypeId) -> frozenset[TypeId] | None:
        cached = self._values.get(type_id)
        with self._stats_lock:
            if cached is None:
                self.misses += 1
            else:
                self.hits += 1
        return cached

    def store(self, type_id: TypeId, value: frozenset[TypeId]) -> frozenset[TypeId]:
        self._values[type_id] = value
        with self._stats_lock:
            self.stores += 1
        return value

    def __contains__(self, type_id: object) -> bool:
        return type_id in self._values

    def __len__(self) -> int:
        return len(self._values)

    def snapshot(self) -> dict[TypeId, frozenset[TypeId]]:
        return dict(self._values)

    def stats(self) -> ClosureCacheStats:
        with self._stats_lock:
            return ClosureCacheStats(
                hits=self.hits,
                misses=self.misses,
                stores=self.stores,
                size=len(self._values),
            )
