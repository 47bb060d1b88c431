"""Fixed-capacity open-addressing table mapping fingerprints to scores."""

from __future__ import annotations

import logging
from typing import Dict, Iterator, Optional, Tuple

import numpy as np

from poisonbar.core import EMPTY_FINGERPRINT

logger = logging.getLogger(__name__)

MAX_PROBES = 100


class TranspositionTable:
    """Linear-probing hash table with a capacity fixed at construction.

    The table never grows and never evicts. Once every slot is occupied,
    inserts are dropped and lookups answer "not found" for every key,
    including keys stored earlier. Callers must size the table above the
    number of distinct positions a search can reach, and must give each
    search session its own table (or ``reset`` it in between).
    """

    def __init__(self, capacity: int, *, max_probes: int = MAX_PROBES) -> None:
        if capacity < 1:
            raise ValueError("Transposition table capacity must be positive.")
        if max_probes < 0:
            raise ValueError("max_probes must be non-negative.")
        self.capacity = capacity
        self.max_probes = max_probes
        self._keys = np.full(capacity, EMPTY_FINGERPRINT, dtype=np.uint64)
        self._scores = np.zeros(capacity, dtype=np.float64)
        self._size = 0
        self.hits = 0
        self.misses = 0
        self.dropped = 0

    def __len__(self) -> int:
        return self._size

    def __repr__(self) -> str:
        return f"TranspositionTable(size={self._size}, capacity={self.capacity})"

    @property
    def is_saturated(self) -> bool:
        return self._size == self.capacity

    def insert(self, fingerprint: int, score: float) -> bool:
        """Store ``score`` under ``fingerprint``; False if the insert was dropped."""
        if self.is_saturated:
            logger.warning("Transposition table completely filled (%d entries); ignoring insert", self.capacity)
            self.dropped += 1
            return False

        index = fingerprint % self.capacity
        for _ in range(self.max_probes + 1):
            if int(self._keys[index]) == EMPTY_FINGERPRINT:
                self._keys[index] = fingerprint
                self._scores[index] = score
                self._size += 1
                return True
            index = (index + 1) % self.capacity

        logger.warning(
            "Insert of fingerprint %#x abandoned after %d probes", fingerprint, self.max_probes
        )
        self.dropped += 1
        return False

    def lookup(self, fingerprint: int) -> Optional[float]:
        # A saturated table has no empty slot to stop a miss, so it refuses
        # every query. Entries stored before saturation become unreachable.
        if self.is_saturated:
            logger.debug("Transposition table completely filled; ignoring lookup")
            self.misses += 1
            return None

        index = fingerprint % self.capacity
        for _ in range(self.max_probes + 1):
            key = int(self._keys[index])
            if key == fingerprint:
                self.hits += 1
                return float(self._scores[index])
            if key == EMPTY_FINGERPRINT:
                self.misses += 1
                return None
            index = (index + 1) % self.capacity

        logger.debug("Lookup of fingerprint %#x gave up after %d probes", fingerprint, self.max_probes)
        self.misses += 1
        return None

    def reset(self) -> None:
        self._keys.fill(EMPTY_FINGERPRINT)
        self._scores.fill(0.0)
        self._size = 0
        self.hits = 0
        self.misses = 0
        self.dropped = 0

    def items(self) -> Iterator[Tuple[int, float]]:
        """Yield stored ``(fingerprint, score)`` pairs in slot order."""
        occupied = np.flatnonzero(self._keys != np.uint64(EMPTY_FINGERPRINT))
        for index in occupied:
            yield int(self._keys[index]), float(self._scores[index])

    def stats(self) -> Dict[str, float]:
        total_lookups = self.hits + self.misses
        return {
            "entries": self._size,
            "capacity": self.capacity,
            "load_factor": self._size / self.capacity,
            "hits": self.hits,
            "misses": self.misses,
            "dropped": self.dropped,
            "hit_rate": self.hits / total_lookups if total_lookups > 0 else 0.0,
        }
