"""
Evaluation Cache

Optional read-through memoization keyed by a hash of the normalized input.
The cache is a plain object owned by the caller; there is no process-wide
instance. A hit returns exactly what the miss computed.
"""
from __future__ import annotations

import hashlib
import json
import threading
from collections import OrderedDict
from typing import Callable, Generic, Optional, TypeVar

from fertility import config
from fertility.core.base import PatientInput
from fertility.utils import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


def input_hash(patient: PatientInput) -> str:
    """SHA-256 of the normalized input's canonical JSON form."""
    payload = json.dumps(patient.to_dict(), sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


class EvaluationCache(Generic[T]):
    """
    Thread-safe LRU cache for evaluation results.

    Args:
        max_entries: Maximum number of stored results (oldest evicted first)
    """

    def __init__(self, max_entries: Optional[int] = None):
        self.max_entries = max(1, max_entries or config.CACHE_MAX_ENTRIES)
        self._entries: "OrderedDict[str, T]" = OrderedDict()
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def get(self, key: str) -> Optional[T]:
        with self._lock:
            value = self._entries.get(key)
            if value is not None:
                self._entries.move_to_end(key)
                self.hits += 1
            else:
                self.misses += 1
            return value

    def put(self, key: str, value: T) -> None:
        with self._lock:
            self._entries[key] = value
            self._entries.move_to_end(key)
            while len(self._entries) > self.max_entries:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug(f"EvaluationCache evicted {evicted[:12]}")

    def get_or_compute(self, key: str, compute: Callable[[], T]) -> T:
        cached = self.get(key)
        if cached is not None:
            return cached
        value = compute()
        self.put(key, value)
        return value

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self.hits = 0
            self.misses = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._entries
