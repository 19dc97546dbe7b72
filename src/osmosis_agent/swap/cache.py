"""Bounded, single-use store for swap quotes awaiting execution.

A quote is written when an agent asks for it and consumed when the agent
executes it. Consumption is an atomic get-and-delete, so a quote id can back
at most one broadcast no matter how many callers race for it.
"""

import logging
import threading
from collections import OrderedDict
from typing import Generic, Optional, TypeVar

from osmosis_agent.errors import QuoteNotFoundError

logger = logging.getLogger(__name__)

DEFAULT_CAPACITY = 100

Q = TypeVar("Q")


class QuoteCache(Generic[Q]):
    """LRU cache of quotes keyed by quote id.

    `get` and `set` both refresh recency; inserting past capacity evicts the
    least recently used entry.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY):
        if capacity < 1:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self.capacity = capacity
        self._entries: OrderedDict[str, Q] = OrderedDict()
        self._lock = threading.Lock()

    def set(self, quote_id: str, quote: Q) -> None:
        with self._lock:
            self._entries[quote_id] = quote
            self._entries.move_to_end(quote_id)
            while len(self._entries) > self.capacity:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug(f"Evicted quote {evicted}")

    def get(self, quote_id: str) -> Optional[Q]:
        with self._lock:
            quote = self._entries.get(quote_id)
            if quote is not None:
                self._entries.move_to_end(quote_id)
            return quote

    def delete(self, quote_id: str) -> bool:
        """Remove a quote; returns whether it was present."""
        with self._lock:
            return self._entries.pop(quote_id, None) is not None

    def redeem(self, quote_id: str) -> Q:
        """Take a quote out of the cache for execution.

        Raises:
            QuoteNotFoundError: If the id is unknown, evicted or already redeemed
        """
        with self._lock:
            quote = self._entries.pop(quote_id, None)
        if quote is None:
            raise QuoteNotFoundError(quote_id)
        return quote

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, quote_id: object) -> bool:
        with self._lock:
            return quote_id in self._entries
