"""In-memory response cache with optional expiry."""

import logging
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

logger = logging.getLogger(__name__)

# Only this many leading characters of free-text inputs go into a key, so
# long inputs sharing a prefix share a cache entry.
KEY_PREFIX_LENGTH = 50


def character_names_key(story: str) -> str:
    """Cache key for character-name extraction."""
    return f"character_names_{story[:KEY_PREFIX_LENGTH]}"


def character_answer_key(query: str, character_name: str, summarized_story: str) -> str:
    """Cache key for an in-character answer. The character name is kept whole."""
    return (
        f"response_{query[:KEY_PREFIX_LENGTH]}_{character_name}_"
        f"{summarized_story[:KEY_PREFIX_LENGTH]}"
    )


@dataclass
class CacheEntry:
    """A cached value and the clock reading after which it is stale."""

    value: str
    expires_at: float | None = None

    def is_expired(self, now: float) -> bool:
        return self.expires_at is not None and now >= self.expires_at


class ResponseCache:
    """Memoizes expensive text results by key.

    Args:
        ttl_seconds: Lifetime of an entry; 0 keeps entries forever
        clock: Monotonic time source, replaceable in tests
    """

    def __init__(
        self,
        ttl_seconds: float = 0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if ttl_seconds < 0:
            raise ValueError(f"ttl_seconds must not be negative, got {ttl_seconds}")
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, key: str) -> str | None:
        """Return the live value for key, evicting it if expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.is_expired(self._clock()):
            del self._entries[key]
            return None
        return entry.value

    def set(self, key: str, value: str) -> None:
        expires_at = self._clock() + self.ttl_seconds if self.ttl_seconds else None
        self._entries[key] = CacheEntry(value=value, expires_at=expires_at)

    async def get_or_compute(
        self,
        key: str,
        compute: Callable[[], Awaitable[str]],
    ) -> str:
        """Return the cached value for key, computing and storing it on a miss.

        Exceptions raised by ``compute`` propagate and nothing is stored.
        """
        cached = self.get(key)
        if cached is not None:
            logger.debug(f"Cache hit: {key!r}")
            return cached

        value = await compute()
        self.set(key, value)
        return value

    def purge_expired(self) -> int:
        """Drop every expired entry and return how many were removed."""
        now = self._clock()
        expired = [key for key, entry in self._entries.items() if entry.is_expired(now)]
        for key in expired:
            del self._entries[key]
        return len(expired)

    def clear(self) -> None:
        self._entries.clear()
