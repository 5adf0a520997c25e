"""
Notes API — Abstract Cache Backend Interface
=============================================

What:  Abstract base class for the key-value cache in front of the store.
Why:   NoteService only needs get / set-with-TTL / delete by string key.
       Keeping that surface abstract lets tests substitute an in-memory fake
       and keeps Redis specifics (key prefixing, connection state) out of the
       cache-aside rules.
How:   RedisCacheService implements it with redis.asyncio.

Values are opaque serialized blobs. NoteService produces and consumes JSON.
"""

from abc import ABC, abstractmethod
from typing import Optional, Union


class CacheBackend(ABC):
    """
    Contract:
        - Keys are logical names such as "all_notes" or "note_<uuid>"
        - get() returns None for a missing or expired key
        - A failing command raises CacheError
    """

    @abstractmethod
    async def get(self, key: str) -> Optional[Union[str, bytes]]:
        """Return the stored value, or None on a miss."""
        ...

    @abstractmethod
    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        """Store value under key; it expires after ttl_seconds."""
        ...

    @abstractmethod
    async def delete(self, *keys: str) -> None:
        """Remove all given keys. Missing keys are ignored."""
        ...

    @abstractmethod
    async def health_check(self) -> bool:
        """True if the cache answers a lightweight probe."""
        ...
