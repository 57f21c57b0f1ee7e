"""Stores for logged-out tokens.

Entries only need to outlive the token they refer to, so both backends drop
an entry once its expiry has passed.
"""
from __future__ import annotations

import hashlib
import threading
import time
from typing import Callable, Protocol

import redis


class TokenBlacklist(Protocol):
    def add(self, token: str, expires_at: float) -> None: ...

    def contains(self, token: str) -> bool: ...


class MemoryTokenBlacklist:
    """Process-local blacklist.

    Route handlers run on a threadpool, so every access goes through a lock.
    Expired entries are purged on each `add`.
    """

    def __init__(self, clock: Callable[[], float] = time.time):
        self._clock = clock
        self._lock = threading.Lock()
        self._entries: dict[str, float] = {}

    def add(self, token: str, expires_at: float) -> None:
        with self._lock:
            self._evict_expired()
            self._entries[token] = max(self._entries.get(token, 0.0), expires_at)

    def contains(self, token: str) -> bool:
        with self._lock:
            expires_at = self._entries.get(token)
            if expires_at is None:
                return False
            if expires_at <= self._clock():
                del self._entries[token]
                return False
            return True

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def _evict_expired(self) -> None:
        now = self._clock()
        for token in [t for t, exp in self._entries.items() if exp <= now]:
            del self._entries[token]


class RedisTokenBlacklist:
    """Blacklist shared by every worker through Redis key TTLs."""

    def __init__(self, client: redis.Redis, prefix: str = "bl:", clock: Callable[[], float] = time.time):
        self._client = client
        self._prefix = prefix
        self._clock = clock

    def _key(self, token: str) -> str:
        return self._prefix + hashlib.sha256(token.encode()).hexdigest()

    def add(self, token: str, expires_at: float) -> None:
        remaining = expires_at - self._clock()
        if remaining <= 0:
            return
        self._client.setex(name=self._key(token), time=int(remaining) + 1, value="1")

    def contains(self, token: str) -> bool:
        return bool(self._client.exists(self._key(token)))
