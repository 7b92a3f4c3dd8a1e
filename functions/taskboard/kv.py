"""
Key-value abstraction for the theme setting.

Supports an in-memory fallback for tests/local runs and a Redis-backed
implementation for production.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Protocol

import redis

DEFAULT_THEME = "light"


class KvClient(Protocol):
    """Minimal string key-value interface."""

    def get(self, key: str) -> Optional[str]:
        ...

    def put(self, key: str, value: str) -> None:
        ...


@dataclass
class InMemoryKvClient:
    """Dict-backed store for testing/dev."""

    items: dict[str, str] = field(default_factory=dict)

    def get(self, key: str) -> Optional[str]:
        return self.items.get(key)

    def put(self, key: str, value: str) -> None:
        self.items[key] = value


@dataclass
class RedisKvClient:
    """Redis-backed store using plain string keys."""

    url: str

    def __post_init__(self):
        self.client = redis.Redis.from_url(self.url)

    def get(self, key: str) -> Optional[str]:
        value = self.client.get(key)
        if value is None:
            return None
        return value.decode("utf-8")

    def put(self, key: str, value: str) -> None:
        self.client.set(key, value)


@dataclass
class ThemeStore:
    """Get-or-default and overwrite semantics for the single theme setting."""

    kv: KvClient
    key: str = "theme"

    def get_theme(self) -> str:
        return self.kv.get(self.key) or DEFAULT_THEME

    def set_theme(self, value: str) -> None:
        self.kv.put(self.key, value)
