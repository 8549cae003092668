"""In-memory local store."""

from __future__ import annotations

import asyncio


class MemoryLocalStore:
    """Process-local key/value store for tests and ephemeral clients."""

    def __init__(self) -> None:
        self._lock = asyncio.Lock()
        self._values: dict[str, str] = {}

    async def get(self, key: str) -> str | None:
        async with self._lock:
            return self._values.get(key)

    async def set(self, key: str, value: str) -> None:
        async with self._lock:
            self._values[key] = str(value)

    async def delete(self, key: str) -> None:
        async with self._lock:
            self._values.pop(key, None)
