"""Auth SDK session storage over a local store."""

from __future__ import annotations

from supabase_auth import AsyncSupportedStorage

from session_client.interfaces.local_store import LocalStore


class LocalSessionStorage(AsyncSupportedStorage):
    """Persists the SDK's session between runs in a ``LocalStore``."""

    def __init__(self, local_store: LocalStore) -> None:
        self._local_store = local_store

    async def get_item(self, key: str) -> str | None:
        return await self._local_store.get(key)

    async def set_item(self, key: str, value: str) -> None:
        await self._local_store.set(key, value)

    async def remove_item(self, key: str) -> None:
        await self._local_store.delete(key)
