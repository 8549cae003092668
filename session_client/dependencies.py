"""Session client wiring helpers."""

from __future__ import annotations

from session_client.config import AuthConfig
from session_client.interfaces.auth_backend import AuthBackend
from session_client.interfaces.local_store import LocalStore
from session_client.interfaces.platform_authenticator import PlatformAuthenticator
from session_client.services.fido2_authenticator import Fido2PlatformAuthenticator
from session_client.services.session_service import SessionClient
from session_client.stores.memory_store import MemoryLocalStore
from session_client.stores.session_storage import LocalSessionStorage
from session_client.stores.sqlite_store import SQLiteLocalStore
from session_client.stores.supabase_backend import SupabaseAuthBackend


_memory_local_store = MemoryLocalStore()
_sqlite_local_stores: dict[str, SQLiteLocalStore] = {}


def get_local_store(config: AuthConfig) -> LocalStore:
    """Get the local store based on LOCAL_STORE config."""
    if config.LOCAL_STORE == "sqlite":
        store = _sqlite_local_stores.get(config.LOCAL_STORE_FILE)
        if store is None:
            store = SQLiteLocalStore(config.LOCAL_STORE_FILE)
            _sqlite_local_stores[config.LOCAL_STORE_FILE] = store
        return store
    # Fallback to memory store for development/testing
    return _memory_local_store


def get_authenticator(config: AuthConfig) -> PlatformAuthenticator | None:
    if not config.WEBAUTHN_ORIGIN:
        return None
    return Fido2PlatformAuthenticator(config.WEBAUTHN_ORIGIN, pin=config.WEBAUTHN_PIN)


async def create_session_client(
    config: AuthConfig | None = None,
    backend: AuthBackend | None = None,
    authenticator: PlatformAuthenticator | None = None,
) -> SessionClient:
    config = config or AuthConfig()
    local_store = get_local_store(config)
    if backend is None:
        backend = await SupabaseAuthBackend.connect(
            config, storage=LocalSessionStorage(local_store)
        )
    return SessionClient(
        backend=backend,
        local_store=local_store,
        config=config,
        authenticator=authenticator or get_authenticator(config),
    )
