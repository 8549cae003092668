"""Supabase-backed auth backend."""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable

from supabase import AsyncClient, AsyncClientOptions, acreate_client
from supabase_auth import AsyncSupportedStorage

from session_client.config import AuthConfig
from session_client.exceptions import BackendError, ConfigurationError

logger = logging.getLogger(__name__)


def _dump(value: Any) -> Any:
    if value is None:
        return None
    if hasattr(value, "model_dump"):
        return value.model_dump(mode="json")
    return value


class SupabaseAuthBackend:
    """Thin adapter over the supabase-py async client.

    SDK failures are re-raised as ``BackendError`` carrying the SDK's message,
    with the original exception chained so transport errors stay
    recognisable to the retry policy.
    """

    def __init__(self, client: AsyncClient, profiles_table: str = "profiles") -> None:
        self._client = client
        self._profiles_table = profiles_table

    @classmethod
    async def connect(
        cls, config: AuthConfig, storage: AsyncSupportedStorage | None = None
    ) -> "SupabaseAuthBackend":
        if not config.SUPABASE_URL or not config.SUPABASE_ANON_KEY:
            raise ConfigurationError("SUPABASE_URL and SUPABASE_ANON_KEY must be set")
        options: dict[str, Any] = {
            "persist_session": True,
            "auto_refresh_token": True,
            "flow_type": "pkce",
        }
        if storage is not None:
            options["storage"] = storage
        client = await acreate_client(
            config.SUPABASE_URL,
            config.SUPABASE_ANON_KEY,
            options=AsyncClientOptions(**options),
        )
        logger.info(f"[AUTH] Connected auth client for {config.SUPABASE_URL}")
        return cls(client, profiles_table=config.PROFILES_TABLE)

    async def _call(self, action: str, operation: Callable[[], Awaitable[Any]]) -> Any:
        try:
            return await operation()
        except Exception as exc:
            raise BackendError(str(exc) or f"{action} failed", status_code=502) from exc

    async def get_session(self) -> dict | None:
        session = await self._call("get_session", self._client.auth.get_session)
        return _dump(session)

    async def get_user(self) -> dict | None:
        response = await self._call("get_user", self._client.auth.get_user)
        if response is None or response.user is None:
            return None
        return _dump(response.user)

    async def sign_up(
        self,
        email: str,
        password: str,
        data: dict[str, Any] | None = None,
        captcha_token: str | None = None,
    ) -> dict:
        options: dict[str, Any] = {"data": data or {}}
        if captcha_token:
            options["captcha_token"] = captcha_token
        response = await self._call(
            "sign_up",
            lambda: self._client.auth.sign_up(
                {"email": email, "password": password, "options": options}
            ),
        )
        return _dump(response)

    async def sign_in_with_password(
        self, email: str, password: str, captcha_token: str | None = None
    ) -> dict:
        credentials: dict[str, Any] = {"email": email, "password": password}
        if captcha_token:
            credentials["options"] = {"captcha_token": captcha_token}
        response = await self._call(
            "sign_in_with_password",
            lambda: self._client.auth.sign_in_with_password(credentials),
        )
        return _dump(response)

    async def sign_in_with_oauth(self, provider: str, options: dict[str, Any] | None = None) -> dict:
        response = await self._call(
            "sign_in_with_oauth",
            lambda: self._client.auth.sign_in_with_oauth(
                {"provider": provider, "options": options or {}}
            ),
        )
        return _dump(response)

    async def sign_in_anonymously(self, captcha_token: str | None = None) -> dict:
        credentials: dict[str, Any] = {}
        if captcha_token:
            credentials["options"] = {"captcha_token": captcha_token}
        response = await self._call(
            "sign_in_anonymously",
            lambda: self._client.auth.sign_in_anonymously(credentials),
        )
        return _dump(response)

    async def sign_out(self) -> None:
        await self._call("sign_out", self._client.auth.sign_out)

    async def exchange_code_for_session(self, auth_code: str) -> dict:
        response = await self._call(
            "exchange_code_for_session",
            lambda: self._client.auth.exchange_code_for_session({"auth_code": auth_code}),
        )
        return _dump(response)

    async def verify_otp(self, token_hash: str, otp_type: str) -> dict:
        response = await self._call(
            "verify_otp",
            lambda: self._client.auth.verify_otp({"token_hash": token_hash, "type": otp_type}),
        )
        return _dump(response)

    async def set_session(self, access_token: str, refresh_token: str) -> dict:
        response = await self._call(
            "set_session",
            lambda: self._client.auth.set_session(access_token, refresh_token),
        )
        return _dump(response)

    async def find_profile(self, username: str) -> dict | None:
        response = await self._call(
            "find_profile",
            lambda: self._client.table(self._profiles_table)
            .select("email")
            .eq("username", username)
            .maybe_single()
            .execute(),
        )
        # maybe_single() yields no response at all when nothing matched
        if response is None:
            return None
        return response.data or None
