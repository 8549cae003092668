"""Passkey ceremony orchestration."""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable

from pydantic import ValidationError

from session_client.config import AuthConfig
from session_client.exceptions import (
    AuthException,
    NotAuthenticated,
    PasskeyAuthenticationFailed,
    PasskeyUnsupported,
)
from session_client.interfaces.auth_backend import AuthBackend
from session_client.interfaces.local_store import LocalStore
from session_client.interfaces.platform_authenticator import PlatformAuthenticator
from session_client.retry import RetryPolicy
from session_client.schemas import PasskeyVerification
from session_client.services.code_exchange import exchange_for_session
from session_client.services.functions_client import FunctionsClient
from session_client.services.identifier_service import IdentifierService, looks_like_email

logger = logging.getLogger(__name__)


def display_username(user: dict[str, Any]) -> str:
    email = user.get("email") or ""
    metadata = user.get("user_metadata") or {}
    if metadata.get("username"):
        return metadata["username"]
    return email.split("@")[0] if email else "user"


class PasskeyService:
    def __init__(
        self,
        config: AuthConfig,
        backend: AuthBackend,
        functions: FunctionsClient,
        identifiers: IdentifierService,
        local_store: LocalStore,
        retry_policy: RetryPolicy,
        exchange_retry_policy: RetryPolicy,
        authenticator: PlatformAuthenticator | None = None,
    ) -> None:
        self._config = config
        self._backend = backend
        self._functions = functions
        self._identifiers = identifiers
        self._local_store = local_store
        self._retry = retry_policy
        self._exchange_retry = exchange_retry_policy
        self._authenticator = authenticator

    def _require_authenticator(self) -> PlatformAuthenticator:
        if self._authenticator is None:
            raise PasskeyUnsupported("No platform authenticator configured")
        return self._authenticator

    async def _run_ceremony(
        self, name: str, ceremony: Callable[[dict], Awaitable[dict]], options: Any
    ) -> dict:
        try:
            return await ceremony(options)
        except AuthException:
            raise
        except Exception as exc:
            logger.warning(f"[PASSKEY] {name} ceremony failed: {exc!r}")
            raise PasskeyAuthenticationFailed(f"Passkey {name} failed") from exc

    async def is_supported(self) -> bool:
        if self._authenticator is None:
            return False
        try:
            return bool(await self._authenticator.is_available())
        except Exception as exc:
            logger.debug(f"[PASSKEY] Availability probe failed: {exc}")
            return False

    async def register(self) -> dict[str, bool]:
        """Register a new passkey for the signed-in user."""
        authenticator = self._require_authenticator()
        user = await self._retry.run(self._backend.get_user)
        if not user:
            raise NotAuthenticated()

        user_id = user.get("id")
        options = await self._functions.post_json(
            "/webauthn/generate-registration-options",
            {
                "user_id": user_id,
                "username": display_username(user),
                "email": user.get("email") or "",
            },
        )
        attestation = await self._run_ceremony(
            "registration", authenticator.start_registration, options
        )
        await self._functions.post_json(
            "/webauthn/verify-registration",
            {"attestation": attestation, "user_id": user_id},
        )
        logger.info(f"[PASSKEY] Registered passkey for user {user_id}")
        return {"ok": True}

    async def authenticate(self, identifier: str | None) -> dict[str, bool]:
        """Sign in with a passkey; ``identifier`` may be an email or a username."""
        authenticator = self._require_authenticator()
        email = identifier or ""
        if email and not looks_like_email(email):
            email = await self._identifiers.resolve(email)

        options = await self._functions.post_json(
            "/webauthn/generate-authentication-options", {"email": email}
        )
        assertion = await self._run_ceremony(
            "authentication", authenticator.start_authentication, options
        )
        out = await self._functions.post_json(
            "/webauthn/verify-authentication", {"assertion": assertion, "email": email}
        )
        if not isinstance(out, dict):
            raise PasskeyAuthenticationFailed()

        try:
            verification = PasskeyVerification.model_validate(out)
        except ValidationError as exc:
            raise PasskeyAuthenticationFailed() from exc
        if verification.has_tokens:
            await self._backend.set_session(verification.access_token, verification.refresh_token)
            logger.info("[PASSKEY] Session installed from verified assertion")
            return {"ok": True}
        if verification.action_link:
            await exchange_for_session(
                self._backend, verification.action_link, self._exchange_retry
            )
            logger.info("[PASSKEY] Session completed from action link")
            return {"ok": True}
        raise PasskeyAuthenticationFailed()

    async def mark_enrolled(self, flag: bool = True) -> None:
        if flag:
            await self._local_store.set(self._config.PASSKEY_FLAG_KEY, "1")
        else:
            await self._local_store.delete(self._config.PASSKEY_FLAG_KEY)

    async def has_local_flag(self) -> bool:
        return await self._local_store.get(self._config.PASSKEY_FLAG_KEY) == "1"
