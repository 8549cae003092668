"""Session bootstrap operations over the hosted auth backend."""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable

import httpx

from session_client.config import AuthConfig
from session_client.exceptions import AuthException
from session_client.interfaces.auth_backend import AuthBackend
from session_client.interfaces.local_store import LocalStore
from session_client.interfaces.platform_authenticator import PlatformAuthenticator
from session_client.retry import RetryPolicy, retries_exhausted
from session_client.schemas import AuthResult
from session_client.services.code_exchange import exchange_for_session
from session_client.services.functions_client import FunctionsClient
from session_client.services.identifier_service import IdentifierService
from session_client.services.passkey_service import PasskeyService

logger = logging.getLogger(__name__)


def _failure(exc: Exception) -> AuthResult:
    if retries_exhausted(exc):
        return AuthResult.fail("network_error", str(exc) or "Network request failed")
    if isinstance(exc, AuthException):
        return AuthResult.fail(exc.code, exc.message)
    return AuthResult.fail("request_failed", str(exc) or type(exc).__name__)


class SessionClient:
    """Entry point for sign-in, sign-up, redirect completion and passkeys.

    Every network-facing operation returns an ``AuthResult``. Transport
    errors are retried per ``RetryPolicy`` first; what is left over is
    reported as a failed result instead of being raised.
    """

    def __init__(
        self,
        backend: AuthBackend,
        local_store: LocalStore,
        config: AuthConfig | None = None,
        authenticator: PlatformAuthenticator | None = None,
        retry_policy: RetryPolicy | None = None,
        functions: FunctionsClient | None = None,
    ) -> None:
        self._config = config or AuthConfig()
        self._backend = backend
        self._retry = retry_policy or RetryPolicy.from_config(self._config)
        self._exchange_retry = self._retry if self._config.RETRY_CODE_EXCHANGE else RetryPolicy.none()
        self._identifiers = IdentifierService(backend, self._retry)
        self._passkeys = PasskeyService(
            config=self._config,
            backend=backend,
            functions=functions or FunctionsClient(self._config),
            identifiers=self._identifiers,
            local_store=local_store,
            retry_policy=self._retry,
            exchange_retry_policy=self._exchange_retry,
            authenticator=authenticator,
        )

    async def _guard(self, action: str, operation: Callable[[], Awaitable[Any]]) -> AuthResult:
        try:
            return AuthResult.ok(await operation())
        except (AuthException, httpx.HTTPError) as exc:
            logger.warning(f"[AUTH] {action} failed: {exc}")
            return _failure(exc)

    async def get_session(self) -> AuthResult:
        return await self._guard("get_session", lambda: self._retry.run(self._backend.get_session))

    async def sign_up_email(
        self,
        email: str,
        password: str,
        username: str | None = None,
        captcha_token: str | None = None,
    ) -> AuthResult:
        return await self._guard(
            "sign_up",
            lambda: self._retry.run(
                lambda: self._backend.sign_up(
                    email,
                    password,
                    data={"username": username} if username else {},
                    captcha_token=captcha_token,
                )
            ),
        )

    async def _sign_in_email(self, email: str, password: str, captcha_token: str | None) -> dict:
        return await self._retry.run(
            lambda: self._backend.sign_in_with_password(email, password, captcha_token=captcha_token)
        )

    async def sign_in_email(
        self, email: str, password: str, captcha_token: str | None = None
    ) -> AuthResult:
        return await self._guard(
            "sign_in_email", lambda: self._sign_in_email(email, password, captcha_token)
        )

    async def resolve_email_by_username(self, username: str) -> AuthResult:
        """Look up a username; a miss is a successful result with no data."""

        async def lookup() -> dict | None:
            profile = await self._identifiers.find_profile(username)
            return {"email": profile.email} if profile else None

        return await self._guard("resolve_email_by_username", lookup)

    async def sign_in_identifier(
        self, identifier: str, password: str, captcha_token: str | None = None
    ) -> AuthResult:
        """Sign in with either an email address or a username."""

        async def sign_in() -> dict:
            email = await self._identifiers.resolve(identifier)
            return await self._sign_in_email(email, password, captcha_token)

        return await self._guard("sign_in_identifier", sign_in)

    async def sign_in_with_provider(
        self, provider: str, options: dict[str, Any] | None = None
    ) -> AuthResult:
        options = dict(options or {})
        if self._config.OAUTH_REDIRECT_URL:
            options.setdefault("redirect_to", self._config.OAUTH_REDIRECT_URL)
        return await self._guard(
            "sign_in_with_provider",
            lambda: self._retry.run(lambda: self._backend.sign_in_with_oauth(provider, options)),
        )

    async def sign_in_anonymously(self, captcha_token: str | None = None) -> AuthResult:
        return await self._guard(
            "sign_in_anonymously",
            lambda: self._retry.run(
                lambda: self._backend.sign_in_anonymously(captcha_token=captcha_token)
            ),
        )

    async def sign_out(self) -> AuthResult:
        # Not retried: a replayed sign-out could leave stale local state
        return await self._guard("sign_out", self._backend.sign_out)

    async def exchange_code_from_url(self, url: str) -> AuthResult:
        """Complete an OAuth/PKCE redirect or one-time link. Never raises."""
        try:
            session = await exchange_for_session(self._backend, url, self._exchange_retry)
        except Exception as exc:
            logger.warning(f"[AUTH] Code exchange failed: {exc}")
            if isinstance(exc, (AuthException, httpx.HTTPError)):
                return _failure(exc)
            return AuthResult.fail("exchange_failed", str(exc) or type(exc).__name__)
        return AuthResult.ok(session)

    async def is_passkey_supported(self) -> bool:
        return await self._passkeys.is_supported()

    async def register_passkey(self) -> AuthResult:
        return await self._guard("register_passkey", self._passkeys.register)

    async def authenticate_passkey(self, identifier: str | None = None) -> AuthResult:
        return await self._guard(
            "authenticate_passkey", lambda: self._passkeys.authenticate(identifier)
        )

    async def mark_passkey_enrolled(self, flag: bool = True) -> None:
        await self._passkeys.mark_enrolled(flag)

    async def has_local_passkey_flag(self) -> bool:
        return await self._passkeys.has_local_flag()
