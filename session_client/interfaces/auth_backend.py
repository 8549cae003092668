"""Hosted auth backend interface."""

from __future__ import annotations

from typing import Any, Protocol


class AuthBackend(Protocol):
    async def get_session(self) -> dict | None:
        ...

    async def get_user(self) -> dict | None:
        ...

    async def sign_up(
        self,
        email: str,
        password: str,
        data: dict[str, Any] | None = None,
        captcha_token: str | None = None,
    ) -> dict:
        ...

    async def sign_in_with_password(
        self, email: str, password: str, captcha_token: str | None = None
    ) -> dict:
        ...

    async def sign_in_with_oauth(self, provider: str, options: dict[str, Any] | None = None) -> dict:
        ...

    async def sign_in_anonymously(self, captcha_token: str | None = None) -> dict:
        ...

    async def sign_out(self) -> None:
        ...

    async def exchange_code_for_session(self, auth_code: str) -> dict:
        ...

    async def verify_otp(self, token_hash: str, otp_type: str) -> dict:
        ...

    async def set_session(self, access_token: str, refresh_token: str) -> dict:
        ...

    async def find_profile(self, username: str) -> dict | None:
        ...
