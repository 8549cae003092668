"""Test doubles for the session client."""

from __future__ import annotations

from typing import Any

from session_client.config import AuthConfig


def make_config(**overrides: Any) -> AuthConfig:
    values = {
        "SUPABASE_URL": "https://abcdefgh.supabase.co",
        "SUPABASE_ANON_KEY": "anon-key",
        "LOCAL_STORE": "memory",
        "OAUTH_REDIRECT_URL": None,
        "RETRY_CODE_EXCHANGE": False,
    }
    values.update(overrides)
    return AuthConfig(**values)


class RecordingSleep:
    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


class FakeBackend:
    """Records every call; queued errors are raised before results."""

    def __init__(
        self,
        profiles: dict[str, str] | None = None,
        user: dict | None = None,
        session: dict | None = None,
    ) -> None:
        self.calls: list[tuple[str, tuple]] = []
        self.profiles = profiles or {}
        self.user = user
        self.session = session
        self._failures: dict[str, list[Exception]] = {}

    def fail(self, method: str, *errors: Exception) -> None:
        self._failures.setdefault(method, []).extend(errors)

    def count(self, method: str) -> int:
        return sum(1 for name, _ in self.calls if name == method)

    def args(self, method: str) -> list[tuple]:
        return [args for name, args in self.calls if name == method]

    async def _record(self, method: str, *args: Any, result: Any = None) -> Any:
        self.calls.append((method, args))
        queued = self._failures.get(method)
        if queued:
            raise queued.pop(0)
        return result

    async def get_session(self):
        return await self._record("get_session", result=self.session)

    async def get_user(self):
        return await self._record("get_user", result=self.user)

    async def sign_up(self, email, password, data=None, captcha_token=None):
        return await self._record(
            "sign_up", email, password, data, captcha_token, result={"user": {"email": email}}
        )

    async def sign_in_with_password(self, email, password, captcha_token=None):
        return await self._record(
            "sign_in_with_password",
            email,
            password,
            captcha_token,
            result={"session": {"access_token": "access"}, "user": {"email": email}},
        )

    async def sign_in_with_oauth(self, provider, options=None):
        return await self._record(
            "sign_in_with_oauth",
            provider,
            options,
            result={"provider": provider, "url": f"https://auth.example/{provider}"},
        )

    async def sign_in_anonymously(self, captcha_token=None):
        return await self._record(
            "sign_in_anonymously", captcha_token, result={"user": {"is_anonymous": True}}
        )

    async def sign_out(self):
        return await self._record("sign_out")

    async def exchange_code_for_session(self, auth_code):
        return await self._record(
            "exchange_code_for_session", auth_code, result={"session": {"access_token": "from-code"}}
        )

    async def verify_otp(self, token_hash, otp_type):
        return await self._record(
            "verify_otp", token_hash, otp_type, result={"session": {"access_token": "from-link"}}
        )

    async def set_session(self, access_token, refresh_token):
        return await self._record(
            "set_session",
            access_token,
            refresh_token,
            result={"session": {"access_token": access_token}},
        )

    async def find_profile(self, username):
        email = self.profiles.get(username)
        return await self._record("find_profile", username, result={"email": email} if email else None)


class FakeFunctions:
    def __init__(self, responses: dict[str, Any] | None = None) -> None:
        self.responses = responses or {}
        self.requests: list[tuple[str, dict]] = []

    async def post_json(self, path: str, body: dict | None = None) -> Any:
        self.requests.append((path, body or {}))
        response = self.responses.get(path, {})
        if isinstance(response, Exception):
            raise response
        return response

    def bodies(self, path: str) -> list[dict]:
        return [body for request_path, body in self.requests if request_path == path]


class FakeAuthenticator:
    def __init__(
        self,
        available: bool = True,
        probe_error: Exception | None = None,
        ceremony_error: Exception | None = None,
    ) -> None:
        self.available = available
        self.probe_error = probe_error
        self.ceremony_error = ceremony_error
        self.registrations: list[dict] = []
        self.authentications: list[dict] = []

    async def is_available(self) -> bool:
        if self.probe_error is not None:
            raise self.probe_error
        return self.available

    async def start_registration(self, options: dict) -> dict:
        self.registrations.append(options)
        if self.ceremony_error is not None:
            raise self.ceremony_error
        return {"id": "credential-id", "type": "public-key"}

    async def start_authentication(self, options: dict) -> dict:
        self.authentications.append(options)
        if self.ceremony_error is not None:
            raise self.ceremony_error
        return {"id": "credential-id", "type": "public-key", "response": {"signature": "sig"}}
