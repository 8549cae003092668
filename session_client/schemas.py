"""Session client result and payload schemas."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


class AuthError(BaseModel):
    code: str
    message: str


class AuthResult(BaseModel):
    """Uniform outcome of every public session client operation."""

    success: bool
    data: Any = None
    error: AuthError | None = None

    @classmethod
    def ok(cls, data: Any = None) -> "AuthResult":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, code: str, message: str) -> "AuthResult":
        return cls(success=False, error=AuthError(code=code, message=message))


class ProfileRow(BaseModel):
    model_config = ConfigDict(extra="ignore")

    username: str | None = None
    email: str


class PasskeyVerification(BaseModel):
    model_config = ConfigDict(extra="ignore")

    access_token: str | None = None
    refresh_token: str | None = None
    action_link: str | None = None

    @property
    def has_tokens(self) -> bool:
        return bool(self.access_token and self.refresh_token)


class RedirectParams(BaseModel):
    code: str | None = None
    token_hash: str | None = None
    otp_type: str | None = None
    access_token: str | None = None
    refresh_token: str | None = None
    error: str | None = None
    error_description: str | None = None
