"""Client-side session orchestration for a hosted auth backend."""

from session_client.config import AuthConfig
from session_client.schemas import AuthError, AuthResult
from session_client.services.session_service import SessionClient

__all__ = ["AuthConfig", "AuthError", "AuthResult", "SessionClient"]
