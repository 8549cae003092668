"""Session client configuration management."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import urlparse

from dotenv import load_dotenv

# Load .env file before reading config
env_path = Path(__file__).parent.parent / ".env"
if env_path.exists():
    load_dotenv(env_path, override=True)
else:
    load_dotenv(override=True)


def _parse_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class AuthConfig:
    """Configuration values for the session client."""

    SUPABASE_URL: str = os.getenv("SUPABASE_URL", "")
    SUPABASE_ANON_KEY: str = os.getenv("SUPABASE_ANON_KEY", "")
    PROFILES_TABLE: str = os.getenv("PROFILES_TABLE", "profiles")
    OAUTH_REDIRECT_URL: str | None = os.getenv("OAUTH_REDIRECT_URL")

    RETRY_ATTEMPTS: int = int(os.getenv("RETRY_ATTEMPTS", "2"))
    RETRY_BASE_DELAY_MS: int = int(os.getenv("RETRY_BASE_DELAY_MS", "300"))
    # Authorization codes are single-use
    RETRY_CODE_EXCHANGE: bool = _parse_bool(os.getenv("RETRY_CODE_EXCHANGE"), False)

    HTTP_TIMEOUT_SECONDS: float = float(os.getenv("HTTP_TIMEOUT_SECONDS", "10"))

    # Local store: "sqlite" (persistent) or "memory" (testing)
    LOCAL_STORE: str = os.getenv("LOCAL_STORE", "sqlite")
    LOCAL_STORE_FILE: str = os.getenv("LOCAL_STORE_FILE", "session_client.db")
    PASSKEY_FLAG_KEY: str = os.getenv("PASSKEY_FLAG_KEY", "salmar_has_passkey")

    WEBAUTHN_ORIGIN: str | None = os.getenv("WEBAUTHN_ORIGIN")
    WEBAUTHN_PIN: str | None = os.getenv("WEBAUTHN_PIN")

    @property
    def functions_url(self) -> str:
        return functions_base_url(self.SUPABASE_URL)


def functions_base_url(service_url: str) -> str:
    """Edge functions host derived from the project ref of the service URL."""
    try:
        hostname = urlparse(service_url).hostname
    except ValueError:
        return ""
    if not hostname:
        return ""
    project_ref = hostname.split(".")[0]
    return f"https://{project_ref}.functions.supabase.co"
