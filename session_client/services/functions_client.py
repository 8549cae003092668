"""Edge function HTTP client."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from session_client.config import AuthConfig
from session_client.exceptions import ConfigurationError, FunctionsError

logger = logging.getLogger(__name__)


class FunctionsClient:
    def __init__(self, config: AuthConfig, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._config = config
        self._transport = transport

    async def post_json(self, path: str, body: dict[str, Any] | None = None) -> Any:
        base = self._config.functions_url
        if not base:
            raise ConfigurationError("Invalid Supabase URL for functions")

        async with httpx.AsyncClient(
            timeout=self._config.HTTP_TIMEOUT_SECONDS, transport=self._transport
        ) as client:
            response = await client.post(
                f"{base}{path}",
                json=body or {},
                headers={"Content-Type": "application/json"},
            )

        try:
            payload = response.json()
        except ValueError:
            payload = {}

        if not response.is_success:
            message = payload.get("error") if isinstance(payload, dict) else None
            logger.warning(f"[FUNCTIONS] {path} failed with {response.status_code}")
            raise FunctionsError(
                message or response.reason_phrase or f"HTTP {response.status_code}",
                status_code=response.status_code,
            )
        return payload
