"""Platform WebAuthn authenticator interface."""

from __future__ import annotations

from typing import Protocol


class PlatformAuthenticator(Protocol):
    async def is_available(self) -> bool:
        ...

    async def start_registration(self, options: dict) -> dict:
        """Run the registration ceremony and return the attestation JSON."""
        ...

    async def start_authentication(self, options: dict) -> dict:
        """Run the assertion ceremony and return the assertion JSON."""
        ...
