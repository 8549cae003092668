"""Username/email identifier resolution."""

from __future__ import annotations

import logging

from session_client.exceptions import UserNotFound
from session_client.interfaces.auth_backend import AuthBackend
from session_client.retry import RetryPolicy
from session_client.schemas import ProfileRow

logger = logging.getLogger(__name__)


def looks_like_email(identifier: str) -> bool:
    return "@" in identifier


class IdentifierService:
    def __init__(self, backend: AuthBackend, retry_policy: RetryPolicy) -> None:
        self._backend = backend
        self._retry = retry_policy

    async def find_profile(self, username: str) -> ProfileRow | None:
        """Look up the profile row for ``username``; lookup errors propagate."""
        row = await self._retry.run(lambda: self._backend.find_profile(username))
        if not row or not row.get("email"):
            return None
        return ProfileRow.model_validate({"username": username, **row})

    async def resolve(self, identifier: str) -> str:
        """Return the email to sign in with for an email or username identifier."""
        if looks_like_email(identifier):
            return identifier
        profile = await self.find_profile(identifier.strip())
        if profile is None:
            logger.info("[AUTH] No profile matches the supplied username")
            raise UserNotFound()
        return profile.email
