"""Turn redirect URLs and one-time links into sessions."""

from __future__ import annotations

import logging
from urllib.parse import parse_qs, urlparse

from session_client.exceptions import RedirectError
from session_client.interfaces.auth_backend import AuthBackend
from session_client.retry import RetryPolicy
from session_client.schemas import RedirectParams

logger = logging.getLogger(__name__)


def parse_redirect(link: str) -> RedirectParams:
    """Extract session material from a redirect URL, action link or bare code.

    Query parameters win over fragment parameters when both carry a key.
    """
    link = link.strip()
    parsed = urlparse(link)
    if not parsed.scheme and not parsed.query and not parsed.fragment:
        return RedirectParams(code=link or None)

    params: dict[str, str] = {}
    for section in (parsed.fragment, parsed.query):
        for key, values in parse_qs(section).items():
            if values:
                params[key] = values[0]

    return RedirectParams(
        code=params.get("code"),
        token_hash=params.get("token_hash") or params.get("token"),
        otp_type=params.get("type"),
        access_token=params.get("access_token"),
        refresh_token=params.get("refresh_token"),
        error=params.get("error"),
        error_description=params.get("error_description"),
    )


async def exchange_for_session(
    backend: AuthBackend,
    link: str,
    retry_policy: RetryPolicy | None = None,
) -> dict:
    """Complete a redirect-based flow with exactly one backend call."""
    retry = retry_policy or RetryPolicy.none()
    params = parse_redirect(link)

    if params.error:
        raise RedirectError(params.error_description or params.error, code=params.error)
    if params.code:
        logger.info("[AUTH] Exchanging authorization code for session")
        return await retry.run(lambda: backend.exchange_code_for_session(params.code))
    if params.token_hash and params.otp_type:
        logger.info(f"[AUTH] Verifying one-time {params.otp_type} link")
        return await retry.run(lambda: backend.verify_otp(params.token_hash, params.otp_type))
    if params.access_token and params.refresh_token:
        return await retry.run(
            lambda: backend.set_session(params.access_token, params.refresh_token)
        )
    raise RedirectError("No authorization code found in redirect")
