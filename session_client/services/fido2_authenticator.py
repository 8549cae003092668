"""FIDO2 platform authenticator backed by python-fido2."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable

from fido2.client import DefaultClientDataCollector, Fido2Client, UserInteraction
from fido2.ctap import CtapDevice
from fido2.hid import CtapHidDevice
from fido2.webauthn import PublicKeyCredentialCreationOptions, PublicKeyCredentialRequestOptions

from session_client.exceptions import PasskeyUnsupported

logger = logging.getLogger(__name__)


def first_hid_device() -> CtapDevice | None:
    return next(CtapHidDevice.list_devices(), None)


def _public_key_options(options: dict[str, Any]) -> dict[str, Any]:
    # Some servers wrap the options in {"publicKey": {...}}
    return options.get("publicKey", options)


class _LoggingInteraction(UserInteraction):
    """Logs touch prompts and answers PIN requests from config."""

    def __init__(self, pin: str | None = None) -> None:
        self._pin = pin

    def prompt_up(self) -> None:
        logger.info("[PASSKEY] Touch your authenticator to continue")

    def request_pin(self, permissions, rp_id):
        return self._pin

    def request_uv(self, permissions, rp_id):
        return True


class Fido2PlatformAuthenticator:
    """Runs WebAuthn ceremonies on the first connected CTAP2 device."""

    def __init__(
        self,
        origin: str,
        pin: str | None = None,
        device_factory: Callable[[], CtapDevice | None] = first_hid_device,
    ) -> None:
        self._origin = origin
        self._pin = pin
        self._device_factory = device_factory

    async def is_available(self) -> bool:
        device = await asyncio.to_thread(self._device_factory)
        return device is not None

    async def start_registration(self, options: dict) -> dict:
        return await asyncio.to_thread(self._make_credential, options)

    async def start_authentication(self, options: dict) -> dict:
        return await asyncio.to_thread(self._get_assertion, options)

    def _client(self) -> Fido2Client:
        device = self._device_factory()
        if device is None:
            raise PasskeyUnsupported("No FIDO2 authenticator found")
        return Fido2Client(
            device,
            client_data_collector=DefaultClientDataCollector(self._origin),
            user_interaction=_LoggingInteraction(self._pin),
        )

    def _make_credential(self, options: dict) -> dict:
        creation = PublicKeyCredentialCreationOptions.from_dict(_public_key_options(options))
        response = self._client().make_credential(creation)
        return dict(response)

    def _get_assertion(self, options: dict) -> dict:
        request = PublicKeyCredentialRequestOptions.from_dict(_public_key_options(options))
        selection = self._client().get_assertion(request)
        return dict(selection.get_response(0))
