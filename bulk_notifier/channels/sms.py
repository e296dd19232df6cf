import time
import uuid

import httpx
import structlog

from ..domain.errors import ProviderError
from ..domain.models import (
    ChannelType,
    DeliveryResult,
    DeliveryStatus,
    ProviderConfig,
    Recipient,
    normalize_phone,
)
from ..domain.ports import TransportAdapter

logger = structlog.get_logger()

NETGSM_SUCCESS_CODE = 0
ILETIMERKEZI_SUCCESS_STATUS = "success"
SMS_TIMEOUT_SECONDS = 45.0


def _epoch_ms() -> int:
    return int(time.time() * 1000)


class _HttpSmsTransport(TransportAdapter):
    """Shared plumbing for the HTTP SMS gateways."""

    def __init__(self, config: ProviderConfig, timeout: float = SMS_TIMEOUT_SECONDS) -> None:
        self._config = config
        self._timeout = timeout

    @property
    def provider_name(self) -> str:
        return self._config.provider_name

    @property
    def channel_type(self) -> ChannelType:
        return ChannelType.SMS

    def _success(self, recipient: Recipient, message_id: str) -> DeliveryResult:
        logger.info("SMS accepted", provider=self.provider_name, message_id=message_id)
        return DeliveryResult(
            recipient_address=recipient.address,
            recipient_name=recipient.name,
            status=DeliveryStatus.SUCCESS,
            message_id=message_id,
            provider_name=self.provider_name,
        )

    def _wrap_http_error(self, e: httpx.HTTPError) -> ProviderError:
        if isinstance(e, httpx.HTTPStatusError):
            return ProviderError(
                self.provider_name,
                f"API error: {e.response.status_code}",
                code=e.response.status_code,
            )
        return ProviderError(self.provider_name, f"Network error: {e}")


class NetgsmSmsTransport(_HttpSmsTransport):
    """
    Netgsm HTTP GET gateway.

    The response body is "<code>[ <job id>]"; code 00 means accepted.
    """

    async def send(
        self,
        recipient: Recipient,
        body: str,
        subject: str | None = None,  # Not supported for SMS
    ) -> DeliveryResult:
        params = {
            "usercode": self._config.credentials["username"],
            "password": self._config.credentials["password"],
            "gsmno": normalize_phone(recipient.address),
            "message": body,
            "msgheader": self._config.sender_identity,
        }

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.get(self._config.endpoint, params=params)
                response.raise_for_status()
        except httpx.HTTPError as e:
            raise self._wrap_http_error(e) from e

        tokens = response.text.split()
        try:
            code = int(tokens[0])
        except (IndexError, ValueError):
            raise ProviderError(self.provider_name, f"Malformed response: {response.text!r}") from None

        if code != NETGSM_SUCCESS_CODE:
            raise ProviderError(self.provider_name, f"Error code: {code}", code=code)

        message_id = tokens[1] if len(tokens) > 1 else f"netgsm-{_epoch_ms()}"
        return self._success(recipient, message_id)


class IletimerkeziSmsTransport(_HttpSmsTransport):
    """Iletimerkezi JSON POST gateway."""

    async def send(
        self,
        recipient: Recipient,
        body: str,
        subject: str | None = None,  # Not supported for SMS
    ) -> DeliveryResult:
        payload = {
            "username": self._config.credentials["username"],
            "password": self._config.credentials["password"],
            "source_addr": self._config.sender_identity,
            "dest_addr": [normalize_phone(recipient.address)],
            "message": body,
            "datacoding": 0,
            "type": "normal",
        }

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.post(
                    self._config.endpoint,
                    headers={"Content-Type": "application/json"},
                    json=payload,
                )
                response.raise_for_status()
        except httpx.HTTPError as e:
            raise self._wrap_http_error(e) from e

        try:
            data = response.json()
        except ValueError:
            data = None

        status = None
        if isinstance(data, dict) and isinstance(data.get("response"), dict):
            status = data["response"].get("status")

        if status != ILETIMERKEZI_SUCCESS_STATUS:
            raise ProviderError(self.provider_name, f"Error: {response.text}")

        return self._success(recipient, f"iletimerkezi-{_epoch_ms()}-{uuid.uuid4().hex[:6]}")
