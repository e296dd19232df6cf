import httpx
import structlog

from ..domain.errors import ProviderError
from ..domain.models import ChannelType, DeliveryResult, DeliveryStatus, ProviderConfig, Recipient
from ..domain.ports import TransportAdapter

logger = structlog.get_logger()

MESSAGE_ID_HEADER = "X-Message-Id"
EMAIL_TIMEOUT_SECONDS = 30.0


class SendGridEmailTransport(TransportAdapter):
    """SendGrid v3 transactional email transport."""

    def __init__(self, config: ProviderConfig, sender_name: str = "", timeout: float = EMAIL_TIMEOUT_SECONDS) -> None:
        self._config = config
        self._sender_name = sender_name
        self._timeout = timeout

    @property
    def provider_name(self) -> str:
        return self._config.provider_name

    @property
    def channel_type(self) -> ChannelType:
        return ChannelType.EMAIL

    async def send(
        self,
        recipient: Recipient,
        body: str,
        subject: str | None = None,
    ) -> DeliveryResult:
        """Submit an HTML email. Any 2xx means the message was accepted."""
        to = {"email": recipient.address}
        if recipient.name:
            to["name"] = recipient.name
        sender = {"email": self._config.sender_identity}
        if self._sender_name:
            sender["name"] = self._sender_name

        payload = {
            "personalizations": [{"to": [to]}],
            "from": sender,
            "subject": subject or "",
            "content": [{"type": "text/html", "value": body}],
        }
        headers = {
            "Authorization": f"Bearer {self._config.credentials['api_key']}",
            "Content-Type": "application/json",
        }

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.post(self._config.endpoint, headers=headers, json=payload)
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise ProviderError(
                self.provider_name,
                f"API error: {e.response.status_code}",
                code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise ProviderError(self.provider_name, f"Network error: {e}") from e

        message_id = response.headers.get(MESSAGE_ID_HEADER)
        if not message_id:
            raise ProviderError(self.provider_name, f"Accepted response without {MESSAGE_ID_HEADER} header")

        logger.info("Email accepted", provider=self.provider_name, message_id=message_id)
        return DeliveryResult(
            recipient_address=recipient.address,
            recipient_name=recipient.name,
            status=DeliveryStatus.SUCCESS,
            message_id=message_id,
            provider_name=self.provider_name,
        )
