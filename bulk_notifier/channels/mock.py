import asyncio
import time
import uuid
from collections.abc import Awaitable, Callable

import structlog

from ..domain.models import ChannelType, DeliveryResult, DeliveryStatus, Recipient
from ..domain.ports import TransportAdapter

logger = structlog.get_logger()

MOCK_PROVIDER_NAME = "Mock"
FALLBACK_PROVIDER_NAME = "Mock (Fallback)"


class MockFallbackSink(TransportAdapter):
    """
    Stand-in transport that never contacts anyone and never fails.

    Used as the whole-batch transport when no provider is configured and
    as the terminal fallback once a real provider exhausts its retries.
    The artificial latency keeps pacing close to a real gateway.
    """

    def __init__(
        self,
        channel: ChannelType,
        provider_name: str = MOCK_PROVIDER_NAME,
        id_prefix: str = "mock",
        latency_seconds: float = 1.0,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._channel = channel
        self._provider_name = provider_name
        self._id_prefix = id_prefix
        self._latency_seconds = latency_seconds
        self._sleep = sleep

    @classmethod
    def fallback(cls, channel: ChannelType, latency_seconds: float = 0.5) -> "MockFallbackSink":
        """Sink used after every real attempt has been exhausted."""
        return cls(
            channel,
            provider_name=FALLBACK_PROVIDER_NAME,
            id_prefix="mock-fallback",
            latency_seconds=latency_seconds,
        )

    @property
    def provider_name(self) -> str:
        return self._provider_name

    @property
    def channel_type(self) -> ChannelType:
        return self._channel

    def _new_message_id(self) -> str:
        return f"{self._id_prefix}-{int(time.time() * 1000)}-{uuid.uuid4().hex[:9]}"

    async def send(
        self,
        recipient: Recipient,
        body: str,
        subject: str | None = None,
    ) -> DeliveryResult:
        if self._latency_seconds > 0:
            await self._sleep(self._latency_seconds)

        message_id = self._new_message_id()
        logger.warning(
            "Mock message sent, no real message was delivered",
            provider=self._provider_name,
            channel=self._channel.value,
            message_id=message_id,
            body_length=len(body),
        )
        return DeliveryResult(
            recipient_address=recipient.address,
            recipient_name=recipient.name,
            status=DeliveryStatus.SUCCESS,
            message_id=message_id,
            provider_name=self._provider_name,
        )
