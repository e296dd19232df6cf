"""
Sequential bulk delivery for one channel.

Recipients are handled one at a time, in input order, so rate-limited
gateways are never flooded and the log stream reads in batch order.
"""

import uuid
from collections.abc import Sequence

import structlog

from ...channels import MockFallbackSink
from ...domain.errors import InvalidBatchError, InvalidRecipientError
from ...domain.models import (
    BatchSummary,
    ChannelType,
    DeliveryResult,
    DeliveryStatus,
    Recipient,
    is_valid_email,
    is_valid_phone,
)
from ...domain.ports import TransportAdapter
from ...infrastructure.adapters import ProviderRegistry, TransportFactory
from .retry_executor import RetryExecutor

logger = structlog.get_logger()


class BulkDispatcher:
    """
    Fans one message out to a batch of recipients over a single channel.

    Providers are resolved once per batch. Only the highest-priority
    provider is attempted for each recipient; when none is configured
    the mock sink stands in for the whole batch.

    Not safe for concurrent dispatch_bulk calls on the same instance.
    """

    def __init__(
        self,
        channel: ChannelType,
        registry: ProviderRegistry,
        factory: TransportFactory,
        executor: RetryExecutor,
        mock_sink: MockFallbackSink,
    ) -> None:
        self._channel = channel
        self._registry = registry
        self._factory = factory
        self._executor = executor
        self._mock_sink = mock_sink

    @property
    def channel(self) -> ChannelType:
        return self._channel

    def _validate(self, recipients: Sequence[Recipient], body: str, subject: str | None) -> None:
        if not recipients:
            raise InvalidBatchError("Recipient list cannot be empty")
        if not body or not body.strip():
            raise InvalidBatchError("Message body cannot be empty")
        if self._channel is ChannelType.EMAIL and (not subject or not subject.strip()):
            raise InvalidBatchError("Email subject cannot be empty")

        is_valid = is_valid_email if self._channel is ChannelType.EMAIL else is_valid_phone
        for index, recipient in enumerate(recipients):
            if not is_valid(recipient.address):
                raise InvalidRecipientError(
                    recipient.address,
                    index,
                    f"not a valid {self._channel.value} address",
                )

    def _select_transport(self) -> TransportAdapter:
        providers = self._registry.resolve(self._channel)
        if not providers:
            logger.warning("No providers configured, using mock sink", sink=self._mock_sink.provider_name)
            return self._mock_sink
        if len(providers) > 1:
            logger.info(
                "Using primary provider",
                provider=providers[0].provider_name,
                standby=[p.provider_name for p in providers[1:]],
            )
        return self._factory.get_transport(providers[0])

    async def dispatch_bulk(
        self,
        recipients: Sequence[Recipient],
        body: str,
        subject: str | None = None,
    ) -> BatchSummary:
        """
        Deliver the message to every recipient.

        Args:
            recipients: Ordered batch of recipients
            body: Message body
            subject: Email subject (required for email, ignored for SMS)

        Returns:
            BatchSummary with one result per recipient, in input order

        Raises:
            InvalidBatchError: Empty batch, body or (email) subject
            InvalidRecipientError: An address is invalid for the channel
        """
        self._validate(recipients, body, subject)

        batch_id = uuid.uuid4().hex[:12]
        with structlog.contextvars.bound_contextvars(batch_id=batch_id, channel=self._channel.value):
            transport = self._select_transport()
            logger.info(
                "Starting bulk delivery",
                recipients=len(recipients),
                provider=transport.provider_name,
            )

            results: list[DeliveryResult] = []
            for index, recipient in enumerate(recipients, start=1):
                logger.info("Delivering", position=index, total=len(recipients))
                results.append(await self._deliver_one(transport, recipient, body, subject))

            summary = BatchSummary.from_results(results)
            logger.info(
                "Bulk delivery completed",
                successful=summary.successful,
                failed=summary.failed,
                mocked=sum(1 for r in summary.results if r.message_id.startswith("mock-")),
            )
            return summary

    async def _deliver_one(
        self,
        transport: TransportAdapter,
        recipient: Recipient,
        body: str,
        subject: str | None,
    ) -> DeliveryResult:
        try:
            outcome = await self._executor.execute(transport, recipient, body, subject)
        except Exception as e:
            logger.error("Delivery failed", provider=transport.provider_name, error=str(e))
            return DeliveryResult(
                recipient_address=recipient.address,
                recipient_name=recipient.name,
                status=DeliveryStatus.FAILED,
                message_id="",
                provider_name=transport.provider_name,
                error_detail=str(e) or type(e).__name__,
            )
        return outcome.result
