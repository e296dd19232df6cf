"""
Outbound port for message transports.

Every provider (and the mock sink) implements this interface; the
application layer only ever talks to a TransportAdapter.
"""

from abc import ABC, abstractmethod

from ..models import ChannelType, DeliveryResult, Recipient


class TransportAdapter(ABC):
    """
    Uniform send capability bound to one provider.

    Implementations perform exactly one outbound call per send and raise
    ProviderError on any transport-level failure. They never retry or
    fall back on their own.
    """

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Name reported in DeliveryResult.provider_name."""
        ...

    @property
    @abstractmethod
    def channel_type(self) -> ChannelType:
        """Return the channel type this transport handles."""
        ...

    @abstractmethod
    async def send(
        self,
        recipient: Recipient,
        body: str,
        subject: str | None = None,
    ) -> DeliveryResult:
        """
        Deliver a message to a single recipient.

        Args:
            recipient: Target recipient
            body: Message body (HTML for email, plain text for SMS)
            subject: Email subject, ignored by SMS transports

        Returns:
            DeliveryResult with SUCCESS status and the provider's message id

        Raises:
            ProviderError: On network errors, rejected submissions or
                malformed responses
        """
        ...
