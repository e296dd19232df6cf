from .errors import InvalidBatchError, InvalidRecipientError, NotificationError, ProviderError
from .models import (
    BatchSummary,
    ChannelType,
    DeliveryResult,
    DeliveryStatus,
    Provider,
    ProviderConfig,
    Recipient,
)

__all__ = [
    "BatchSummary",
    "ChannelType",
    "DeliveryResult",
    "DeliveryStatus",
    "InvalidBatchError",
    "InvalidRecipientError",
    "NotificationError",
    "Provider",
    "ProviderConfig",
    "ProviderError",
    "Recipient",
]
