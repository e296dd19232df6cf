class NotificationError(Exception):
    """Base error for the notification pipeline."""


class ProviderError(NotificationError):
    """A transport-level failure reported by (or while talking to) a provider."""

    def __init__(self, provider_name: str, detail: str, code: int | None = None) -> None:
        self.provider_name = provider_name
        self.detail = detail
        self.code = code
        super().__init__(f"{provider_name}: {detail}")


class InvalidBatchError(NotificationError, ValueError):
    """The batch as a whole cannot be dispatched."""


class InvalidRecipientError(NotificationError, ValueError):
    """A recipient address is not deliverable on the requested channel."""

    def __init__(self, address: str, index: int, reason: str) -> None:
        self.address = address
        self.index = index
        super().__init__(f"Recipient #{index} ({address!r}): {reason}")
