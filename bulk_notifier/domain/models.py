import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ChannelType(str, Enum):
    """Supported delivery channels."""

    EMAIL = "email"
    SMS = "sms"


class Provider(str, Enum):
    """Known delivery providers. The value doubles as the reported provider name."""

    SENDGRID = "SendGrid"
    NETGSM = "Netgsm"
    ILETIMERKEZI = "Iletimerkezi"


class DeliveryStatus(str, Enum):
    SUCCESS = "success"
    FAILED = "failed"


_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
_NON_DIGITS_RE = re.compile(r"\D")

PHONE_MIN_DIGITS = 7
PHONE_MAX_DIGITS = 15


def normalize_phone(phone: str) -> str:
    """Strip everything but digits (gateways expect bare MSISDNs)."""
    return _NON_DIGITS_RE.sub("", phone)


def is_valid_email(address: str) -> bool:
    return bool(_EMAIL_RE.match(address))


def is_valid_phone(address: str) -> bool:
    return PHONE_MIN_DIGITS <= len(normalize_phone(address)) <= PHONE_MAX_DIGITS


@dataclass(frozen=True)
class Recipient:
    """Immutable delivery target. The address is an email or a phone number."""

    name: str
    address: str

    def __post_init__(self) -> None:
        if not isinstance(self.address, str):
            raise ValueError(f"Recipient address must be a string, got {type(self.address).__name__}")
        if not self.address.strip():
            raise ValueError("Recipient address cannot be empty")


@dataclass(frozen=True)
class ProviderConfig:
    """Credentials and identity for one configured provider."""

    provider: Provider
    channel: ChannelType
    credentials: dict[str, str] = field(repr=False)
    endpoint: str
    sender_identity: str

    @property
    def provider_name(self) -> str:
        return self.provider.value


@dataclass(frozen=True)
class DeliveryResult:
    """Outcome of delivering to one recipient."""

    recipient_address: str
    status: DeliveryStatus
    message_id: str
    provider_name: str
    error_detail: str | None = None
    recipient_name: str = ""

    def __post_init__(self) -> None:
        if self.status is DeliveryStatus.SUCCESS and not self.message_id:
            raise ValueError("Successful delivery requires a message id")

    @property
    def success(self) -> bool:
        return self.status is DeliveryStatus.SUCCESS

    def to_dict(self) -> dict[str, Any]:
        data = {
            "address": self.recipient_address,
            "name": self.recipient_name,
            "status": self.status.value,
            "message_id": self.message_id,
            "provider": self.provider_name,
        }
        if self.error_detail:
            data["error"] = self.error_detail
        return data


@dataclass(frozen=True)
class BatchSummary:
    """Aggregate of one dispatch call, results in input order."""

    successful: int
    failed: int
    results: tuple[DeliveryResult, ...]

    @classmethod
    def from_results(cls, results: list[DeliveryResult]) -> "BatchSummary":
        successful = sum(1 for r in results if r.success)
        return cls(
            successful=successful,
            failed=len(results) - successful,
            results=tuple(results),
        )

    @property
    def total(self) -> int:
        return len(self.results)

    def to_dict(self) -> dict[str, Any]:
        return {
            "successful": self.successful,
            "failed": self.failed,
            "total": self.total,
            "details": [r.to_dict() for r in self.results],
        }
