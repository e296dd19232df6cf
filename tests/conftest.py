import pytest

from bulk_notifier.application.services import BulkDispatcher, RetryExecutor, RetryPolicy
from bulk_notifier.channels import MockFallbackSink
from bulk_notifier.config import Settings
from bulk_notifier.domain.models import ChannelType, Recipient
from bulk_notifier.infrastructure.adapters import ProviderRegistry, TransportFactory

_PROVIDER_ENV = (
    "SENDGRID_API_KEY",
    "NETGSM_USERNAME",
    "NETGSM_PASSWORD",
    "ILETIMERKEZI_USERNAME",
    "ILETIMERKEZI_PASSWORD",
)


@pytest.fixture
def make_settings(monkeypatch):
    for name in _PROVIDER_ENV:
        monkeypatch.delenv(name, raising=False)

    def factory(**overrides) -> Settings:
        return Settings(_env_file=None, **overrides)

    return factory


@pytest.fixture
def fast_policy() -> RetryPolicy:
    return RetryPolicy(attempt_timeout=0.5, max_retries=2, backoff_seconds=0)


def fast_sink(channel: ChannelType) -> MockFallbackSink:
    return MockFallbackSink(channel, latency_seconds=0)


def fast_fallback(channel: ChannelType) -> MockFallbackSink:
    return MockFallbackSink.fallback(channel, latency_seconds=0)


@pytest.fixture
def make_dispatcher(fast_policy):
    def factory(channel: ChannelType, settings: Settings, executor: RetryExecutor | None = None) -> BulkDispatcher:
        return BulkDispatcher(
            channel=channel,
            registry=ProviderRegistry(settings),
            factory=TransportFactory(),
            executor=executor or RetryExecutor(fast_policy, fallback=fast_fallback(channel)),
            mock_sink=fast_sink(channel),
        )

    return factory


@pytest.fixture
def email_recipients() -> list[Recipient]:
    return [
        Recipient(name="Ayse", address="ayse@example.com"),
        Recipient(name="Mehmet", address="mehmet@example.com"),
        Recipient(name="Zeynep", address="zeynep@example.com"),
    ]


@pytest.fixture
def sms_recipients() -> list[Recipient]:
    return [
        Recipient(name="Ayse", address="+90 532 111 2233"),
        Recipient(name="Mehmet", address="0532-444-5566"),
    ]
