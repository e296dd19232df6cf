"""
Provider discovery.

Inspects the settings once, at construction, and keeps the resulting
per-channel priority lists for the lifetime of the registry. Missing
credentials are an expected state and only produce diagnostics.
"""

from collections.abc import Callable

import structlog

from ...config import Settings
from ...domain.models import ChannelType, Provider, ProviderConfig
from ..logging import sanitize_for_logging

logger = structlog.get_logger()


def _sendgrid(settings: Settings) -> ProviderConfig | None:
    if not settings.sendgrid_api_key:
        return None
    return ProviderConfig(
        provider=Provider.SENDGRID,
        channel=ChannelType.EMAIL,
        credentials={"api_key": settings.sendgrid_api_key},
        endpoint=settings.sendgrid_url,
        sender_identity=settings.email_from,
    )


def _netgsm(settings: Settings) -> ProviderConfig | None:
    if not (settings.netgsm_username and settings.netgsm_password):
        return None
    return ProviderConfig(
        provider=Provider.NETGSM,
        channel=ChannelType.SMS,
        credentials={
            "username": settings.netgsm_username,
            "password": settings.netgsm_password,
        },
        endpoint=settings.netgsm_url,
        sender_identity=settings.netgsm_msgheader,
    )


def _iletimerkezi(settings: Settings) -> ProviderConfig | None:
    if not (settings.iletimerkezi_username and settings.iletimerkezi_password):
        return None
    return ProviderConfig(
        provider=Provider.ILETIMERKEZI,
        channel=ChannelType.SMS,
        credentials={
            "username": settings.iletimerkezi_username,
            "password": settings.iletimerkezi_password,
        },
        endpoint=settings.iletimerkezi_url,
        sender_identity=settings.iletimerkezi_msgheader,
    )


# Precedence per channel, highest first
PROVIDER_PRECEDENCE: dict[ChannelType, tuple[tuple[Provider, Callable[[Settings], ProviderConfig | None]], ...]] = {
    ChannelType.EMAIL: ((Provider.SENDGRID, _sendgrid),),
    ChannelType.SMS: (
        (Provider.NETGSM, _netgsm),
        (Provider.ILETIMERKEZI, _iletimerkezi),
    ),
}


class ProviderRegistry:
    """Ordered, read-only view of the providers that have credentials."""

    def __init__(self, settings: Settings) -> None:
        self._providers: dict[ChannelType, tuple[ProviderConfig, ...]] = {
            channel: self._discover(channel, settings) for channel in ChannelType
        }

    @staticmethod
    def _discover(channel: ChannelType, settings: Settings) -> tuple[ProviderConfig, ...]:
        found = []
        missing = []
        for provider, build in PROVIDER_PRECEDENCE[channel]:
            config = build(settings)
            if config is None:
                missing.append(provider.value)
                continue
            found.append(config)
            logger.info(
                "Provider configuration found",
                channel=channel.value,
                provider=provider.value,
                username=sanitize_for_logging(config.credentials.get("username", "")),
                endpoint=config.endpoint,
            )

        if found:
            logger.info(
                "Providers resolved",
                channel=channel.value,
                order=[c.provider_name for c in found],
                missing=missing,
            )
        else:
            logger.warning(
                "No providers configured, mock mode active",
                channel=channel.value,
                missing=missing,
            )
        return tuple(found)

    def resolve(self, channel: ChannelType) -> tuple[ProviderConfig, ...]:
        """Providers usable for the channel, in priority order (may be empty)."""
        return self._providers[channel]
