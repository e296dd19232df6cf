"""
Factory for creating transport instances.

Maps a resolved ProviderConfig to the concrete TransportAdapter that
speaks that provider's protocol.
"""

from ...channels import IletimerkeziSmsTransport, NetgsmSmsTransport, SendGridEmailTransport
from ...domain.models import Provider, ProviderConfig
from ...domain.ports import TransportAdapter


class TransportFactory:
    """
    Factory for creating provider transports.

    Instances are cached per provider since each one is bound to
    configuration that never changes for the life of the process.
    """

    def __init__(self, email_sender_name: str = "") -> None:
        self._email_sender_name = email_sender_name
        self._instances: dict[Provider, TransportAdapter] = {}

    def get_transport(self, config: ProviderConfig) -> TransportAdapter:
        """
        Get or create the transport for a provider config.

        Raises:
            ValueError: If the provider is not supported
        """
        if config.provider not in self._instances:
            self._instances[config.provider] = self._create_transport(config)
        return self._instances[config.provider]

    def _create_transport(self, config: ProviderConfig) -> TransportAdapter:
        match config.provider:
            case Provider.SENDGRID:
                return SendGridEmailTransport(config, sender_name=self._email_sender_name)
            case Provider.NETGSM:
                return NetgsmSmsTransport(config)
            case Provider.ILETIMERKEZI:
                return IletimerkeziSmsTransport(config)
            case _:
                raise ValueError(f"Unsupported provider: {config.provider}")
