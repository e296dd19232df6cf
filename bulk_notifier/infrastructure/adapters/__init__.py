from .provider_registry import ProviderRegistry
from .transport_factory import TransportFactory

__all__ = [
    "ProviderRegistry",
    "TransportFactory",
]
