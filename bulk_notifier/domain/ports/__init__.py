from .transport import TransportAdapter

__all__ = ["TransportAdapter"]
