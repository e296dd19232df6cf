from .email import EMAIL_TIMEOUT_SECONDS, SendGridEmailTransport
from .mock import FALLBACK_PROVIDER_NAME, MOCK_PROVIDER_NAME, MockFallbackSink
from .sms import SMS_TIMEOUT_SECONDS, IletimerkeziSmsTransport, NetgsmSmsTransport

__all__ = [
    "EMAIL_TIMEOUT_SECONDS",
    "FALLBACK_PROVIDER_NAME",
    "MOCK_PROVIDER_NAME",
    "SMS_TIMEOUT_SECONDS",
    "IletimerkeziSmsTransport",
    "MockFallbackSink",
    "NetgsmSmsTransport",
    "SendGridEmailTransport",
]
