"""Email provider abstraction layer."""

from mailrelay.providers.base import (
    EmailProvider,
    ProviderError,
    ProviderRequest,
    ProviderResponse,
)
from mailrelay.providers.sendgrid import SendGridProvider

__all__ = [
    "EmailProvider",
    "ProviderError",
    "ProviderRequest",
    "ProviderResponse",
    "SendGridProvider",
]
