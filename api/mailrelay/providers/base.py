"""Base email provider interface."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class ProviderRequest:
    """A provider-bound API request, built before it is sent."""
    method: str
    path: str
    body: dict


@dataclass(frozen=True)
class ProviderResponse:
    status_code: int
    headers: dict[str, str] = field(default_factory=dict)
    body: str = ""
    content: bytes = b""

    @classmethod
    def build(
        cls,
        status_code: int,
        headers: Mapping[str, Any],
        body: Optional[str],
        content: Optional[bytes] = None,
    ) -> "ProviderResponse":
        """
        ``body`` is the decoded text, ``content`` the raw bytes to relay.
        ``content`` defaults to ``body`` encoded as UTF-8.
        """
        body = body or ""
        # Header names are case-insensitive; store them lowered
        return cls(
            status_code=status_code,
            headers={str(k).lower(): str(v) for k, v in headers.items()},
            body=body,
            content=content if content is not None else body.encode("utf-8"),
        )


class ProviderError(Exception):
    """
    Raised when a provider call fails before a usable response arrives.

    ``code`` and ``response`` are both optional; callers fall back from one
    to the other, then to 500.
    """

    def __init__(
        self,
        message: str,
        code: Optional[int] = None,
        response: Optional[ProviderResponse] = None,
    ):
        super().__init__(message)
        self.code = code
        self.response = response


class EmailProvider(ABC):
    """
    Common interface for email providers.
    Each provider builds its own request envelope and sends it with api().
    """

    @property
    @abstractmethod
    def provider_type(self) -> str:
        ...

    @abstractmethod
    def empty_request(self, method: str, path: str, body: dict) -> ProviderRequest:
        ...

    @abstractmethod
    async def api(self, request: ProviderRequest) -> ProviderResponse:
        """Send the request and return the provider's response, whatever its status."""
        ...
