"""SendGrid email provider (https://sendgrid.com)."""

import logging
from typing import Optional

import httpx

from mailrelay.config import settings
from mailrelay.providers.base import (
    EmailProvider,
    ProviderError,
    ProviderRequest,
    ProviderResponse,
)

logger = logging.getLogger(__name__)


class SendGridProvider(EmailProvider):
    """Talk to the SendGrid v3 API with a caller-supplied key."""

    @property
    def provider_type(self) -> str:
        return "sendgrid"

    def __init__(
        self,
        api_key: str,
        api_base: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.api_key = api_key
        self.api_base = (api_base or settings.sendgrid_api_base).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.provider_timeout

    @classmethod
    def from_key(cls, api_key: str) -> "SendGridProvider":
        return cls(api_key=api_key)

    def empty_request(self, method: str, path: str, body: dict) -> ProviderRequest:
        return ProviderRequest(method=method, path=path, body=body)

    async def api(self, request: ProviderRequest) -> ProviderResponse:
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                resp = await client.request(
                    request.method,
                    f"{self.api_base}{request.path}",
                    headers={
                        "Authorization": f"Bearer {self.api_key}",
                        "Content-Type": "application/json",
                    },
                    json=request.body,
                )
        except httpx.HTTPError as exc:
            raise ProviderError(f"SendGrid request failed: {exc}") from exc

        logger.debug("SendGrid %s %s -> %s", request.method, request.path, resp.status_code)
        # httpx has already undone any content-encoding
        headers = {k: v for k, v in resp.headers.items() if k.lower() != "content-encoding"}
        return ProviderResponse.build(resp.status_code, headers, resp.text, resp.content)
