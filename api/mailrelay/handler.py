"""Validate an email-send request, forward it to SendGrid, and relay the reply."""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Optional

from mailrelay.config import settings
from mailrelay.errors import (
    Err,
    ErrorKind,
    HandlerError,
    Ok,
    Result,
    bad_request,
    method_not_allowed,
    unauthorized,
)
from mailrelay.providers import EmailProvider, ProviderResponse, SendGridProvider
from mailrelay.response import ResponseSink
from mailrelay.schemas.email import EmailRequest, ProviderPayload

logger = logging.getLogger(__name__)

# Checked in this order; only the first missing field is reported.
REQUIRED_FIELDS = (
    ("to", 'To email address not provided. Make sure you have a "to" property in your request'),
    ("from", 'From email address not provided. Make sure you have a "from" property in your request'),
    ("subject", 'Email subject line not provided. Make sure you have a "subject" property in your request'),
    ("body", 'Email content not provided. Make sure you have a "body" property in your request'),
)

PASSTHROUGH_HEADERS = ("content-type", "content-length")


@dataclass(frozen=True)
class InboundRequest:
    method: str
    query: Mapping[str, str] = field(default_factory=dict)
    body: Any = None


def check_method(method: str) -> Result[None]:
    if method != "POST":
        return method_not_allowed()
    return Ok(None)


def get_client(
    key: Optional[str],
    factory: Callable[[str], EmailProvider] = SendGridProvider.from_key,
) -> Result[EmailProvider]:
    """Build a fresh provider client from the caller's key."""
    if not key:
        return unauthorized(settings.api_key_param)
    return Ok(factory(key))


def validate_email(body: Any) -> Result[EmailRequest]:
    if not isinstance(body, Mapping):
        body = {}
    for name, message in REQUIRED_FIELDS:
        if not body.get(name):
            return bad_request(message)
    return Ok(EmailRequest(**{name: str(body[name]) for name, _ in REQUIRED_FIELDS}))


def get_payload(body: Any) -> Result[ProviderPayload]:
    """Construct the SendGrid mail/send payload from the request body."""
    result = validate_email(body)
    if not result.ok:
        return result
    return Ok(ProviderPayload.from_request(result.value))


def map_provider_exception(exc: Exception) -> HandlerError:
    """
    Code precedence: the raised error's own code, then the status of any
    response attached to it, then 500.
    """
    code = _http_status(getattr(exc, "code", None))
    if code is None:
        response = getattr(exc, "response", None)
        if response is not None:
            code = _http_status(getattr(response, "status_code", None))
    return HandlerError(ErrorKind.PROVIDER_ERROR, code or 500, str(exc) or exc.__class__.__name__)


def _http_status(value: Any) -> Optional[int]:
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value if 100 <= value <= 599 else None


def map_provider_response(response: ProviderResponse) -> Result[ProviderResponse]:
    if response.status_code < 200 or response.status_code >= 400:
        return Err(HandlerError(ErrorKind.UPSTREAM_NON_2XX, response.status_code, response.body))
    return Ok(response)


class EmailForwardingHandler:
    """
    Turns one inbound request into one outbound response.

    Stateless: a provider client is built per call from the request's key,
    so one instance can serve concurrent requests.
    """

    def __init__(
        self,
        provider_factory: Callable[[str], EmailProvider] = SendGridProvider.from_key,
        send_path: Optional[str] = None,
    ):
        self.provider_factory = provider_factory
        self.send_path = send_path or settings.sendgrid_send_path

    async def handle(self, request: InboundRequest, sink: ResponseSink) -> Result[ProviderResponse]:
        result = await self._process(request)
        if result.ok:
            self._write_success(result.value, sink)
        else:
            logger.error("Email relay failed: %s", result.error)
            sink.status(result.error.code).send(result.error.to_body())
        return result

    async def _process(self, request: InboundRequest) -> Result[ProviderResponse]:
        checked = check_method(request.method)
        if not checked.ok:
            return checked

        client = get_client(request.query.get(settings.api_key_param), self.provider_factory)
        if not client.ok:
            return client

        payload = get_payload(request.body)
        if not payload.ok:
            return payload

        provider = client.value
        provider_request = provider.empty_request("POST", self.send_path, payload.value.to_json())

        to = request.body["to"]
        logger.info("Sending email to: %s", to)
        try:
            response = await provider.api(provider_request)
        except Exception as exc:
            return Err(map_provider_exception(exc))

        mapped = map_provider_response(response)
        if mapped.ok:
            logger.info("Email sent to: %s", to)
        return mapped

    def _write_success(self, response: ProviderResponse, sink: ResponseSink) -> None:
        sink.status(response.status_code)
        content = response.content
        for name in PASSTHROUGH_HEADERS:
            value = response.headers.get(name)
            if not value:
                continue
            # A stale length would break the outbound framing
            if name == "content-length" and value != str(len(content)):
                continue
            sink.set(name, value)
        if content:
            sink.send(content)
        else:
            sink.end()
