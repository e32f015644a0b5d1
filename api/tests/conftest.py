"""Shared test fixtures for the relay."""

from typing import Optional

import pytest

from mailrelay.providers import EmailProvider, ProviderRequest, ProviderResponse


class FakeProvider(EmailProvider):
    """Records requests and returns a canned response (or raises)."""

    def __init__(self, response: Optional[ProviderResponse] = None, error: Optional[Exception] = None):
        self.response = response or ProviderResponse.build(
            200,
            {"Content-Type": "application/json", "Content-Length": "7"},
            "success",
        )
        self.error = error
        self.keys: list[str] = []
        self.requests: list[ProviderRequest] = []

    @property
    def provider_type(self) -> str:
        return "fake"

    def factory(self, key: str) -> "FakeProvider":
        self.keys.append(key)
        return self

    def empty_request(self, method: str, path: str, body: dict) -> ProviderRequest:
        return ProviderRequest(method=method, path=path, body=body)

    async def api(self, request: ProviderRequest) -> ProviderResponse:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def email_body() -> dict:
    return {
        "to": "receiver@email.com",
        "from": "sender@email.com",
        "subject": "subject",
        "body": "<p>body</p>",
    }


@pytest.fixture
def make_provider():
    return FakeProvider
