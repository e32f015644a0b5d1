"""Outbound response writer used by the handler."""

import json
from typing import Any, Optional, Union

from starlette.responses import Response


class ResponseSink:
    """
    Collects status, headers and body for exactly one outbound response.

    send() and end() finalize the sink; finalizing a second time raises.
    """

    def __init__(self) -> None:
        self.status_code: int = 200
        self.headers: dict[str, str] = {}
        self.body: Optional[bytes] = None
        self.finished = False

    def status(self, code: int) -> "ResponseSink":
        self.status_code = code
        return self

    def set(self, name: str, value: Any) -> "ResponseSink":
        self.headers[name.lower()] = str(value)
        return self

    def send(self, body: Union[str, bytes, dict, list]) -> "ResponseSink":
        if isinstance(body, (dict, list)):
            self.headers.setdefault("content-type", "application/json")
            body = json.dumps(body)
        if isinstance(body, str):
            body = body.encode("utf-8")
        self._finish(body)
        return self

    def end(self) -> "ResponseSink":
        self._finish(None)
        return self

    def _finish(self, body: Optional[bytes]) -> None:
        if self.finished:
            raise RuntimeError("Response already sent")
        self.body = body
        self.finished = True

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace") if self.body else ""

    def to_response(self) -> Response:
        if not self.finished:
            raise RuntimeError("Response was never finalized")
        return Response(
            content=self.body or b"",
            status_code=self.status_code,
            headers=self.headers,
        )
