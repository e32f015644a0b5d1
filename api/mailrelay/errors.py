"""Tagged handler errors and the Ok/Err result carried through the handler."""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar, Union

T = TypeVar("T")


class ErrorKind(str, Enum):
    METHOD_NOT_ALLOWED = "method_not_allowed"
    UNAUTHORIZED = "unauthorized"
    BAD_REQUEST = "bad_request"
    PROVIDER_ERROR = "provider_error"
    UPSTREAM_NON_2XX = "upstream_non_2xx"


@dataclass(frozen=True)
class HandlerError:
    """An error that ends the request, with the HTTP status to surface."""
    kind: ErrorKind
    code: int
    message: str

    def to_body(self) -> dict:
        return {"error": {"code": self.code, "message": self.message}}

    def __str__(self) -> str:
        return f"{self.code} {self.kind.value}: {self.message}"


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    error: HandlerError

    @property
    def ok(self) -> bool:
        return False


Result = Union[Ok[T], Err]


def method_not_allowed() -> Err:
    return Err(HandlerError(ErrorKind.METHOD_NOT_ALLOWED, 405, "Only POST requests are accepted"))


def unauthorized(param: str) -> Err:
    return Err(
        HandlerError(
            ErrorKind.UNAUTHORIZED,
            401,
            f'SendGrid API key not provided. Make sure you have a "{param}" property '
            "in your request querystring",
        )
    )


def bad_request(message: str) -> Err:
    return Err(HandlerError(ErrorKind.BAD_REQUEST, 400, message))
