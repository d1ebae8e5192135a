"""
Client exceptions

Every error raised by the SDK derives from :class:`ClassifierClientError` so
callers can catch the whole family in one place, while the three branches
stay distinguishable:

- `InvalidArgumentError`: an options bundle is missing a required field.
  Raised before any request is built, so nothing reaches the network.
- `TransportError`: the request never produced an HTTP response
  (connection refused, DNS failure, timeout). The underlying ``httpx``
  exception is chained as ``__cause__``.
- `ServiceResponseError`: the service answered with a non-2xx status. A
  subclass per well-known status code is selected by
  :func:`error_for_response`.
"""

from __future__ import annotations

from http import HTTPStatus
from typing import Any, Dict, Optional, Type

import httpx

__all__: list[str] = [
    "ClassifierClientError",
    "InvalidArgumentError",
    "TransportError",
    "ServiceResponseError",
    "BadRequestError",
    "UnauthorizedError",
    "ForbiddenError",
    "NotFoundError",
    "ConflictError",
    "RequestTooLargeError",
    "UnsupportedMediaTypeError",
    "TooManyRequestsError",
    "InternalServerError",
    "ServiceUnavailableError",
    "error_for_response",
]


class ClassifierClientError(Exception):
    """Base class for every error raised by the client."""


class InvalidArgumentError(ClassifierClientError, ValueError):
    """Raised when an options bundle fails validation before dispatch."""


class TransportError(ClassifierClientError):
    """Raised when no HTTP response could be obtained."""


class ServiceResponseError(ClassifierClientError):
    """
    Raised when the service returns a non-2xx response.

    Attributes:
        status_code: HTTP status of the response
        message: Error text extracted from the response body
        response: The raw ``httpx.Response``
    """

    def __init__(
        self,
        status_code: int,
        message: str,
        response: Optional[httpx.Response] = None,
    ) -> None:
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message
        self.response = response


class BadRequestError(ServiceResponseError):
    pass


class UnauthorizedError(ServiceResponseError):
    pass


class ForbiddenError(ServiceResponseError):
    pass


class NotFoundError(ServiceResponseError):
    pass


class ConflictError(ServiceResponseError):
    pass


class RequestTooLargeError(ServiceResponseError):
    pass


class UnsupportedMediaTypeError(ServiceResponseError):
    pass


class TooManyRequestsError(ServiceResponseError):
    pass


class InternalServerError(ServiceResponseError):
    pass


class ServiceUnavailableError(ServiceResponseError):
    pass


_ERRORS_BY_STATUS: Dict[int, Type[ServiceResponseError]] = {
    HTTPStatus.BAD_REQUEST: BadRequestError,
    HTTPStatus.UNAUTHORIZED: UnauthorizedError,
    HTTPStatus.FORBIDDEN: ForbiddenError,
    HTTPStatus.NOT_FOUND: NotFoundError,
    HTTPStatus.CONFLICT: ConflictError,
    HTTPStatus.REQUEST_ENTITY_TOO_LARGE: RequestTooLargeError,
    HTTPStatus.UNSUPPORTED_MEDIA_TYPE: UnsupportedMediaTypeError,
    HTTPStatus.TOO_MANY_REQUESTS: TooManyRequestsError,
    HTTPStatus.INTERNAL_SERVER_ERROR: InternalServerError,
    HTTPStatus.SERVICE_UNAVAILABLE: ServiceUnavailableError,
}

_MESSAGE_KEYS: tuple[str, ...] = ("error", "description", "message")


def _extract_message(response: httpx.Response) -> str:
    """Pull a human-readable message out of an error response body."""
    try:
        body: Any = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        for key in _MESSAGE_KEYS:
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
            # some gateways nest the envelope: {"error": {"message": ...}}
            if isinstance(value, dict) and isinstance(value.get("message"), str):
                return value["message"]

    return response.reason_phrase or "Unknown error"


def error_for_response(response: httpx.Response) -> ServiceResponseError:
    """Build the :class:`ServiceResponseError` matching *response*'s status."""
    error_cls = _ERRORS_BY_STATUS.get(response.status_code, ServiceResponseError)
    return error_cls(response.status_code, _extract_message(response), response)
