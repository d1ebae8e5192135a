"""
HTTP plumbing shared by every service client.

`BaseService` resolves configuration, credentials and headers, and turns
``(method, path, body)`` into an ``httpx.Request``. The two concrete bases
only differ in how a request is sent: `ServiceClient` wraps ``httpx.Client``
and `AsyncServiceClient` wraps ``httpx.AsyncClient``. Responses go through
the same status handling either way:

- 2xx: logged as ``request_completed`` and returned;
- anything else: logged as ``service_error`` and raised as the matching
  :class:`~nlclassifier.core.exceptions.ServiceResponseError` subclass;
- no response at all: ``httpx.RequestError`` is logged as
  ``request_failed`` and re-raised as
  :class:`~nlclassifier.core.exceptions.TransportError`.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Dict, Mapping, Optional, Type, TypeVar

import httpx
import structlog
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from nlclassifier.core.config import ClientSettings, get_settings
from nlclassifier.core.exceptions import (
    ServiceResponseError,
    TransportError,
    error_for_response,
)
from nlclassifier.version import __version__

__all__: list[str] = ["BaseService", "ServiceClient", "AsyncServiceClient"]

# Bound to a stdlib logger so nothing is emitted until the application
# configures logging (see nlclassifier.core.logging.configure_logging).
logger = structlog.wrap_logger(
    logging.getLogger(__name__),
    wrapper_class=structlog.stdlib.BoundLogger,
    cache_logger_on_first_use=False,
)

ModelT = TypeVar("ModelT", bound=BaseModel)

USER_AGENT = f"nl-classifier-client/{__version__}"


def _basic_header(api_key: str) -> str:
    return api_key if api_key.startswith("Basic ") else f"Basic {api_key}"


class BaseService:
    client: Any

    def __init__(
        self,
        settings: Optional[ClientSettings] = None,
        *,
        endpoint: Optional[str] = None,
        api_key: Optional[str] = None,
        username: Optional[str] = None,
        password: Optional[str] = None,
        timeout: Optional[float] = None,
        verify_ssl: Optional[bool] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> None:
        settings = settings if settings is not None else get_settings()

        endpoint = endpoint if endpoint is not None else settings.endpoint
        self.endpoint = endpoint.rstrip("/")
        self.timeout = timeout if timeout is not None else settings.timeout
        self.verify_ssl = (
            verify_ssl if verify_ssl is not None else settings.verify_ssl
        )

        api_key = api_key if api_key is not None else settings.api_key
        username = username if username is not None else settings.username
        password = password if password is not None else settings.password

        self.default_headers: Dict[str, str] = {
            "Accept": "application/json",
            "User-Agent": USER_AGENT,
        }
        if headers:
            self.default_headers.update(headers)

        self.auth: Optional[httpx.Auth] = None
        if api_key:
            self.default_headers["Authorization"] = _basic_header(api_key)
        elif username is not None and password is not None:
            self.auth = httpx.BasicAuth(username, password)

    def build_url(self, path: str) -> str:
        return f"{self.endpoint}/{path.lstrip('/')}"

    def _build_request(self, method: str, path: str, **kwargs: Any) -> httpx.Request:
        return self.client.build_request(method, self.build_url(path), **kwargs)

    def _log_started(self, request: httpx.Request) -> float:
        logger.debug("request_started", method=request.method, path=request.url.path)
        return time.perf_counter()

    def _log_failed(
        self, request: httpx.Request, started: float, exc: httpx.RequestError
    ) -> TransportError:
        logger.error(
            "request_failed",
            method=request.method,
            path=request.url.path,
            error=str(exc),
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
        )
        return TransportError(f"{request.method} {request.url} failed: {exc}")

    def _check_response(
        self, request: httpx.Request, response: httpx.Response, started: float
    ) -> httpx.Response:
        duration_ms = round((time.perf_counter() - started) * 1000, 2)
        if response.is_success:
            logger.info(
                "request_completed",
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
                duration_ms=duration_ms,
            )
            return response

        error = error_for_response(response)
        logger.warning(
            "service_error",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            message=error.message,
            duration_ms=duration_ms,
        )
        raise error

    @staticmethod
    def _parse(response: httpx.Response, model: Type[ModelT]) -> ModelT:
        """Validate a JSON response body into *model*."""
        try:
            return model.model_validate(response.json())
        except (ValueError, PydanticValidationError) as exc:
            raise ServiceResponseError(
                response.status_code,
                f"Unexpected response body for {model.__name__}",
                response,
            ) from exc


class ServiceClient(BaseService):
    """Blocking client backed by ``httpx.Client``."""

    def __init__(
        self,
        settings: Optional[ClientSettings] = None,
        *,
        transport: Optional[httpx.BaseTransport] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(settings, **kwargs)
        self.client = httpx.Client(
            auth=self.auth,
            headers=self.default_headers,
            timeout=self.timeout,
            verify=self.verify_ssl,
            transport=transport,
        )

    def request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        request = self._build_request(method, path, **kwargs)
        started = self._log_started(request)
        try:
            response = self.client.send(request)
        except httpx.RequestError as exc:
            raise self._log_failed(request, started, exc) from exc
        return self._check_response(request, response, started)

    def close(self) -> None:
        self.client.close()

    def __enter__(self) -> "ServiceClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


class AsyncServiceClient(BaseService):
    """Non-blocking client backed by ``httpx.AsyncClient``."""

    def __init__(
        self,
        settings: Optional[ClientSettings] = None,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(settings, **kwargs)
        self.client = httpx.AsyncClient(
            auth=self.auth,
            headers=self.default_headers,
            timeout=self.timeout,
            verify=self.verify_ssl,
            transport=transport,
        )

    async def request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        request = self._build_request(method, path, **kwargs)
        started = self._log_started(request)
        try:
            response = await self.client.send(request)
        except httpx.RequestError as exc:
            raise self._log_failed(request, started, exc) from exc
        return self._check_response(request, response, started)

    async def aclose(self) -> None:
        await self.client.aclose()

    async def __aenter__(self) -> "AsyncServiceClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()
