"""Typed error hierarchy mapping HTTP status codes from the PayPal REST API."""

from __future__ import annotations

import logging
from typing import Any

import requests

logger = logging.getLogger(__name__)

DEFAULT_ERROR_MESSAGE = "Something went wrong"


class PaypalError(Exception):
    """Base exception for all paypal-client errors."""

    def __init__(
        self,
        error_message: str | None = None,
        *,
        code: str | None = None,
        http_status: int | None = None,
        http_body: Any = None,
        debug_id: str | None = None,
        method: str | None = None,
        path: str | None = None,
    ):
        self.error_message = error_message
        self.code = code
        self.http_status = http_status
        self.http_body = http_body
        self.debug_id = debug_id
        self.method = method
        self.path = path
        super().__init__(self.message)

    @property
    def message(self) -> str:
        if self.http_status is None:
            return f"{self.code}: {self.error_message}"
        return f"{self.code}: {self.error_message} ({self.http_status})"

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        extra = ""
        if self.http_status is not None:
            extra += f" status_code: {self.http_status}"
        if self.http_body is not None:
            extra += f" body: {self.http_body}"
        return f"<{type(self).__name__}: {self.message}{extra}>"


class InvalidRequest(PaypalError):
    """400: malformed request or failed business validation."""


class AuthenticationFailure(PaypalError):
    """401: bad client credentials or expired access token."""


class NotAuthorized(PaypalError):
    """403: the app lacks permission for this resource."""


class ResourceNotFound(PaypalError):
    """404: resource does not exist."""


class MethodNotSupported(PaypalError):
    """405: HTTP method not allowed on this endpoint."""


class MediaTypeNotAcceptable(PaypalError):
    """406: the Accept header asks for a format PayPal cannot produce."""


class UnsupportedMediaType(PaypalError):
    """415: request body is not in a supported content type."""


class UnprocessableEntity(PaypalError):
    """422: request was well-formed but semantically rejected."""


class RateLimitReached(PaypalError):
    """429: too many requests."""


class InternalServerError(PaypalError):
    """500: unexpected failure inside PayPal."""


class ServiceUnavailable(PaypalError):
    """503: PayPal is temporarily unavailable."""


class NetworkError(PaypalError):
    """Raised when the request never produced a response (timeout, DNS, reset)."""


class ConfigurationError(PaypalError):
    """Raised when credentials cannot be found in the environment."""


# Map HTTP status codes to exception classes.
STATUS_MAP: dict[int, type[PaypalError]] = {
    400: InvalidRequest,
    401: AuthenticationFailure,
    403: NotAuthorized,
    404: ResourceNotFound,
    405: MethodNotSupported,
    406: MediaTypeNotAcceptable,
    415: UnsupportedMediaType,
    422: UnprocessableEntity,
    429: RateLimitReached,
    500: InternalServerError,
    503: ServiceUnavailable,
}


def _parse_body(resp: requests.Response) -> Any:
    if not resp.content:
        return None
    try:
        return resp.json()
    except ValueError:
        logger.debug("Error body is not JSON: %s", resp.text[:200])
        return resp.text


def _error_message(body: Any) -> str:
    if isinstance(body, dict):
        if "message" in body:
            return body["message"]
        if "error_description" in body:
            return body["error_description"]
    return DEFAULT_ERROR_MESSAGE


def _error_code(body: Any, status: int) -> str:
    if isinstance(body, dict):
        if "name" in body:
            return body["name"]
        if "error" in body:
            return body["error"]
    return str(status)


def error_from_response(
    resp: requests.Response, *, method: str | None = None, path: str | None = None
) -> PaypalError:
    """Build the typed exception for an error response (status >= 400)."""
    status = resp.status_code
    body = _parse_body(resp)
    debug_id = body.get("debug_id") if isinstance(body, dict) else None
    exc_cls = STATUS_MAP.get(status, PaypalError)
    return exc_cls(
        _error_message(body),
        code=_error_code(body, status),
        http_status=status,
        http_body=body,
        debug_id=debug_id or resp.headers.get("PayPal-Debug-Id"),
        method=method,
        path=path,
    )


def raise_for_status(
    resp: requests.Response, *, method: str | None = None, path: str | None = None
) -> None:
    """Map HTTP error responses to typed exceptions."""
    if resp.status_code < 400:
        return
    raise error_from_response(resp, method=method, path=path)
