"""
paypal-client - Python client for the PayPal REST API.

OAuth2 client-credentials auth with a cached bearer token, and typed errors
for every error status PayPal returns.
"""

from ._cache import MemoryCache, TokenCache
from ._client import Client
from ._exceptions import (
    STATUS_MAP,
    AuthenticationFailure,
    ConfigurationError,
    InternalServerError,
    InvalidRequest,
    MediaTypeNotAcceptable,
    MethodNotSupported,
    NetworkError,
    NotAuthorized,
    PaypalError,
    RateLimitReached,
    ResourceNotFound,
    ServiceUnavailable,
    UnprocessableEntity,
    UnsupportedMediaType,
)
from ._version import __version__

__all__ = [
    "STATUS_MAP",
    "AuthenticationFailure",
    # Main client
    "Client",
    "ConfigurationError",
    "InternalServerError",
    "InvalidRequest",
    "MediaTypeNotAcceptable",
    "MemoryCache",
    "MethodNotSupported",
    "NetworkError",
    "NotAuthorized",
    "PaypalError",
    "RateLimitReached",
    "ResourceNotFound",
    "ServiceUnavailable",
    "TokenCache",
    "UnprocessableEntity",
    "UnsupportedMediaType",
    "__version__",
]
