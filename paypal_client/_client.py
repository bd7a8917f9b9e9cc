"""PayPal REST client: OAuth2 client-credentials auth with a cached bearer token."""

from __future__ import annotations

import base64
import logging
import os
import re
from typing import Any, ClassVar

import requests
from requests.structures import CaseInsensitiveDict

from ._cache import MemoryCache, TokenCache
from ._exceptions import AuthenticationFailure, ConfigurationError
from ._http import DEFAULT_HEADERS, HTTPClient

logger = logging.getLogger(__name__)

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


def _env_flag(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise ConfigurationError(f"{name} must be a boolean, got {raw!r}", code="invalid_config")


class Client:
    """Client for the PayPal REST API.

    Usage:
        client = Client(client_id="...", client_secret="...", cache=MemoryCache())
        resp = client.post("/notifications/webhooks", {"url": "https://example.com/hook"})
        print(resp.json()["id"])

    Every request carries a bearer token obtained with the client-credentials
    grant. The token is kept in ``cache`` under ``TOKEN_CACHE_KEY`` until
    ``TOKEN_EXPIRY_MARGIN`` seconds before PayPal says it expires.
    """

    LIVE_URL = "https://api.paypal.com"
    SANDBOX_URL = "https://api.sandbox.paypal.com"
    VERSION = "v1"

    TOKEN_CACHE_KEY = "paypal_oauth_token"
    # Tokens are treated as expired an hour before they actually are.
    TOKEN_EXPIRY_MARGIN = 60 * 60

    _built: ClassVar[Client | None] = None

    def __init__(
        self,
        *,
        client_id: str,
        client_secret: str,
        cache: TokenCache,
        sandbox: bool = True,
        version: str = VERSION,
        logger: logging.Logger | None = None,
        timeout: int = 30,
        max_retries: int = 0,
    ):
        self.client_id = client_id
        self.client_secret = client_secret
        self.cache = cache
        self.sandbox = sandbox
        self.version = version
        self.timeout = timeout
        self.max_retries = max_retries
        self._logger = logger
        self._connection: HTTPClient | None = None

    @classmethod
    def from_env(cls, **overrides: Any) -> Client:
        """Create a client from PAYPAL_CLIENT_ID, PAYPAL_CLIENT_SECRET and PAYPAL_SANDBOX."""
        params: dict[str, Any] = {}
        for key, env_name in (
            ("client_id", "PAYPAL_CLIENT_ID"),
            ("client_secret", "PAYPAL_CLIENT_SECRET"),
        ):
            if key in overrides:
                continue
            value = os.environ.get(env_name)
            if not value:
                raise ConfigurationError(
                    f"No {key} provided. Pass {key}= or set {env_name} env var.",
                    code="missing_credentials",
                )
            params[key] = value
        if "sandbox" not in overrides:
            params["sandbox"] = _env_flag("PAYPAL_SANDBOX", True)
        if "cache" not in overrides:
            params["cache"] = MemoryCache()
        params.update(overrides)
        return cls(**params)

    @classmethod
    def build(cls) -> Client:
        """Return the process-wide client configured from the environment."""
        if cls._built is None:
            cls._built = cls.from_env(version=cls.VERSION)
        return cls._built

    @property
    def base_url(self) -> str:
        return self.SANDBOX_URL if self.sandbox else self.LIVE_URL

    @property
    def connection(self) -> HTTPClient:
        if self._connection is None:
            self._connection = HTTPClient(
                self.base_url,
                timeout=self.timeout,
                max_retries=self.max_retries,
                logger=self._logger,
            )
        return self._connection

    # ------------------------------------------------------------------
    # Requests
    # ------------------------------------------------------------------
    def request(
        self,
        method: str,
        path: str,
        data: Any = None,
        headers: dict[str, str] | None = None,
    ) -> requests.Response:
        """Send an authenticated request to ``{version}/{path}``.

        ``data`` is sent as the JSON body for POST/PUT/PATCH and as query
        parameters otherwise.
        """
        method = method.upper()
        body_kwargs: dict[str, Any]
        if method in ("POST", "PUT", "PATCH"):
            body_kwargs = {"json": data}
        else:
            body_kwargs = {"params": data or None}
        return self.connection.request(
            method,
            self.merged_path(path),
            headers=self.merged_headers(headers),
            **body_kwargs,
        )

    def get(
        self, path: str, data: dict[str, Any] | None = None, headers: dict[str, str] | None = None
    ) -> requests.Response:
        return self.request("GET", path, data, headers)

    def post(
        self, path: str, data: Any = None, headers: dict[str, str] | None = None
    ) -> requests.Response:
        return self.request("POST", path, data, headers)

    def put(
        self, path: str, data: Any = None, headers: dict[str, str] | None = None
    ) -> requests.Response:
        return self.request("PUT", path, data, headers)

    def patch(
        self, path: str, data: Any = None, headers: dict[str, str] | None = None
    ) -> requests.Response:
        return self.request("PATCH", path, data, headers)

    def delete(
        self, path: str, data: dict[str, Any] | None = None, headers: dict[str, str] | None = None
    ) -> requests.Response:
        return self.request("DELETE", path, data, headers)

    def merged_path(self, path: str) -> str:
        return re.sub(r"/{2,}", "/", f"{self.version}/{path}")

    def merged_headers(self, headers: dict[str, str] | None = None) -> CaseInsensitiveDict:
        """Caller headers, overridden by the bearer token, overridden by the JSON defaults."""
        merged = CaseInsensitiveDict(headers or {})
        merged["Authorization"] = f"Bearer {self.auth_token()}"
        merged.update(DEFAULT_HEADERS)
        return merged

    # ------------------------------------------------------------------
    # Authentication
    # ------------------------------------------------------------------
    def auth_token(self, force: bool = False) -> str:
        """Return a bearer token, reading it from the cache unless ``force`` is set."""
        if not force:
            token = self.cache.read(self.TOKEN_CACHE_KEY)
            if token is not None:
                return token

        auth_response = self.authenticate()
        if force:
            self.cache.delete(self.TOKEN_CACHE_KEY)

        access_token = auth_response.get("access_token")
        if not access_token:
            raise AuthenticationFailure(
                "Token response did not contain an access_token",
                code="invalid_token_response",
                http_body=auth_response,
            )

        try:
            lifetime = float(auth_response.get("expires_in") or 0)
        except (TypeError, ValueError):
            raise AuthenticationFailure(
                f"Token response has an invalid expires_in: {auth_response.get('expires_in')!r}",
                code="invalid_token_response",
                http_body=auth_response,
            ) from None

        expires_in = lifetime - self.TOKEN_EXPIRY_MARGIN
        if expires_in <= 0:
            logger.debug("Token lifetime shorter than expiry margin; not caching")
            return access_token

        logger.debug("Caching access token for %.0fs", expires_in)
        return self.cache.fetch(self.TOKEN_CACHE_KEY, lambda: access_token, expires_in=expires_in)

    def authenticate(self) -> dict[str, Any]:
        """Exchange the client credentials for a token response."""
        credentials = f"{self.client_id}:{self.client_secret}".encode()
        basic_auth = base64.b64encode(credentials).decode()
        endpoint = "/".join([self.version, "oauth2", "token"])

        logger.debug("Requesting access token (sandbox=%s)", self.sandbox)
        resp = self.connection.request(
            "POST",
            endpoint,
            data="grant_type=client_credentials",
            headers={
                "Authorization": f"Basic {basic_auth}",
                "Content-Type": "application/x-www-form-urlencoded",
            },
        )
        try:
            body = resp.json()
        except ValueError:
            body = None
        if not isinstance(body, dict):
            logger.debug("Unexpected token response body: %s", resp.text[:200])
            raise AuthenticationFailure(
                "Token response is not a JSON object",
                code="invalid_token_response",
                http_status=resp.status_code,
                http_body=resp.text,
            )
        return body

    def close(self) -> None:
        if self._connection is not None:
            self._connection.close()
            self._connection = None

    def __enter__(self) -> Client:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()
