"""Thin HTTP client wrapping requests.Session with JSON defaults and error mapping."""

from __future__ import annotations

import logging
from typing import Any

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ._exceptions import NetworkError, raise_for_status
from ._version import __version__

logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {
    "Accept": "application/json",
    "Content-Type": "application/json",
}

_RETRYABLE_STATUS = [429, 500, 502, 503, 504]
# POST is not idempotent; retrying it could create duplicate payments.
_RETRYABLE_METHODS = ["HEAD", "GET", "PUT", "PATCH", "DELETE", "OPTIONS"]


class HTTPClient:
    """Minimal HTTP client bound to one base URL."""

    def __init__(
        self,
        base_url: str,
        timeout: int = 30,
        max_retries: int = 0,
        logger: logging.Logger | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.max_retries = max_retries
        self._logger = logger
        self._session = requests.Session()
        self._session.headers.update(DEFAULT_HEADERS)
        self._session.headers["User-Agent"] = f"paypal-client-python/{__version__}"

        if max_retries > 0:
            retry_strategy = Retry(
                total=max_retries,
                backoff_factor=0.5,
                status_forcelist=_RETRYABLE_STATUS,
                allowed_methods=_RETRYABLE_METHODS,
                raise_on_status=False,
            )
            adapter = HTTPAdapter(max_retries=retry_strategy)
            self._session.mount("http://", adapter)
            self._session.mount("https://", adapter)

    @property
    def headers(self) -> Any:
        return self._session.headers

    def url_for(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        data: Any = None,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> requests.Response:
        """Send a request and raise a typed exception on an error status."""
        method = method.upper()
        url = self.url_for(path)
        logger.debug("%s %s", method, url)
        if self._logger:
            self._logger.info("request: %s %s", method, url)

        try:
            resp = self._session.request(
                method,
                url,
                json=json,
                data=data,
                params=params,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.Timeout as e:
            logger.warning("%s %s timed out after %ss", method, url, self.timeout)
            raise NetworkError(
                f"Request timed out after {self.timeout}s", code="timeout", method=method, path=url
            ) from e
        except requests.ConnectionError as e:
            logger.warning("%s %s failed: %s", method, url, e)
            raise NetworkError(str(e), code="network_error", method=method, path=url) from e

        if self._logger:
            self._logger.info("response: %s %s -> %d", method, url, resp.status_code)
        raise_for_status(resp, method=method, path=url)
        return resp

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> HTTPClient:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()
