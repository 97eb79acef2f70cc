"""
HTTP transport for the DeepL REST API.

Resolves the base URL from the API key, sends blocking requests through
httpx and maps the server's status codes onto the ``DeepLError`` hierarchy.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from deepl_api import __version__
from deepl_api.errors import (
    AuthorizationError,
    BadRequestError,
    DeepLError,
    DeserializationError,
    NetworkError,
    NotFoundError,
    QuotaExceededError,
    ServerError,
    TooManyRequestsError,
)
from deepl_api.models import ServerErrorMessage

logger = logging.getLogger(__name__)


FREE_SERVER_URL = "https://api-free.deepl.com/v2"
PRO_SERVER_URL = "https://api.deepl.com/v2"

# DeepL issues free-tier keys with this suffix
FREE_KEY_SUFFIX = ":fx"

HTTP_STATUS_QUOTA_EXCEEDED = 456

DEFAULT_TIMEOUT = httpx.Timeout(30.0, connect=10.0)

Params = dict[str, "str | list[str]"]


# =============================================================================
# Endpoint resolution
# =============================================================================


def is_free_account_key(api_key: str) -> bool:
    """Whether the key belongs to a DeepL API Free account."""
    return api_key.strip().endswith(FREE_KEY_SUFFIX)


def resolve_server_url(api_key: str, server_url: str | None = None) -> str:
    """
    Get the base URL requests for this key are sent to.

    Args:
        api_key: DeepL authentication key
        server_url: Explicit override, takes precedence over the key tier

    Returns:
        Base URL without trailing slash

    Raises:
        ValueError: if ``server_url`` is not a valid http(s) URL
    """
    if not server_url:
        return FREE_SERVER_URL if is_free_account_key(api_key) else PRO_SERVER_URL

    try:
        url = httpx.URL(server_url)
    except httpx.InvalidURL as e:
        raise ValueError(f"Invalid server URL {server_url!r}: {e}") from e
    if url.scheme not in ("http", "https") or not url.host:
        raise ValueError(f"Invalid server URL {server_url!r}: expected http(s)://host[:port][/path]")
    return server_url.rstrip("/")


def parse_retry_after(value: str | None) -> float | None:
    """Parse a ``Retry-After`` header given in seconds."""
    if not value:
        return None
    try:
        seconds = float(value)
    except ValueError:
        # HTTP-date form is not used by DeepL
        return None
    return seconds if seconds >= 0 else None


# =============================================================================
# Transport
# =============================================================================


class HttpTransport:
    """
    Sends authenticated requests to one DeepL server.

    Each call opens its own ``httpx.Client``; connection pooling is left to
    httpx. Pass ``transport`` to route requests through a custom httpx
    transport (``httpx.MockTransport`` in tests).
    """

    def __init__(
        self,
        api_key: str,
        server_url: str,
        timeout: httpx.Timeout = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ):
        self._api_key = api_key
        self._server_url = server_url
        self._timeout = timeout
        self._transport = transport

    @property
    def server_url(self) -> str:
        return self._server_url

    @property
    def headers(self) -> dict[str, str]:
        return {
            "User-Agent": f"deepl-api-python/{__version__}",
            "Accept": "application/json",
        }

    def request(self, method: str, path: str, params: Params | None = None) -> Any:
        """
        Perform one request and return the decoded JSON body.

        GET requests carry the parameters in the query string, everything
        else sends them form-encoded. The API key is always attached.

        Raises:
            DeepLError: a subclass matching the failure
        """
        payload: Params = {"auth_key": self._api_key}
        if params:
            payload.update(params)

        url = f"{self._server_url}{path}"
        logger.debug(f"DeepL request: {method} {url}")

        try:
            with httpx.Client(
                headers=self.headers,
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                if method.upper() == "GET":
                    response = client.request(method, url, params=payload)
                else:
                    response = client.request(method, url, data=payload)
        except httpx.RequestError as e:
            logger.info(f"DeepL request failed: {method} {url}: {e}")
            raise NetworkError(f"Could not reach DeepL server: {e}") from e

        logger.debug(f"DeepL response: {response.status_code} for {method} {url}")
        self._raise_for_status(response)

        try:
            return response.json()
        except ValueError as e:
            raise DeserializationError(status_code=response.status_code) from e

    def _raise_for_status(self, response: httpx.Response) -> None:
        """Map a non-2xx response onto the matching error."""
        status_code = response.status_code
        if 200 <= status_code < 300:
            return

        server_error = self._read_error_message(response)
        message = server_error.message if server_error else ""
        detail = server_error.detail if server_error else None
        logger.info(f"DeepL returned {status_code}: {message or response.reason_phrase}")

        error: DeepLError
        if status_code in (401, 403):
            error = AuthorizationError(status_code=status_code, detail=detail)
        elif status_code == HTTP_STATUS_QUOTA_EXCEEDED:
            error = QuotaExceededError(status_code=status_code, detail=detail)
        elif status_code == 429:
            error = TooManyRequestsError(
                retry_after=parse_retry_after(response.headers.get("Retry-After")),
                status_code=status_code,
                detail=detail,
            )
        elif status_code == 404:
            error = NotFoundError(status_code=status_code, detail=detail)
        elif status_code in (400, 413):
            error = BadRequestError(
                message or f"Bad request ({status_code})",
                status_code=status_code,
                detail=detail,
            )
        else:
            error = ServerError(
                message or f"Unexpected status code {status_code} {response.reason_phrase}",
                status_code=status_code,
                detail=detail,
            )
        raise error

    @staticmethod
    def _read_error_message(response: httpx.Response) -> ServerErrorMessage | None:
        """DeepL sends an error message in the body when it can."""
        try:
            return ServerErrorMessage.model_validate(response.json())
        except (ValueError, ValidationError):
            return None
