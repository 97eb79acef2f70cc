"""
Exceptions raised by the DeepL client.

Every failure surfaces as a subclass of ``DeepLError``. Nothing is retried
or swallowed; callers decide what to do with rate limits and quota errors.
"""

from __future__ import annotations


class DeepLError(Exception):
    """Base class for all DeepL client errors."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        detail: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.detail = detail

    def __str__(self) -> str:
        if self.detail:
            return f"{self.message}: {self.detail}"
        return self.message


class AuthorizationError(DeepLError):
    """The API key was refused by the server (401/403)."""

    def __init__(self, message: str = "Authorization failed, is your API key correct?", **kwargs):
        super().__init__(message, **kwargs)


class BadRequestError(DeepLError):
    """Malformed request, e.g. an unsupported language code or option."""
    pass


class QuotaExceededError(DeepLError):
    """The character limit of the billing period has been reached (456)."""

    def __init__(self, message: str = "Quota for this billing period has been exceeded", **kwargs):
        super().__init__(message, **kwargs)


class TooManyRequestsError(DeepLError):
    """
    Rate limited by the server (429).

    ``retry_after`` holds the server's ``Retry-After`` hint in seconds, if any.
    """

    def __init__(
        self,
        message: str = "Too many requests, DeepL servers are currently experiencing high load",
        retry_after: float | None = None,
        **kwargs,
    ):
        super().__init__(message, **kwargs)
        self.retry_after = retry_after


class NotFoundError(DeepLError):
    """The requested resource was not found (404)."""

    def __init__(self, message: str = "The requested resource was not found", **kwargs):
        super().__init__(message, **kwargs)


class ServerError(DeepLError):
    """The server failed to process the request (5xx or unexpected status)."""
    pass


class NetworkError(DeepLError):
    """The request never produced a response (connect error, timeout, ...)."""
    pass


class DeserializationError(DeepLError):
    """The response body did not have the expected shape."""

    def __init__(self, message: str = "An error occurred while deserializing the response data", **kwargs):
        super().__init__(message, **kwargs)
