"""Exceptions for the cuentica library."""

from __future__ import annotations

from datetime import datetime

import httpx


class CuenticaConfigError(ValueError):
    """Raised when the client cannot be configured (no API token)."""

    pass


class CuenticaAPIError(httpx.HTTPStatusError):
    """Raised when the Cuéntica API answers with a non-2xx status.

    Extends httpx.HTTPStatusError so users can catch both CuenticaAPIError
    and httpx.HTTPStatusError to handle API errors.
    """

    def __init__(
        self,
        message: str,
        status_code: int,
        response_text: str = "",
        request: httpx.Request | None = None,
        response: httpx.Response | None = None,
    ) -> None:
        """Initialize CuenticaAPIError.

        Args:
            message: Error message
            status_code: HTTP status code from the API response
            response_text: Raw response body
            request: The request that caused the error
            response: The response from the API
        """
        if request is not None and response is not None:
            super().__init__(message, request=request, response=response)
        else:
            Exception.__init__(self, message)

        self.message = message
        self.status_code = status_code
        self.response_text = response_text

    def __str__(self) -> str:
        """Return string representation of the error."""
        return self.message


class CuenticaRateLimitError(CuenticaAPIError):
    """Raised when the rate limit is exceeded (429).

    Cuéntica allows 600 requests every 5 minutes and 7200 per day. The
    client never retries; wait until ``reset_time`` and try again.
    """

    def __init__(
        self,
        reset_time: datetime,
        request: httpx.Request | None = None,
        response: httpx.Response | None = None,
    ) -> None:
        """Initialize CuenticaRateLimitError.

        Args:
            reset_time: Instant (UTC) at which the rate limit window clears
            request: The request that caused the error
            response: The response from the API
        """
        super().__init__(
            f"Rate limit exceeded. Reset at {reset_time.isoformat()}",
            429,
            request=request,
            response=response,
        )
        self.reset_time = reset_time
