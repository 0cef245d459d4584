from __future__ import annotations

from typing import Any

import httpx


class JwtRevokeError(Exception):
    """Base client error."""


class NetworkError(JwtRevokeError):
    """Transport/network layer error."""


class RetriesExhaustedError(JwtRevokeError):
    """Last attempt ended on a retryable status (429 or 5xx)."""

    def __init__(self, status_code: int, response: httpx.Response | None = None):
        super().__init__(f"retries exhausted, last status: {status_code}")
        self.status_code = status_code
        self.response = response


class ApiError(JwtRevokeError):
    def __init__(self, status_code: int, message: str, data: Any = None):
        super().__init__(f"jwt-revoke error: {message} (status: {status_code})")
        self.status_code = status_code
        self.message = message
        self.data = data


class AuthError(ApiError):
    """Auth-related API error."""


class UnexpectedStatusError(JwtRevokeError):
    def __init__(self, status_code: int):
        super().__init__(f"unexpected status code: {status_code}")
        self.status_code = status_code


class DecodeError(JwtRevokeError):
    """Response body could not be decoded into the expected shape."""


class CancelledError(JwtRevokeError):
    """Caller cancelled the request before it completed."""
