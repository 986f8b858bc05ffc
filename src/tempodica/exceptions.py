"""Custom exceptions for the tempodica weather pipeline."""

from __future__ import annotations


class TempodicaError(Exception):
    """Base exception for all tempodica errors."""


class NetworkError(TempodicaError):
    """Raised when the forecast provider cannot be reached."""


class NetworkTimeoutError(NetworkError):
    """Raised when a request to the forecast provider times out."""


class ServerError(TempodicaError):
    """Raised when the forecast provider returns an error response (4xx/5xx)."""

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(f"HTTP {status_code}: {message}")


class DecodeError(TempodicaError):
    """Raised when a response body does not have the expected shape."""


class StorageError(TempodicaError):
    """Raised when the local measurement history cannot be read or written."""
