"""Low-level HTTP transport layer wrapping httpx."""

from __future__ import annotations

from typing import Any

import httpx

from tempodica.exceptions import (
    DecodeError,
    NetworkError,
    NetworkTimeoutError,
    ServerError,
)

DEFAULT_BASE_URL = "https://api.open-meteo.com/v1"
DEFAULT_TIMEOUT = 10.0


def _handle_response(response: httpx.Response) -> dict[str, Any]:
    """Validate response status and return the parsed JSON object."""
    if response.status_code >= 400:
        raise ServerError(
            status_code=response.status_code,
            message=response.text,
        )
    try:
        payload = response.json()
    except ValueError as exc:
        raise DecodeError(f"Response body is not valid JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise DecodeError(f"Expected a JSON object, got {type(payload).__name__}")
    return payload


class SyncTransport:
    """Synchronous HTTP transport using httpx.Client."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._client = httpx.Client(
            base_url=base_url,
            timeout=timeout,
            headers={"Accept": "application/json"},
        )

    def get(self, endpoint: str, params: list[tuple[str, str]]) -> dict[str, Any]:
        """Perform a GET request and return parsed JSON."""
        try:
            response = self._client.get(endpoint, params=params)
        except httpx.TimeoutException as exc:
            raise NetworkTimeoutError(str(exc)) from exc
        except httpx.TransportError as exc:
            raise NetworkError(str(exc)) from exc
        return _handle_response(response)

    def close(self) -> None:
        self._client.close()


class AsyncTransport:
    """Asynchronous HTTP transport using httpx.AsyncClient."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            headers={"Accept": "application/json"},
        )

    async def get(self, endpoint: str, params: list[tuple[str, str]]) -> dict[str, Any]:
        """Perform an async GET request and return parsed JSON."""
        try:
            response = await self._client.get(endpoint, params=params)
        except httpx.TimeoutException as exc:
            raise NetworkTimeoutError(str(exc)) from exc
        except httpx.TransportError as exc:
            raise NetworkError(str(exc)) from exc
        return _handle_response(response)

    async def close(self) -> None:
        await self._client.aclose()
