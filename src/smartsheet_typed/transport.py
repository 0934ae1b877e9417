"""Transport layer for the Smartsheet REST API.

Defines the Transport protocol and implementations:
- SmartsheetTransport: Production transport using the Smartsheet API
- LocalFileTransport: Test transport reading from local golden files
"""

from __future__ import annotations

import json
import ssl
from abc import ABC, abstractmethod
from pathlib import Path  # noqa: TC003 - used at runtime
from typing import Any

import certifi
import httpx
from loguru import logger

from smartsheet_typed.exceptions import (
    APIError,
    AuthenticationError,
    ResourceNotFoundError,
    TransportError,
)

# API constants
API_BASE = "https://api.smartsheet.com/2.0/"
DEFAULT_TIMEOUT = 60

Params = dict[str, Any]
Body = dict[str, Any] | list[dict[str, Any]]


class Transport(ABC):
    """Abstract base class for Smartsheet API transport.

    Paths are relative to the API root (e.g. ``/sheets/123``). Each method
    returns the parsed JSON body or raises a TransportError.
    """

    @abstractmethod
    async def get(self, path: str, params: Params | None = None) -> Any:
        """Issue a GET request.

        Args:
            path: API path, e.g. "/sheets"
            params: Optional query parameters

        Returns:
            Parsed JSON body
        """
        ...

    @abstractmethod
    async def post(self, path: str, body: Body) -> Any:
        """Issue a POST request with a JSON body."""
        ...

    @abstractmethod
    async def put(self, path: str, body: Body, params: Params | None = None) -> Any:
        """Issue a PUT request with a JSON body."""
        ...

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections."""
        ...


class SmartsheetTransport(Transport):
    """Production transport that talks to the Smartsheet API.

    Handles authentication, SSL, and HTTP communication. Retries are not
    attempted; every non-2xx response raises.
    """

    def __init__(
        self,
        access_token: str,
        *,
        base_url: str = API_BASE,
        timeout: float = DEFAULT_TIMEOUT,
        http_transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the transport.

        Args:
            access_token: Smartsheet API access token
            base_url: API root URL
            timeout: Request timeout in seconds
            http_transport: Optional httpx transport (used by tests)
        """
        ssl_context = ssl.create_default_context(cafile=certifi.where())
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            verify=ssl_context,
            transport=http_transport,
            headers={
                "Authorization": f"Bearer {access_token}",
                "Content-Type": "application/json",
                "Accept": "application/json",
            },
        )

    async def get(self, path: str, params: Params | None = None) -> Any:
        return await self._request("GET", path, params=params)

    async def post(self, path: str, body: Body) -> Any:
        return await self._request("POST", path, json_body=body)

    async def put(self, path: str, body: Body, params: Params | None = None) -> Any:
        return await self._request("PUT", path, params=params, json_body=body)

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: Params | None = None,
        json_body: Body | None = None,
    ) -> Any:
        """Make an authenticated request and return the parsed body."""
        logger.debug(f"{method} {path}")
        try:
            response = await self._client.request(
                method, path, params=params, json=json_body
            )
        except httpx.RequestError as e:
            raise TransportError(f"Network error: {e}") from e

        _check_response(response)
        try:
            return response.json()
        except ValueError as e:
            raise TransportError(f"Invalid JSON response from {method} {path}") from e

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()


def _check_response(response: httpx.Response) -> None:
    """Raise the matching TransportError for a non-2xx response."""
    if response.is_success:
        return

    try:
        message = response.json().get("message", response.text)
    except Exception:
        message = response.text

    status = response.status_code
    if status == 401:
        raise AuthenticationError("Invalid or expired access token")
    if status == 403:
        raise AuthenticationError(f"Access denied: {message}")
    if status == 404:
        raise ResourceNotFoundError(f"Not found: {response.request.url.path}")
    raise APIError(status, message)


class LocalFileTransport(Transport):
    """Test transport that reads GET responses from local golden files.

    A request path maps to a JSON file below the golden directory:

        golden_dir/
            sheets.json              GET /sheets
            sheets/<sheet_id>.json   GET /sheets/<sheet_id>
            sheets/<sheet_id>/rows/<row_id>.json

    Query parameters are ignored. Writes are not supported.
    """

    def __init__(self, golden_dir: Path) -> None:
        """Initialize the transport.

        Args:
            golden_dir: Directory containing golden test files
        """
        self._golden_dir = golden_dir

    async def get(self, path: str, params: Params | None = None) -> Any:  # noqa: ARG002
        """Read a response from a local file."""
        file_path = self._golden_dir / f"{path.strip('/')}.json"
        if not file_path.exists():
            raise ResourceNotFoundError(f"Golden file not found: {file_path}")
        return json.loads(file_path.read_text())

    async def post(self, path: str, body: Body) -> Any:  # noqa: ARG002
        raise TransportError(f"LocalFileTransport is read-only (POST {path})")

    async def put(self, path: str, body: Body, params: Params | None = None) -> Any:  # noqa: ARG002
        raise TransportError(f"LocalFileTransport is read-only (PUT {path})")

    async def close(self) -> None:
        """No-op for local file transport."""
        pass
