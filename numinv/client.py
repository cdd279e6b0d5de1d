"""
numinv - Main Client

This module provides the InventoryClient class, the session object every
resource and the reservation engine issue their requests through.
"""

from __future__ import annotations

import os
import logging
from typing import Optional, Dict, Any, Union, List

import httpx

from numinv import __version__
from numinv.config import (
    ClientConfig,
    DEFAULT_CONFIG,
    Endpoints,
    CONFLICT_CODES,
    CONFLICT_MESSAGE,
    ENV_BASE_URL,
    ENV_API_KEY,
    ENV_USERNAME,
    ENV_PASSWORD,
)
from numinv.exceptions import (
    AuthenticationError,
    ConflictError,
    NotConnectedError,
    NotFoundError,
    RateLimitError,
    ServerError,
    TimeoutError,
    TransportError,
)
from numinv.resources.systems import SystemsResource
from numinv.resources.ranges import RangesResource
from numinv.resources.available import AvailableResource
from numinv.resources.reservations import ReservationsResource

logger = logging.getLogger("numinv")

JSON = Union[Dict[str, Any], List[Any]]


class InventoryClient:
    """
    Client session for a telephone number inventory server.

    The client holds the base URL and credential of one server. Nothing is
    stored at module level, so several clients may talk to different
    servers side by side.

    Args:
        base_url: Server URL. Falls back to NUMINV_BASE_URL.
        api_key: Bearer API key. Falls back to NUMINV_API_KEY.
        username: Account name for the token exchange when no API key is
            given. Falls back to NUMINV_USERNAME.
        password: Account password. Falls back to NUMINV_PASSWORD.
        timeout: Request timeout in seconds. Defaults to 30.
        max_retries: Connection-level retries. Defaults to 3.
        verify_ssl: Verify TLS certificates. Defaults to True.
        match_conflict_message: Treat "already exists" error messages as
            conflicts for servers that send no error code.
        debug: Enable debug logging. Defaults to False.
        transport: Optional httpx transport, mainly for tests.

    Example:
        >>> with InventoryClient(base_url="https://inventory.example.com",
        ...                      api_key="...") as client:
        ...     reservation = client.reservations.reserve_next_available(
        ...         system_id=3,
        ...         system_type=SystemType.CISCO,
        ...         range_name="Main",
        ...         reason="New hire",
        ...         never_expires=True,
        ...     )

    Attributes:
        systems: Telephony systems known to the server
        ranges: Number ranges of a system
        available: Available-number discovery
        reservations: Reservation lifecycle and acquisition
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        username: Optional[str] = None,
        password: Optional[str] = None,
        timeout: float = 30.0,
        max_retries: int = 3,
        verify_ssl: bool = True,
        match_conflict_message: bool = False,
        debug: bool = False,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._api_key = api_key or os.environ.get(ENV_API_KEY)
        self._username = username or os.environ.get(ENV_USERNAME)
        self._password = password or os.environ.get(ENV_PASSWORD)
        self._token: Optional[str] = None

        self._config = ClientConfig(
            base_url=(base_url or os.environ.get(ENV_BASE_URL, DEFAULT_CONFIG.base_url)).rstrip("/"),
            timeout=timeout,
            max_retries=max_retries,
            verify_ssl=verify_ssl,
            match_conflict_message=match_conflict_message,
            debug=debug,
        )

        if debug:
            logging.basicConfig(level=logging.DEBUG)
            logger.setLevel(logging.DEBUG)

        self._transport = transport
        self._http_client: Optional[httpx.Client] = None

        self._init_resources()

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def connected(self) -> bool:
        return self._http_client is not None

    def _init_resources(self) -> None:
        """Initialize all API resources."""
        self.systems = SystemsResource(self)
        self.ranges = RangesResource(self)
        self.available = AvailableResource(self)
        self.reservations = ReservationsResource(self)

    def connect(self) -> "InventoryClient":
        """
        Open the session.

        Uses the API key when one is configured, otherwise exchanges the
        username and password for a bearer token.

        Returns:
            The connected client

        Raises:
            AuthenticationError: If no credential is available or the
                token exchange is rejected
        """
        if self.connected:
            return self

        if not self._api_key and not (self._username and self._password):
            raise AuthenticationError(
                "A credential is required. Provide an API key or a username and "
                f"password, or set {ENV_API_KEY} / {ENV_USERNAME} and {ENV_PASSWORD}."
            )

        self._http_client = self._create_http_client()

        if self._api_key:
            self._token = self._api_key
        else:
            try:
                response = self.request(
                    "POST",
                    Endpoints.AUTH_TOKEN,
                    json={"Username": self._username, "Password": self._password},
                )
            except TransportError:
                self.close()
                raise
            self._token = response.get("access_token")
            if not self._token:
                self.close()
                raise AuthenticationError("Token exchange returned no access token")

        self._http_client.headers["Authorization"] = f"Bearer {self._token}"
        logger.debug(f"Connected to inventory server at {self._config.base_url}")
        return self

    def _create_http_client(self) -> httpx.Client:
        """Create and configure the HTTP client."""
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": f"numinv-python/{__version__}",
        }

        transport = self._transport or httpx.HTTPTransport(
            retries=self._config.max_retries,
            verify=self._config.verify_ssl,
        )

        return httpx.Client(
            base_url=self._config.base_url,
            headers=headers,
            timeout=httpx.Timeout(self._config.timeout),
            transport=transport,
            follow_redirects=True,
        )

    def require_connection(self) -> None:
        """Raise NotConnectedError unless the session is open."""
        if not self.connected:
            raise NotConnectedError(
                "Not connected. Call connect() or use the client as a context manager."
            )

    def request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> JSON:
        """
        Make an HTTP request to the inventory server.

        Args:
            method: HTTP method (GET, POST, DELETE, ...)
            path: API endpoint path
            params: Query parameters
            json: JSON body data

        Returns:
            Decoded JSON response, {} for empty responses

        Raises:
            NotConnectedError: If the session is not open
            AuthenticationError: If authentication fails
            NotFoundError: If the resource is not found
            ConflictError: If the resource already exists
            RateLimitError: If the rate limit is exceeded
            ServerError: If the server fails
            TimeoutError: If the request times out
            TransportError: For every other failure
        """
        self.require_connection()

        logger.debug(f"Making {method} request to {path}")
        logger.debug(f"Params: {params}")
        logger.debug(f"JSON: {json}")

        try:
            response = self._http_client.request(
                method=method,
                url=path,
                params=params,
                json=json,
            )
        except httpx.TimeoutException as e:
            raise TimeoutError(f"Request timed out: {e}", timeout_seconds=self._config.timeout)
        except httpx.RequestError as e:
            raise TransportError(f"Request failed: {e}")

        return self._handle_response(response)

    def _handle_response(self, response: httpx.Response) -> JSON:
        """Handle API response and raise appropriate exceptions."""
        logger.debug(f"Response status: {response.status_code}")

        if response.status_code in (200, 201, 202):
            if not response.content:
                return {}
            if response.headers.get("content-type", "").startswith("application/json"):
                return response.json()
            return {"data": response.text}

        if response.status_code == 204:
            return {}

        error_code, error_message = self._parse_error(response)

        if self._is_conflict(response.status_code, error_code, error_message):
            raise ConflictError(error_message, status_code=response.status_code)

        if response.status_code == 401:
            raise AuthenticationError(error_message, status_code=401)
        elif response.status_code == 403:
            raise AuthenticationError(f"Forbidden: {error_message}", status_code=403)
        elif response.status_code == 404:
            raise NotFoundError(error_message)
        elif response.status_code == 429:
            retry_after = response.headers.get("Retry-After")
            raise RateLimitError(error_message, retry_after=retry_after)
        elif response.status_code >= 500:
            raise ServerError(
                error_message,
                status_code=response.status_code,
                request_id=response.headers.get("X-Request-ID"),
            )
        else:
            raise TransportError(
                f"HTTP {response.status_code}: {error_message}",
                status_code=response.status_code,
                details={"error_code": error_code} if error_code else None,
            )

    @staticmethod
    def _parse_error(response: httpx.Response):
        """Extract (code, message) from an error body."""
        try:
            error_data = response.json()
        except ValueError:
            return None, response.text or f"HTTP {response.status_code}"

        if not isinstance(error_data, dict):
            return None, str(error_data)

        error = error_data.get("error")
        if isinstance(error, dict):
            error_data = error

        code = error_data.get("code") or error_data.get("Code")
        message = (
            error_data.get("detail")
            or error_data.get("message")
            or error_data.get("Message")
            or str(error_data)
        )
        return code, message

    def _is_conflict(
        self,
        status_code: int,
        error_code: Optional[str],
        error_message: str,
    ) -> bool:
        if status_code == 409:
            return True
        if isinstance(error_code, str) and error_code in CONFLICT_CODES:
            return True
        if self._config.match_conflict_message and status_code < 500:
            return CONFLICT_MESSAGE in error_message.lower()
        return False

    def close(self) -> None:
        """Close the HTTP client and release resources."""
        if self._http_client is not None:
            self._http_client.close()
            self._http_client = None
            self._token = None
            logger.debug("InventoryClient closed")

    def __enter__(self) -> "InventoryClient":
        """Context manager entry, connects the session."""
        return self.connect()

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.close()

    def __repr__(self) -> str:
        return f"InventoryClient(base_url='{self._config.base_url}', connected={self.connected})"
