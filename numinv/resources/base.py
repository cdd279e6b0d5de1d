"""
numinv - Base Resource

This module contains the base class for all API resources.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Dict, Any, List
from urllib.parse import quote

if TYPE_CHECKING:
    from numinv.client import InventoryClient


class BaseResource:
    """
    Base class for all API resources.

    Provides common functionality for making API requests
    and handling responses.
    """

    def __init__(self, client: "InventoryClient") -> None:
        """
        Initialize the resource.

        Args:
            client: The InventoryClient session
        """
        self._client = client

    def _get(
        self,
        path: str,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Make a GET request."""
        return self._client.request("GET", path, params=params)

    def _post(
        self,
        path: str,
        json: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Make a POST request."""
        return self._client.request("POST", path, json=json)

    def _delete(
        self,
        path: str,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Make a DELETE request."""
        return self._client.request("DELETE", path, params=params)

    @staticmethod
    def _segment(value: Any) -> str:
        """Percent-encode a value for use as one path segment."""
        return quote(str(value), safe="")

    @staticmethod
    def _items(response: Any) -> List[Dict[str, Any]]:
        """Unwrap a collection response, bare list or {"items": [...]}."""
        if isinstance(response, list):
            return response
        if isinstance(response, dict):
            for key in ("items", "Items", "value"):
                if isinstance(response.get(key), list):
                    return response[key]
        return []
