"""API client factory for the CLI."""

import sys
from typing import Any, Dict

from numinv import InventoryClient

from .output import print_error


def get_client(settings: Dict[str, Any]) -> InventoryClient:
    """
    Create an (unconnected) InventoryClient from the CLI context settings.

    Use the result as a context manager to open the session. Exits with
    status 1 when no credential is configured.
    """
    api_key = settings.get("api_key")
    username = settings.get("username")
    password = settings.get("password")

    if not api_key and not (username and password):
        print_error("Not logged in. Run 'numinv login' first.")
        sys.exit(1)

    return InventoryClient(
        base_url=settings["base_url"],
        api_key=api_key,
        username=username,
        password=password,
        verify_ssl=settings.get("verify_ssl", True),
        match_conflict_message=settings.get("match_conflict_message", False),
        debug=settings.get("debug", False),
    )
