"""
numinv - Configuration

This module contains configuration classes and defaults for the client.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class ClientConfig:
    """
    Configuration for the inventory client.

    Attributes:
        base_url: Base URL of the inventory server
        timeout: Request timeout in seconds
        max_retries: Connection-level retries handed to the HTTP transport
        verify_ssl: Verify the server's TLS certificate
        match_conflict_message: Also treat error messages containing
            "already exists" as conflicts (servers without error codes)
        debug: Enable debug logging
    """
    base_url: str = "https://localhost"
    timeout: float = 30.0
    max_retries: int = 3
    verify_ssl: bool = True
    match_conflict_message: bool = False
    debug: bool = False


# Default configuration
DEFAULT_CONFIG = ClientConfig()


# API version
API_VERSION = "v1"

# Environment variables
ENV_BASE_URL = "NUMINV_BASE_URL"
ENV_API_KEY = "NUMINV_API_KEY"
ENV_USERNAME = "NUMINV_USERNAME"
ENV_PASSWORD = "NUMINV_PASSWORD"


# Endpoints
class Endpoints:
    """API endpoint paths."""

    # Authentication
    AUTH_TOKEN = "/api/v1/auth/token"

    # Systems
    SYSTEMS = "/api/v1/systems"
    SYSTEM = "/api/v1/systems/{system_id}"

    # Ranges
    RANGES = "/api/v1/systems/{system_id}/ranges"
    RANGE = "/api/v1/systems/{system_id}/ranges/{range_name}"
    RANGE_AVAILABLE = "/api/v1/systems/{system_id}/ranges/{range_name}/available"

    # Reservations, {resource} comes from the system type's capability
    RESERVATIONS = "/api/v1/systems/{system_id}/{resource}"
    RESERVATION = "/api/v1/systems/{system_id}/{resource}/{number}"


# Request limits
class Limits:
    """Client-side limits and constraints."""

    # Reservation engine
    MIN_RESERVE_ATTEMPTS = 1
    MAX_RESERVE_ATTEMPTS = 20
    DEFAULT_RESERVE_ATTEMPTS = 3

    # Availability queries
    MAX_AVAILABLE_COUNT = 100
    DEFAULT_AVAILABLE_COUNT = 10


# Server error codes that mean "the number is already reserved"
CONFLICT_CODES = frozenset({
    "AlreadyExists",
    "already_exists",
    "Duplicate",
    "CONFLICT",
})

CONFLICT_MESSAGE = "already exists"
