"""
numinv

A Python client for telephone number inventory servers. Looks up systems
and number ranges, discovers available numbers and manages reservations,
including conflict-retrying acquisition of a number from a shared range.

Example:
    >>> from numinv import InventoryClient, SystemType
    >>> with InventoryClient(base_url="https://inventory.example.com",
    ...                      api_key="your-api-key") as client:
    ...     reservation = client.reservations.reserve_next_available(
    ...         system_id=3,
    ...         system_type=SystemType.CISCO,
    ...         range_name="Main",
    ...         reason="New hire",
    ...         never_expires=True,
    ...     )
"""

__version__ = "1.0.0"
__license__ = "MIT"

from numinv.client import InventoryClient
from numinv.models import (
    SystemType,
    SystemCapability,
    SYSTEM_CAPABILITIES,
    NumberHandle,
    AvailabilityCandidate,
    Expiry,
    Reservation,
    InventorySystem,
    NumberRange,
)
from numinv.numbers import (
    NumberDiagnostic,
    NormalizedNumber,
    normalize_number,
    parse_number,
)
from numinv.reservation import ReservationEngine
from numinv.exceptions import (
    InventoryError,
    NotConnectedError,
    ValidationError,
    InvalidExpiryConfigurationError,
    TransportError,
    AuthenticationError,
    NotFoundError,
    ConflictError,
    RateLimitError,
    ServerError,
    TimeoutError,
    ReservationError,
    ExhaustedAlternativesError,
    ReservationAttemptsExhaustedError,
    ReservationCancelledError,
)

__all__ = [
    # Main client
    "InventoryClient",
    "ReservationEngine",

    # Models
    "SystemType",
    "SystemCapability",
    "SYSTEM_CAPABILITIES",
    "NumberHandle",
    "AvailabilityCandidate",
    "Expiry",
    "Reservation",
    "InventorySystem",
    "NumberRange",

    # Normalization
    "NumberDiagnostic",
    "NormalizedNumber",
    "normalize_number",
    "parse_number",

    # Exceptions
    "InventoryError",
    "NotConnectedError",
    "ValidationError",
    "InvalidExpiryConfigurationError",
    "TransportError",
    "AuthenticationError",
    "NotFoundError",
    "ConflictError",
    "RateLimitError",
    "ServerError",
    "TimeoutError",
    "ReservationError",
    "ExhaustedAlternativesError",
    "ReservationAttemptsExhaustedError",
    "ReservationCancelledError",
]
