"""
numinv - Exceptions

This module contains all custom exceptions raised by the client.
"""

from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Optional, Dict, Any


class InventoryError(Exception):
    """
    Base exception for all numinv errors.

    Attributes:
        message: Human-readable error message
        code: Error code if available
        details: Additional error details
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message='{self.message}', code='{self.code}')"


class NotConnectedError(InventoryError):
    """
    Raised when an operation needs a live session and there is none.

    Call ``InventoryClient.connect()`` (or use the client as a context
    manager) before issuing requests.
    """

    def __init__(self, message: str = "Not connected to an inventory server") -> None:
        super().__init__(message, code="NOT_CONNECTED")


class ValidationError(InventoryError):
    """
    Raised when arguments fail client-side validation.

    Attributes:
        field_errors: Dictionary mapping field names to error messages
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field_errors: Optional[Dict[str, str]] = None,
        code: str = "VALIDATION_ERROR",
    ) -> None:
        super().__init__(message, code=code, details=field_errors)
        self.field_errors = field_errors or {}

    def __str__(self) -> str:
        base = super().__str__()
        if self.field_errors:
            errors = ", ".join(f"{k}: {v}" for k, v in self.field_errors.items())
            return f"{base} ({errors})"
        return base


class InvalidExpiryConfigurationError(ValidationError):
    """
    Raised when a reservation is requested with both or neither of
    ``never_expires`` and ``expires_on``.
    """

    def __init__(
        self,
        message: str = "Exactly one of never_expires or expires_on must be set",
    ) -> None:
        super().__init__(message, code="INVALID_EXPIRY")


class TransportError(InventoryError):
    """
    Raised when the server or the network fails a request.

    Every subclass except ConflictError is surfaced to the caller
    without retry.

    Attributes:
        status_code: HTTP status code, None for network failures
    """

    def __init__(
        self,
        message: str = "Request failed",
        code: str = "TRANSPORT_ERROR",
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, code=code, details=details)
        self.status_code = status_code


class AuthenticationError(TransportError):
    """
    Raised when authentication fails.

    This can occur when:
    - No credential was configured
    - The API key or token is invalid or expired
    - The account lacks permission on the target system
    """

    def __init__(
        self,
        message: str = "Authentication failed",
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(message, code="AUTHENTICATION_ERROR", status_code=status_code)


class NotFoundError(TransportError):
    """
    Raised when a requested resource is not found.

    Attributes:
        resource_type: Type of resource that wasn't found
        resource_id: ID of the resource that wasn't found
    """

    def __init__(
        self,
        message: str = "Resource not found",
        resource_type: Optional[str] = None,
        resource_id: Optional[str] = None,
    ) -> None:
        super().__init__(message, code="NOT_FOUND", status_code=404)
        self.resource_type = resource_type
        self.resource_id = resource_id

    def __str__(self) -> str:
        if self.resource_type and self.resource_id:
            return f"{self.resource_type} '{self.resource_id}' not found"
        return super().__str__()


class ConflictError(TransportError):
    """
    Raised when the server reports that the resource already exists.

    For reservations this means another actor reserved the number first.
    It is the only failure the reservation engine retries.
    """

    def __init__(
        self,
        message: str = "Resource already exists",
        status_code: Optional[int] = 409,
    ) -> None:
        super().__init__(message, code="CONFLICT", status_code=status_code)


def _parse_retry_after(value: Optional[str]) -> Optional[int]:
    """Read a Retry-After header given as seconds or as an HTTP date."""
    if not value:
        return None
    try:
        return max(0, int(value))
    except ValueError:
        pass
    try:
        when = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return None
    if when.tzinfo is None:
        when = when.replace(tzinfo=timezone.utc)
    return max(0, int((when - datetime.now(timezone.utc)).total_seconds()))


class RateLimitError(TransportError):
    """
    Raised when the server rate limit is exceeded.

    Attributes:
        retry_after: Number of seconds to wait before retrying
    """

    def __init__(
        self,
        message: str = "Rate limit exceeded",
        retry_after: Optional[str] = None,
    ) -> None:
        super().__init__(message, code="RATE_LIMIT_ERROR", status_code=429)
        self.retry_after = _parse_retry_after(retry_after)

    def __str__(self) -> str:
        base = super().__str__()
        if self.retry_after:
            return f"{base}. Retry after {self.retry_after} seconds."
        return base


class ServerError(TransportError):
    """
    Raised when the inventory server fails with a 5xx status.

    Attributes:
        request_id: Request ID for debugging
    """

    def __init__(
        self,
        message: str = "Server error",
        status_code: Optional[int] = 500,
        request_id: Optional[str] = None,
    ) -> None:
        super().__init__(message, code="SERVER_ERROR", status_code=status_code)
        self.request_id = request_id

    def __str__(self) -> str:
        base = super().__str__()
        if self.request_id:
            return f"{base} (Request ID: {self.request_id})"
        return base


class TimeoutError(TransportError):
    """
    Raised when a request times out.

    Attributes:
        timeout_seconds: The configured timeout
    """

    def __init__(
        self,
        message: str = "Request timed out",
        timeout_seconds: Optional[float] = None,
    ) -> None:
        super().__init__(message, code="TIMEOUT")
        self.timeout_seconds = timeout_seconds

    def __str__(self) -> str:
        base = super().__str__()
        if self.timeout_seconds:
            return f"{base} after {self.timeout_seconds}s"
        return base


class ReservationError(InventoryError):
    """
    Base class for reservation-acquisition failures.

    The caller may retry the whole operation at a higher level,
    for example against a different range.

    Attributes:
        number: The last candidate number tried
        attempts: Number of create attempts made
    """

    def __init__(
        self,
        message: str,
        code: str = "RESERVATION_ERROR",
        number: Optional[str] = None,
        attempts: int = 0,
    ) -> None:
        super().__init__(message, code=code, details={"number": number, "attempts": attempts})
        self.number = number
        self.attempts = attempts


class ExhaustedAlternativesError(ReservationError):
    """
    Raised when a conflict re-query returns too few candidates to retry.
    """

    def __init__(
        self,
        message: str = "No alternative numbers left in range",
        number: Optional[str] = None,
        attempts: int = 0,
        range_name: Optional[str] = None,
    ) -> None:
        super().__init__(message, code="EXHAUSTED_ALTERNATIVES", number=number, attempts=attempts)
        self.range_name = range_name


class ReservationAttemptsExhaustedError(ReservationError):
    """
    Raised when every allowed attempt ended in a conflict.
    """

    def __init__(
        self,
        message: str = "Reservation attempts exhausted",
        number: Optional[str] = None,
        attempts: int = 0,
    ) -> None:
        super().__init__(message, code="ATTEMPTS_EXHAUSTED", number=number, attempts=attempts)


class ReservationCancelledError(ReservationError):
    """
    Raised when the caller cancels a reservation or its deadline passes.

    Cancellation is only observed between attempts, never mid-request.
    """

    def __init__(
        self,
        message: str = "Reservation cancelled",
        number: Optional[str] = None,
        attempts: int = 0,
    ) -> None:
        super().__init__(message, code="CANCELLED", number=number, attempts=attempts)
