"""
numinv - Reservation Engine

Acquires a reservation for a number from a shared pool.

Numbers are handed out by availability queries, but nothing stops another
client from reserving the same number between the query and the create.
The server offers no way to claim a number ahead of the write, so the
engine writes optimistically and, when the server answers with a
conflict, draws a replacement candidate from the range and tries again.

Attempt ``n`` that conflicts re-queries the range for ``n + 1``
candidates and continues with the one at index ``n``. Each retry skips
further into the list, which lowers the odds of hitting the same taken
number on a stable-ordered pool without guaranteeing a fresh one.
"""

from __future__ import annotations

import logging
import threading
import time
from datetime import date
from typing import TYPE_CHECKING, Optional

from numinv.config import Limits
from numinv.exceptions import (
    ConflictError,
    ExhaustedAlternativesError,
    ReservationAttemptsExhaustedError,
    ReservationCancelledError,
    ValidationError,
)
from numinv.models import Expiry, NumberHandle, Reservation

if TYPE_CHECKING:
    from numinv.client import InventoryClient

logger = logging.getLogger("numinv.reservation")


def check_attempts(max_attempts: int) -> None:
    """Raise ValidationError unless max_attempts is within limits."""
    if not Limits.MIN_RESERVE_ATTEMPTS <= max_attempts <= Limits.MAX_RESERVE_ATTEMPTS:
        raise ValidationError(
            "Invalid attempt count",
            field_errors={
                "max_attempts": (
                    f"must be between {Limits.MIN_RESERVE_ATTEMPTS} "
                    f"and {Limits.MAX_RESERVE_ATTEMPTS}"
                ),
            },
        )


class ReservationEngine:
    """
    Conflict-retrying reservation acquisition.

    The engine is sequential: every attempt waits for the previous write
    to complete before deciding whether to retry.

    Args:
        client: Connected InventoryClient used for every request

    Example:
        >>> engine = ReservationEngine(client)
        >>> reservation = engine.reserve(
        ...     NumberHandle(3, SystemType.CISCO, "5551011"),
        ...     fallback_range="Main",
        ...     reason="New hire",
        ...     never_expires=True,
        ... )
    """

    def __init__(self, client: "InventoryClient") -> None:
        self._client = client

    def reserve(
        self,
        candidate: NumberHandle,
        fallback_range: str,
        reason: str,
        description: Optional[str] = None,
        never_expires: bool = False,
        expires_on: Optional[date] = None,
        max_attempts: int = Limits.DEFAULT_RESERVE_ATTEMPTS,
        deadline: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> Reservation:
        """
        Reserve ``candidate``, falling back to other numbers on conflict.

        Args:
            candidate: First number to try
            fallback_range: Range to draw replacements from on conflict
            reason: Reason stored with the reservation
            description: Optional free-text description
            never_expires: Keep the reservation until deleted
            expires_on: Date the reservation lapses
            max_attempts: Create attempts allowed, 1 to 20
            deadline: Seconds the whole call may take, checked between attempts
            cancel_event: Set it to stop before the next attempt

        Returns:
            The reservation as stored by the server

        Raises:
            NotConnectedError: If the client session is not open
            InvalidExpiryConfigurationError: If both or neither expiry
                options are set
            ValidationError: If max_attempts is out of bounds
            ExhaustedAlternativesError: If the range ran out of candidates
            ReservationAttemptsExhaustedError: If every attempt conflicted
            ReservationCancelledError: If cancelled or past the deadline
            TransportError: For any non-conflict failure, never retried
        """
        expiry = Expiry.from_options(never_expires, expires_on)
        check_attempts(max_attempts)
        self._client.require_connection()

        expires_at = time.monotonic() + deadline if deadline is not None else None
        current = candidate

        for attempt in range(1, max_attempts + 1):
            self._check_cancelled(current, attempt - 1, expires_at, cancel_event)

            logger.debug(
                f"Reservation attempt {attempt}/{max_attempts} for {current.raw_number} "
                f"on system {current.system_id}"
            )
            try:
                self._client.reservations.create(current, reason, expiry, description=description)
            except ConflictError:
                logger.info(f"{current.raw_number} was reserved by someone else (attempt {attempt})")
                if attempt == max_attempts:
                    break
                current = self._next_candidate(current, fallback_range, attempt)
                continue

            logger.info(f"Reserved {current.raw_number} on system {current.system_id}")
            return self._client.reservations.get(
                current.system_id,
                current.system_type,
                current.raw_number,
            )

        raise ReservationAttemptsExhaustedError(
            f"Could not reserve a number from '{fallback_range}' "
            f"after {max_attempts} attempts",
            number=current.raw_number,
            attempts=max_attempts,
        )

    def _next_candidate(
        self,
        current: NumberHandle,
        fallback_range: str,
        attempt: int,
    ) -> NumberHandle:
        """Re-query the range and pick the candidate at index ``attempt``."""
        candidates = self._client.available.query(
            current.system_id,
            current.system_type,
            fallback_range,
            count=attempt + 1,
        )
        if len(candidates) <= attempt:
            raise ExhaustedAlternativesError(
                f"Range '{fallback_range}' returned {len(candidates)} candidates, "
                f"{attempt + 1} needed",
                number=current.raw_number,
                attempts=attempt,
                range_name=fallback_range,
            )
        return candidates[attempt].handle

    @staticmethod
    def _check_cancelled(
        current: NumberHandle,
        attempts: int,
        expires_at: Optional[float],
        cancel_event: Optional[threading.Event],
    ) -> None:
        if cancel_event is not None and cancel_event.is_set():
            raise ReservationCancelledError(
                "Reservation cancelled by caller",
                number=current.raw_number,
                attempts=attempts,
            )
        if expires_at is not None and time.monotonic() >= expires_at:
            raise ReservationCancelledError(
                "Reservation deadline exceeded",
                number=current.raw_number,
                attempts=attempts,
            )
