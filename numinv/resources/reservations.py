"""
numinv - Reservations Resource

This module provides the reservation lifecycle: list, get, create,
delete and conflict-retrying acquisition.
"""

from __future__ import annotations

import threading
from datetime import date
from typing import TYPE_CHECKING, Optional, Dict, Any, List, Union

from numinv.resources.base import BaseResource
from numinv.models import Expiry, NumberHandle, Reservation, SystemType
from numinv.config import Endpoints, Limits
from numinv.exceptions import ExhaustedAlternativesError
from numinv.reservation import ReservationEngine, check_attempts

if TYPE_CHECKING:
    from numinv.client import InventoryClient


class ReservationsResource(BaseResource):
    """
    Resource for managing reservations.

    A reservation withholds a number from general allocation until it is
    deleted or expires. Paths and the number field depend on the system
    type (see ``SystemType.capability``).

    Example:
        >>> reservation = client.reservations.reserve(
        ...     system_id=3,
        ...     system_type=SystemType.SFB,
        ...     number="tel:+13205551011",
        ...     range_name="Main",
        ...     reason="Lease",
        ...     expires_on=date(2027, 1, 31),
        ... )
        >>> client.reservations.delete(3, SystemType.SFB, reservation.number)
    """

    def __init__(self, client: "InventoryClient") -> None:
        super().__init__(client)
        self._engine = ReservationEngine(client)

    def _collection_path(self, system_id: int, system_type: SystemType) -> str:
        return Endpoints.RESERVATIONS.format(
            system_id=self._segment(system_id),
            resource=system_type.capability.resource,
        )

    def _item_path(self, system_id: int, system_type: SystemType, number: str) -> str:
        return Endpoints.RESERVATION.format(
            system_id=self._segment(system_id),
            resource=system_type.capability.resource,
            number=self._segment(number),
        )

    def list(
        self,
        system_id: int,
        system_type: Union[SystemType, str],
    ) -> List[Reservation]:
        """
        List the reservations of a system.

        Args:
            system_id: The system's numeric identifier
            system_type: Platform of the system

        Returns:
            List of Reservation objects
        """
        system_type = SystemType.parse(system_type)
        response = self._get(self._collection_path(system_id, system_type))
        return [
            Reservation.from_dict(system_id, system_type, item)
            for item in self._items(response)
        ]

    def get(
        self,
        system_id: int,
        system_type: Union[SystemType, str],
        number: str,
    ) -> Reservation:
        """
        Fetch a reservation by its number.

        Args:
            system_id: The system's numeric identifier
            system_type: Platform of the system
            number: The reserved number in system-native form

        Returns:
            Reservation object

        Raises:
            NotFoundError: If no reservation exists for the number
        """
        system_type = SystemType.parse(system_type)
        response = self._get(self._item_path(system_id, system_type, number))
        return Reservation.from_dict(system_id, system_type, response)

    def create(
        self,
        handle: NumberHandle,
        reason: str,
        expiry: Expiry,
        description: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Make a single reservation attempt.

        No retry happens here; a taken number raises ConflictError.
        Use ``reserve`` for conflict handling.

        Args:
            handle: Number to reserve
            reason: Reason stored with the reservation
            expiry: Expiration policy
            description: Optional free-text description

        Returns:
            Raw server response
        """
        data: Dict[str, Any] = {
            handle.system_type.capability.number_field: handle.raw_number,
            "Reason": reason,
        }
        if description:
            data["Description"] = description
        data.update(expiry.to_payload())

        return self._post(self._collection_path(handle.system_id, handle.system_type), json=data)

    def delete(
        self,
        system_id: int,
        system_type: Union[SystemType, str],
        number: str,
    ) -> None:
        """
        Delete a reservation, returning the number to the pool.

        Args:
            system_id: The system's numeric identifier
            system_type: Platform of the system
            number: The reserved number in system-native form
        """
        system_type = SystemType.parse(system_type)
        self._delete(self._item_path(system_id, system_type, number))

    def reserve(
        self,
        system_id: int,
        system_type: Union[SystemType, str],
        number: str,
        range_name: str,
        reason: str,
        description: Optional[str] = None,
        never_expires: bool = False,
        expires_on: Optional[date] = None,
        max_attempts: int = Limits.DEFAULT_RESERVE_ATTEMPTS,
        deadline: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> Reservation:
        """
        Reserve ``number``, retrying with numbers from ``range_name`` on
        conflict. See ``ReservationEngine.reserve`` for the protocol.

        Returns:
            The reservation as stored by the server
        """
        handle = NumberHandle(system_id, SystemType.parse(system_type), number)
        return self._engine.reserve(
            handle,
            range_name,
            reason,
            description=description,
            never_expires=never_expires,
            expires_on=expires_on,
            max_attempts=max_attempts,
            deadline=deadline,
            cancel_event=cancel_event,
        )

    def reserve_next_available(
        self,
        system_id: int,
        system_type: Union[SystemType, str],
        range_name: str,
        reason: str,
        description: Optional[str] = None,
        never_expires: bool = False,
        expires_on: Optional[date] = None,
        max_attempts: int = Limits.DEFAULT_RESERVE_ATTEMPTS,
        deadline: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> Reservation:
        """
        Find the first available number in a range and reserve it.

        Example:
            >>> reservation = client.reservations.reserve_next_available(
            ...     system_id=3,
            ...     system_type="Cisco",
            ...     range_name="Main",
            ...     reason="New hire",
            ...     never_expires=True,
            ... )
            >>> print(reservation.handle.canonical)

        Raises:
            ExhaustedAlternativesError: If the range has no available number
        """
        system_type = SystemType.parse(system_type)
        Expiry.from_options(never_expires, expires_on)
        check_attempts(max_attempts)
        self._client.require_connection()

        candidates = self._client.available.query(system_id, system_type, range_name, count=1)
        if not candidates:
            raise ExhaustedAlternativesError(
                f"Range '{range_name}' has no available numbers",
                range_name=range_name,
            )

        return self._engine.reserve(
            candidates[0].handle,
            range_name,
            reason,
            description=description,
            never_expires=never_expires,
            expires_on=expires_on,
            max_attempts=max_attempts,
            deadline=deadline,
            cancel_event=cancel_event,
        )
