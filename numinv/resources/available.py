"""
numinv - Available Numbers Resource

This module provides discovery of unreserved numbers within a range.
"""

from __future__ import annotations

from typing import List, Union

from numinv.resources.base import BaseResource
from numinv.models import AvailabilityCandidate, SystemType
from numinv.config import Endpoints, Limits
from numinv.exceptions import ValidationError


class AvailableResource(BaseResource):
    """
    Resource for available-number discovery.

    The order of the returned candidates is the server's and is kept
    as-is; the reservation engine picks fallback candidates by index.

    Example:
        >>> candidates = client.available.query(
        ...     system_id=3,
        ...     system_type=SystemType.CISCO,
        ...     range_name="Main",
        ...     count=5,
        ... )
        >>> print([c.canonical for c in candidates])
    """

    def query(
        self,
        system_id: int,
        system_type: Union[SystemType, str],
        range_name: str,
        count: int = Limits.DEFAULT_AVAILABLE_COUNT,
    ) -> List[AvailabilityCandidate]:
        """
        Fetch up to ``count`` available numbers from a range.

        Args:
            system_id: The system's numeric identifier
            system_type: Platform of the system
            range_name: Name of the range to draw from
            count: Number of candidates wanted

        Returns:
            Candidates in server order; may be shorter than ``count``
        """
        if not 1 <= count <= Limits.MAX_AVAILABLE_COUNT:
            raise ValidationError(
                "Invalid candidate count",
                field_errors={"count": f"must be between 1 and {Limits.MAX_AVAILABLE_COUNT}"},
            )

        system_type = SystemType.parse(system_type)
        path = Endpoints.RANGE_AVAILABLE.format(
            system_id=self._segment(system_id),
            range_name=self._segment(range_name),
        )
        response = self._get(path, params={"count": count, "systemType": system_type.value})
        return [
            AvailabilityCandidate.from_dict(system_id, system_type, item)
            for item in self._items(response)
        ]
