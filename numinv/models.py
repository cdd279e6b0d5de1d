"""
numinv - Data Models

This module contains the value types exchanged with the inventory server.
Models are frozen dataclasses; the server speaks PascalCase JSON and each
model knows how to read itself from a response row.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from datetime import date, datetime
from enum import Enum
from typing import Optional, Dict, Any
import json

from numinv.exceptions import InvalidExpiryConfigurationError
from numinv.numbers import normalize_number


class BaseModel:
    """Base class for all models with common functionality."""

    def to_dict(self) -> Dict[str, Any]:
        """Convert model to a dictionary of plain values."""
        return {f.name: _plain(getattr(self, f.name)) for f in fields(self)}

    def to_json(self) -> str:
        """Convert model to JSON string."""
        return json.dumps(self.to_dict(), default=str)


def _plain(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.to_dict()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return value


def _parse_date(value: Any) -> Optional[date]:
    if not value:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    # Server dates may carry a time component
    return date.fromisoformat(str(value)[:10])


# =============================================================================
# System types
# =============================================================================

@dataclass(frozen=True)
class SystemCapability:
    """
    Field naming used by one telephony platform.

    Attributes:
        resource: Path segment of the platform's reservation collection
        number_field: JSON field holding the number on that platform
    """
    resource: str
    number_field: str


class SystemType(str, Enum):
    """Target telephony platform of an inventory system."""
    SFB = "SfB"
    CISCO = "Cisco"
    AVAYA = "Avaya"

    @property
    def capability(self) -> SystemCapability:
        return SYSTEM_CAPABILITIES[self]

    @classmethod
    def parse(cls, value: Any) -> "SystemType":
        """Look up a system type by value, case-insensitively."""
        if isinstance(value, cls):
            return value
        for member in cls:
            if member.value.lower() == str(value).lower():
                return member
        raise ValueError(f"Unknown system type: {value!r}")


SYSTEM_CAPABILITIES: Dict[SystemType, SystemCapability] = {
    SystemType.SFB: SystemCapability("ReservedLineUri", "LineUri"),
    SystemType.CISCO: SystemCapability("ReservedExtension", "Extension"),
    SystemType.AVAYA: SystemCapability("ReservedStation", "StationExtension"),
}


# =============================================================================
# Numbers
# =============================================================================

@dataclass(frozen=True)
class NumberHandle(BaseModel):
    """A number as known to one inventory system."""
    system_id: int
    system_type: SystemType
    raw_number: str

    @property
    def canonical(self) -> str:
        return normalize_number(self.raw_number)

    def __str__(self) -> str:
        return self.raw_number


@dataclass(frozen=True)
class AvailabilityCandidate(BaseModel):
    """
    One row of an availability query.

    Candidates are ephemeral: another client may reserve the number
    before this one does.
    """
    handle: NumberHandle
    canonical: str
    resource_ref: Optional[str] = None

    @classmethod
    def from_dict(
        cls,
        system_id: int,
        system_type: SystemType,
        data: Dict[str, Any],
    ) -> "AvailabilityCandidate":
        raw = str(data[system_type.capability.number_field])
        return cls(
            handle=NumberHandle(system_id, system_type, raw),
            canonical=normalize_number(raw),
            resource_ref=data.get("ResourceRef"),
        )


# =============================================================================
# Reservations
# =============================================================================

@dataclass(frozen=True)
class Expiry(BaseModel):
    """
    Expiration policy of a reservation.

    Exactly one of ``never_expires`` and ``expires_on`` is set; build
    instances with ``never()``, ``on()`` or ``from_options()``.
    """
    never_expires: bool = True
    expires_on: Optional[date] = None

    @classmethod
    def never(cls) -> "Expiry":
        return cls(never_expires=True)

    @classmethod
    def on(cls, day: date) -> "Expiry":
        return cls(never_expires=False, expires_on=day)

    @classmethod
    def from_options(
        cls,
        never_expires: bool = False,
        expires_on: Optional[date] = None,
    ) -> "Expiry":
        """
        Validate caller options and build an Expiry.

        ``expires_on`` may be a date, a datetime (the time is dropped) or an
        ISO date string. An empty string counts as unset.

        Raises:
            InvalidExpiryConfigurationError: If both or neither are set, or
                the date cannot be parsed
        """
        if bool(never_expires) == bool(expires_on):
            raise InvalidExpiryConfigurationError()
        if never_expires:
            return cls.never()
        try:
            day = _parse_date(expires_on)
        except (TypeError, ValueError) as e:
            raise InvalidExpiryConfigurationError(
                f"Invalid expiration date {expires_on!r}: {e}"
            ) from e
        return cls.on(day)

    def to_payload(self) -> Dict[str, Any]:
        if self.never_expires:
            return {"NeverExpires": True}
        return {"NeverExpires": False, "ExpirationDate": self.expires_on.isoformat()}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Expiry":
        expires_on = _parse_date(data.get("ExpirationDate"))
        if data.get("NeverExpires") or expires_on is None:
            return cls.never()
        return cls.on(expires_on)


@dataclass(frozen=True)
class Reservation(BaseModel):
    """A reservation record as stored by the server."""
    handle: NumberHandle
    reason: str
    description: Optional[str] = None
    expiry: Expiry = Expiry()

    @property
    def number(self) -> str:
        return self.handle.raw_number

    @classmethod
    def from_dict(
        cls,
        system_id: int,
        system_type: SystemType,
        data: Dict[str, Any],
    ) -> "Reservation":
        raw = str(data[system_type.capability.number_field])
        return cls(
            handle=NumberHandle(system_id, system_type, raw),
            reason=data.get("Reason", ""),
            description=data.get("Description"),
            expiry=Expiry.from_dict(data),
        )


# =============================================================================
# Systems and ranges
# =============================================================================

@dataclass(frozen=True)
class InventorySystem(BaseModel):
    """A telephony system registered with the inventory server."""
    id: int
    name: str
    system_type: SystemType
    description: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "InventorySystem":
        return cls(
            id=int(data["Id"]),
            name=data.get("Name", ""),
            system_type=SystemType.parse(data["SystemType"]),
            description=data.get("Description"),
        )


@dataclass(frozen=True)
class NumberRange(BaseModel):
    """A named block of numbers within one system."""
    system_id: int
    name: str
    first_number: Optional[str] = None
    last_number: Optional[str] = None
    description: Optional[str] = None
    total: Optional[int] = None
    available: Optional[int] = None

    @classmethod
    def from_dict(cls, system_id: int, data: Dict[str, Any]) -> "NumberRange":
        return cls(
            system_id=system_id,
            name=data["Name"],
            first_number=data.get("FirstNumber"),
            last_number=data.get("LastNumber"),
            description=data.get("Description"),
            total=data.get("Total"),
            available=data.get("Available"),
        )
