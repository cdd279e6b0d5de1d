"""Tests for data models."""

from datetime import date, datetime

import pytest

from numinv import (
    AvailabilityCandidate,
    Expiry,
    InvalidExpiryConfigurationError,
    InventorySystem,
    NumberHandle,
    NumberRange,
    Reservation,
    SystemType,
)


class TestSystemType:
    """Tests for the capability table."""

    @pytest.mark.parametrize("system_type,resource,field", [
        (SystemType.SFB, "ReservedLineUri", "LineUri"),
        (SystemType.CISCO, "ReservedExtension", "Extension"),
        (SystemType.AVAYA, "ReservedStation", "StationExtension"),
    ])
    def test_capabilities(self, system_type, resource, field):
        assert system_type.capability.resource == resource
        assert system_type.capability.number_field == field

    @pytest.mark.parametrize("value", ["sfb", "SFB", "SfB", SystemType.SFB])
    def test_parse_is_case_insensitive(self, value):
        assert SystemType.parse(value) is SystemType.SFB

    def test_parse_unknown(self):
        with pytest.raises(ValueError):
            SystemType.parse("Mitel")


class TestExpiry:
    """Tests for the exactly-one-of expiry policy."""

    def test_never(self):
        expiry = Expiry.from_options(never_expires=True)

        assert expiry.never_expires
        assert expiry.to_payload() == {"NeverExpires": True}

    def test_on_date(self):
        expiry = Expiry.from_options(expires_on=date(2027, 1, 31))

        assert not expiry.never_expires
        assert expiry.to_payload() == {"NeverExpires": False, "ExpirationDate": "2027-01-31"}

    def test_on_date_string(self):
        assert Expiry.from_options(expires_on="2027-01-31").expires_on == date(2027, 1, 31)

    def test_both_rejected(self):
        with pytest.raises(InvalidExpiryConfigurationError):
            Expiry.from_options(never_expires=True, expires_on=date(2027, 1, 31))

    def test_neither_rejected(self):
        with pytest.raises(InvalidExpiryConfigurationError):
            Expiry.from_options()

    def test_empty_string_is_unset(self):
        with pytest.raises(InvalidExpiryConfigurationError):
            Expiry.from_options(never_expires=False, expires_on="")

    def test_unparseable_date_rejected(self):
        with pytest.raises(InvalidExpiryConfigurationError, match="next tuesday"):
            Expiry.from_options(expires_on="next tuesday")

    def test_datetime_drops_time(self):
        expiry = Expiry.from_options(expires_on=datetime(2027, 1, 31, 9, 30))

        assert expiry.expires_on == date(2027, 1, 31)
        assert expiry.to_payload()["ExpirationDate"] == "2027-01-31"

    def test_from_server_with_time(self):
        expiry = Expiry.from_dict({"NeverExpires": False, "ExpirationDate": "2027-01-31T00:00:00"})

        assert expiry == Expiry.on(date(2027, 1, 31))


class TestReservation:
    """Tests for reading reservations per system type."""

    def test_sfb(self):
        reservation = Reservation.from_dict(1, SystemType.SFB, {
            "LineUri": "tel:+13205551011",
            "Reason": "Lease",
            "Description": "Front desk",
            "NeverExpires": True,
        })

        assert reservation.handle == NumberHandle(1, SystemType.SFB, "tel:+13205551011")
        assert reservation.number == "tel:+13205551011"
        assert reservation.handle.canonical == "+13205551011"
        assert reservation.description == "Front desk"
        assert reservation.expiry == Expiry.never()

    def test_avaya(self):
        reservation = Reservation.from_dict(2, SystemType.AVAYA, {
            "StationExtension": 3205551011,
            "Reason": "New hire",
            "NeverExpires": False,
            "ExpirationDate": "2027-06-30",
        })

        assert reservation.number == "3205551011"
        assert reservation.expiry.expires_on == date(2027, 6, 30)

    def test_missing_number_field(self):
        with pytest.raises(KeyError):
            Reservation.from_dict(2, SystemType.CISCO, {"LineUri": "tel:+13205551011"})

    def test_to_dict_is_plain(self):
        reservation = Reservation(
            handle=NumberHandle(3, SystemType.CISCO, "5551011"),
            reason="Lease",
            expiry=Expiry.on(date(2027, 1, 31)),
        )

        assert reservation.to_dict() == {
            "handle": {"system_id": 3, "system_type": "Cisco", "raw_number": "5551011"},
            "reason": "Lease",
            "description": None,
            "expiry": {"never_expires": False, "expires_on": "2027-01-31"},
        }


class TestOtherModels:
    """Tests for candidates, systems and ranges."""

    def test_candidate(self):
        candidate = AvailabilityCandidate.from_dict(3, SystemType.CISCO, {
            "Extension": "3205551011",
            "ResourceRef": "abc",
        })

        assert candidate.handle.raw_number == "3205551011"
        assert candidate.canonical == "+13205551011"
        assert candidate.resource_ref == "abc"

    def test_system(self):
        system = InventorySystem.from_dict({"Id": "7", "Name": "HQ", "SystemType": "avaya"})

        assert system.id == 7
        assert system.system_type is SystemType.AVAYA

    def test_range(self):
        number_range = NumberRange.from_dict(3, {
            "Name": "Main",
            "FirstNumber": "3205551000",
            "LastNumber": "3205551999",
            "Available": 12,
        })

        assert number_range.system_id == 3
        assert number_range.available == 12
        assert number_range.total is None
