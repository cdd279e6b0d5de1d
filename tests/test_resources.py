"""Tests for API resources against a mocked inventory server."""

import json
from datetime import date

import pytest

from numinv import (
    ExhaustedAlternativesError,
    Expiry,
    InvalidExpiryConfigurationError,
    NotFoundError,
    NumberHandle,
    SystemType,
    ValidationError,
)

from tests.conftest import json_response


def body(route, index=-1):
    return json.loads(route.calls[index].request.content)


class TestSystemsAndRanges:
    """Tests for lookups."""

    def test_list_systems(self, api, client):
        api.get("/api/v1/systems").mock(return_value=json_response(200, [
            {"Id": 1, "Name": "Lync", "SystemType": "SfB"},
            {"Id": 3, "Name": "CUCM", "SystemType": "Cisco", "Description": "HQ"},
        ]))

        systems = client.systems.list()

        assert [s.id for s in systems] == [1, 3]
        assert systems[1].system_type is SystemType.CISCO

    def test_get_system(self, api, client):
        api.get("/api/v1/systems/3").mock(
            return_value=json_response(200, {"Id": 3, "Name": "CUCM", "SystemType": "Cisco"})
        )

        assert client.systems.get(3).name == "CUCM"

    def test_list_ranges_wrapped(self, api, client):
        api.get("/api/v1/systems/3/ranges").mock(return_value=json_response(200, {
            "items": [{"Name": "Main", "Available": 4}, {"Name": "Lobby"}],
        }))

        ranges = client.ranges.list(3)

        assert [r.name for r in ranges] == ["Main", "Lobby"]
        assert ranges[0].available == 4

    def test_range_name_is_encoded(self, api, client):
        route = api.get(path__regex=r"^/api/v1/systems/3/ranges/.+$").mock(
            return_value=json_response(200, {"Name": "Main Office"})
        )

        assert client.ranges.get(3, "Main Office").name == "Main Office"
        assert route.calls.last.request.url.raw_path == b"/api/v1/systems/3/ranges/Main%20Office"

    def test_missing_range(self, api, client):
        api.get(path__regex=r"^/api/v1/systems/3/ranges/.+$").mock(
            return_value=json_response(404, {"message": "No such range"})
        )

        with pytest.raises(NotFoundError):
            client.ranges.get(3, "Nope")


class TestAvailable:
    """Tests for available-number discovery."""

    def test_query(self, api, client):
        route = api.get("/api/v1/systems/3/ranges/Main/available").mock(
            return_value=json_response(200, [
                {"Extension": "3205551012", "ResourceRef": "r2"},
                {"Extension": "3205551011", "ResourceRef": "r1"},
            ])
        )

        candidates = client.available.query(3, "cisco", "Main", count=2)

        params = route.calls.last.request.url.params
        assert params["count"] == "2"
        assert params["systemType"] == "Cisco"
        # server order is kept
        assert [c.handle.raw_number for c in candidates] == ["3205551012", "3205551011"]
        assert candidates[0].canonical == "+13205551012"
        assert candidates[0].handle == NumberHandle(3, SystemType.CISCO, "3205551012")

    def test_short_result(self, api, client):
        api.get("/api/v1/systems/3/ranges/Main/available").mock(
            return_value=json_response(200, {"items": []})
        )

        assert client.available.query(3, SystemType.CISCO, "Main", count=5) == []

    @pytest.mark.parametrize("count", [0, 101])
    def test_count_bounds(self, api, client, count):
        with pytest.raises(ValidationError):
            client.available.query(3, SystemType.CISCO, "Main", count=count)

        assert not api.calls


class TestReservationLifecycle:
    """Tests for list, get, create and delete."""

    def test_create_sfb(self, api, client):
        route = api.post("/api/v1/systems/1/ReservedLineUri").mock(
            return_value=json_response(201, {})
        )

        client.reservations.create(
            NumberHandle(1, SystemType.SFB, "tel:+13205551011"),
            "Lease",
            Expiry.on(date(2027, 1, 31)),
            description="Front desk",
        )

        assert body(route) == {
            "LineUri": "tel:+13205551011",
            "Reason": "Lease",
            "Description": "Front desk",
            "NeverExpires": False,
            "ExpirationDate": "2027-01-31",
        }

    def test_create_avaya(self, api, client):
        route = api.post("/api/v1/systems/2/ReservedStation").mock(
            return_value=json_response(201, {})
        )

        client.reservations.create(NumberHandle(2, SystemType.AVAYA, "51011"), "Spare", Expiry.never())

        assert body(route) == {"StationExtension": "51011", "Reason": "Spare", "NeverExpires": True}

    def test_get_encodes_line_uri(self, api, client):
        route = api.get(path__regex=r"^/api/v1/systems/1/ReservedLineUri/.+$").mock(
            return_value=json_response(200, {
                "LineUri": "tel:+13205551011",
                "Reason": "Lease",
                "NeverExpires": True,
            })
        )

        reservation = client.reservations.get(1, SystemType.SFB, "tel:+13205551011")

        assert reservation.number == "tel:+13205551011"
        assert route.calls.last.request.url.raw_path == (
            b"/api/v1/systems/1/ReservedLineUri/tel%3A%2B13205551011"
        )

    def test_list(self, api, client):
        api.get("/api/v1/systems/3/ReservedExtension").mock(return_value=json_response(200, [
            {"Extension": "5551011", "Reason": "A", "NeverExpires": True},
            {"Extension": "5551012", "Reason": "B", "ExpirationDate": "2027-01-31"},
        ]))

        reservations = client.reservations.list(3, "Cisco")

        assert [r.number for r in reservations] == ["5551011", "5551012"]
        assert reservations[1].expiry == Expiry.on(date(2027, 1, 31))

    def test_delete(self, api, client):
        route = api.delete("/api/v1/systems/3/ReservedExtension/5551011").mock(
            return_value=json_response(204)
        )

        assert client.reservations.delete(3, SystemType.CISCO, "5551011") is None
        assert route.called


class TestReserveAgainstServer:
    """End-to-end acquisition through the HTTP layer."""

    def test_conflict_then_fallback(self, api, client):
        create = api.post("/api/v1/systems/3/ReservedExtension").mock(side_effect=[
            json_response(409, {"message": "Extension already reserved"}),
            json_response(201, {}),
        ])
        available = api.get("/api/v1/systems/3/ranges/Main/available").mock(
            return_value=json_response(200, [
                {"Extension": "5551011"},
                {"Extension": "5551012"},
            ])
        )
        fetch = api.get("/api/v1/systems/3/ReservedExtension/5551012").mock(
            return_value=json_response(200, {
                "Extension": "5551012",
                "Reason": "New hire",
                "NeverExpires": True,
            })
        )

        reservation = client.reservations.reserve(
            3, SystemType.CISCO, "5551011", "Main", "New hire", never_expires=True,
        )

        assert reservation.number == "5551012"
        assert [body(create, i)["Extension"] for i in range(2)] == ["5551011", "5551012"]
        assert available.call_count == 1
        assert available.calls.last.request.url.params["count"] == "2"
        assert fetch.called

    def test_next_available(self, api, client):
        available = api.get("/api/v1/systems/3/ranges/Main/available").mock(
            return_value=json_response(200, [{"Extension": "5551011"}])
        )
        api.post("/api/v1/systems/3/ReservedExtension").mock(return_value=json_response(201, {}))
        api.get("/api/v1/systems/3/ReservedExtension/5551011").mock(
            return_value=json_response(200, {
                "Extension": "5551011",
                "Reason": "New hire",
                "ExpirationDate": "2027-01-31",
            })
        )

        reservation = client.reservations.reserve_next_available(
            3, "Cisco", "Main", "New hire", expires_on=date(2027, 1, 31),
        )

        assert reservation.expiry.expires_on == date(2027, 1, 31)
        assert available.calls.last.request.url.params["count"] == "1"

    def test_next_available_empty_range(self, api, client):
        api.get("/api/v1/systems/3/ranges/Main/available").mock(
            return_value=json_response(200, [])
        )
        create = api.post("/api/v1/systems/3/ReservedExtension")

        with pytest.raises(ExhaustedAlternativesError):
            client.reservations.reserve_next_available(
                3, SystemType.CISCO, "Main", "New hire", never_expires=True,
            )

        assert not create.called

    def test_next_available_checks_expiry_first(self, api, client):
        with pytest.raises(InvalidExpiryConfigurationError):
            client.reservations.reserve_next_available(3, SystemType.CISCO, "Main", "New hire")

        assert not api.calls
