"""Shared pytest fixtures for testing."""

import httpx
import keyring
import pytest
import respx
from keyring.errors import PasswordDeleteError

from numinv import InventoryClient, NumberHandle, SystemType, AvailabilityCandidate

BASE_URL = "https://inventory.test"


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    """Keep tests away from the real environment and config directory."""
    for name in ("NUMINV_BASE_URL", "NUMINV_API_KEY", "NUMINV_USERNAME", "NUMINV_PASSWORD"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("NUMINV_CONFIG_DIR", str(tmp_path / "config"))


@pytest.fixture(autouse=True)
def fake_keyring(monkeypatch):
    """In-memory keyring keyed by (service, name)."""
    store = {}

    def delete_password(service, name):
        if (service, name) not in store:
            raise PasswordDeleteError("not found")
        del store[(service, name)]

    monkeypatch.setattr(keyring, "get_password", lambda service, name: store.get((service, name)))
    monkeypatch.setattr(keyring, "set_password",
                        lambda service, name, value: store.__setitem__((service, name), value))
    monkeypatch.setattr(keyring, "delete_password", delete_password)
    return store


# =============================================================================
# HTTP Fixtures
# =============================================================================


@pytest.fixture
def api():
    """Mocked inventory server."""
    with respx.mock(base_url=BASE_URL, assert_all_called=False) as respx_mock:
        yield respx_mock


@pytest.fixture
def client(api):
    """Connected client talking to the mocked server."""
    client = InventoryClient(base_url=BASE_URL, api_key="test-key").connect()
    yield client
    client.close()


# =============================================================================
# Data Helpers
# =============================================================================


def cisco_handle(number: str, system_id: int = 3) -> NumberHandle:
    return NumberHandle(system_id, SystemType.CISCO, number)


def cisco_candidates(count: int, system_id: int = 3):
    """Candidates 5550000, 5550001, ... in server order."""
    return [
        AvailabilityCandidate(
            handle=cisco_handle(f"555{i:04d}", system_id),
            canonical=f"555{i:04d}",
            resource_ref=f"ref-{i}",
        )
        for i in range(count)
    ]


def json_response(status_code: int, data=None, **kwargs) -> httpx.Response:
    return httpx.Response(status_code, json=data, **kwargs)
