# tests/conftest.py
import pytest
import requests
from fastapi.testclient import TestClient

from marketplace_api.app.core.config import Settings
from marketplace_api.app.core.store import FileBackend, ListingStore, MemoryBackend
from marketplace_api.app.main import create_app
from marketplace_api.app.services.contact_service import ContactService, ResendRelay
from marketplace_api.app.services.listing_service import ListingService


class FakeResponse:
    def __init__(self, status_code=200, payload=None):
        self.status_code = status_code
        self._payload = payload if payload is not None else {"id": "email-1"}

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Client Error", response=self)

    def json(self):
        return self._payload


class FakeSession:
    """Stands in for ``requests.Session`` and records every POST."""

    def __init__(self, response=None, error=None):
        self.response = response or FakeResponse()
        self.error = error
        self.calls = []

    def post(self, url, json=None, headers=None, timeout=None):
        self.calls.append({"url": url, "json": json, "headers": headers, "timeout": timeout})
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def listings_path(tmp_path):
    return tmp_path / "data" / "listings.json"


@pytest.fixture
def file_store(listings_path):
    store = ListingStore(FileBackend(listings_path))
    store.ensure_exists()
    return store


@pytest.fixture
def memory_store():
    store = ListingStore(MemoryBackend())
    store.ensure_exists()
    return store


@pytest.fixture
def service(file_store):
    return ListingService(file_store)


@pytest.fixture
def fake_session():
    return FakeSession()


@pytest.fixture
def test_settings(listings_path):
    return Settings(
        listings_file=str(listings_path),
        store_read_failure="raise",
        static_dir=None,
        resend_api_key="re_test_key",
        contact_from="onboarding@resend.dev",
        contact_to="owner@example.com",
    )


@pytest.fixture
def contact_service(test_settings, fake_session):
    return ContactService.from_settings(test_settings, session=fake_session)


@pytest.fixture
def app(test_settings, contact_service):
    return create_app(test_settings, contact_service=contact_service)


@pytest.fixture
def client(app):
    # Entering the context runs the startup handler, which creates the
    # listings document.
    with TestClient(app) as c:
        yield c


@pytest.fixture
def make_relay():
    def _make(session, api_key="re_test_key"):
        return ResendRelay(api_key=api_key, api_url="https://relay.test/emails", timeout=3, session=session)

    return _make


LAMP = {"title": "Lamp", "price": 20, "description": "IKEA", "contact": "a@b.com"}
