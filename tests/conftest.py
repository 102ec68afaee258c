"""Shared test fixtures for the Pinpoint test suite."""

import pytest
import respx

from pinpoint.limiter import limiter
from pinpoint.main import app


@pytest.fixture()
def client():
    """FastAPI test client."""
    from fastapi.testclient import TestClient

    with TestClient(app) as c:
        yield c


@pytest.fixture(autouse=True)
def reset_rate_limits():
    """Every test starts with empty rate-limit counters."""
    limiter.reset()
    yield


@pytest.fixture()
def mock_api():
    """respx mock for outgoing geocoder requests. Unmocked requests fail."""
    with respx.mock(assert_all_called=False) as mock:
        yield mock


@pytest.fixture()
def postcode_route(mock_api):
    """Route for single Postcodes.io lookups."""
    return mock_api.get(host="api.postcodes.io", path__startswith="/postcodes/")


@pytest.fixture()
def bulk_route(mock_api):
    """Route for bulk Postcodes.io lookups."""
    return mock_api.post(host="api.postcodes.io", path="/postcodes")


@pytest.fixture()
def w3w_route(mock_api):
    """Route for what3words convert-to-coordinates."""
    return mock_api.get(host="api.what3words.com", path="/v3/convert-to-coordinates")
