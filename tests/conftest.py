"""
Root pytest configuration and fixtures for paypal-client.

Provides common fixtures and test utilities for the test suite.
"""

import os
from pathlib import Path
import sys

import pytest
import responses

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from paypal_client import Client, MemoryCache  # noqa: E402


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture(autouse=True)
def clean_environment():
    """Clean environment variables before each test."""
    original_env = os.environ.copy()

    for key in list(os.environ.keys()):
        if key.startswith("PAYPAL_") and not key.startswith("PAYPAL_TEST_"):
            del os.environ[key]

    yield

    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture(autouse=True)
def reset_built_client():
    """Forget the memoized Client.build() instance between tests."""
    Client._built = None
    yield
    Client._built = None


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return MemoryCache(clock=clock)


@pytest.fixture
def client(cache):
    """Sandbox client with test credentials and an empty cache."""
    c = Client(
        client_id="client_id",
        client_secret="client_secret",
        cache=cache,
        sandbox=True,
        version="v1",
    )
    yield c
    c.close()


@pytest.fixture
def authed_client(client, cache):
    """Client whose cache already holds a valid token."""
    cache.write(Client.TOKEN_CACHE_KEY, "token", expires_in=600)
    return client


@pytest.fixture
def mock_requests():
    """Mock HTTP requests using responses library."""
    with responses.RequestsMock() as rsps:
        yield rsps


@pytest.fixture
def token_response():
    return {
        "scope": "https://uri.paypal.com/services/payments/payment",
        "access_token": "token",
        "token_type": "Bearer",
        "app_id": "APP-80W284485P519543T",
        "expires_in": 12_340,
        "nonce": "2024-01-01T00:00:00Zabc",
    }
