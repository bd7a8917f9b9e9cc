"""Fixtures for integration tests against the PayPal sandbox."""

import os

import pytest

from paypal_client import Client, MemoryCache


@pytest.fixture(scope="session")
def sandbox_credentials():
    """Credentials from PAYPAL_TEST_CLIENT_ID / PAYPAL_TEST_CLIENT_SECRET."""
    client_id = os.getenv("PAYPAL_TEST_CLIENT_ID")
    client_secret = os.getenv("PAYPAL_TEST_CLIENT_SECRET")
    if not client_id or not client_secret:
        pytest.skip("Set PAYPAL_TEST_CLIENT_ID and PAYPAL_TEST_CLIENT_SECRET to hit the sandbox")
    return client_id, client_secret


@pytest.fixture
def sandbox_client(sandbox_credentials):
    client_id, client_secret = sandbox_credentials
    client = Client(
        client_id=client_id,
        client_secret=client_secret,
        cache=MemoryCache(),
        sandbox=True,
        version="v1",
    )
    yield client
    client.close()
