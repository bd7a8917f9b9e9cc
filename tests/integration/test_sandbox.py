"""End-to-end checks against the PayPal sandbox."""

import uuid

import pytest

from paypal_client import (
    AuthenticationFailure,
    Client,
    InvalidRequest,
    MemoryCache,
    ResourceNotFound,
)

pytestmark = pytest.mark.integration


class TestAuthentication:
    def test_fetches_token(self, sandbox_client):
        assert sandbox_client.auth_token(force=True)

    def test_invalid_credentials(self, sandbox_credentials):
        client = Client(
            client_id="invalid",
            client_secret=sandbox_credentials[1],
            cache=MemoryCache(),
            sandbox=True,
        )
        with pytest.raises(AuthenticationFailure):
            client.auth_token(force=True)


class TestErrorHandling:
    def test_missing_resource(self, sandbox_client):
        with pytest.raises(ResourceNotFound):
            sandbox_client.get("/missing")


class TestWebhookFlow:
    def test_create_list_delete(self, sandbox_client):
        data = {
            "url": f"https://example.com/hooks/{uuid.uuid4().hex}",
            "event_types": [{"name": "PAYMENT.AUTHORIZATION.CREATED"}],
        }
        webhook = sandbox_client.post("/notifications/webhooks", data).json()
        try:
            with pytest.raises(InvalidRequest) as exc_info:
                sandbox_client.post("/notifications/webhooks", data)
            assert exc_info.value.code == "WEBHOOK_URL_ALREADY_EXISTS"
            assert exc_info.value.error_message == "Webhook URL already exists"

            listed = sandbox_client.get("/notifications/webhooks").json()
            assert webhook["id"] in [w["id"] for w in listed["webhooks"]]
        finally:
            resp = sandbox_client.delete(f"/notifications/webhooks/{webhook['id']}")
            assert resp.status_code == 204
