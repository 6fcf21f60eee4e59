import hashlib
import hmac
import json
from types import SimpleNamespace

import pytest

from apps.workspaces.models import Workspace


@pytest.fixture
def workspace(db, settings):
    workspace = Workspace.objects.create(
        name="Rivo Detailing",
        slug="rivo-detailing",
        timezone="Asia/Dubai",
    )
    settings.DEFAULT_WORKSPACE_SLUG = workspace.slug
    return workspace


@pytest.fixture
def whatsapp_settings(settings):
    settings.WHATSAPP_VERIFY_TOKEN = "verify-me"
    settings.WHATSAPP_APP_SECRET = ""
    settings.WHATSAPP_PHONE_NUMBER_ID = "1234567890"
    settings.WHATSAPP_ACCESS_TOKEN = "test-token"
    settings.WHATSAPP_API_BASE = "https://graph.example.test/v20.0"
    return settings


@pytest.fixture
def whatsapp_payload():
    def _build(
        text="Bonjour, j'ai un problème de frein",
        *,
        wa_id="971500000001",
        name="Karim Haddad",
        message_id="wamid.TEST1",
        message_type="text",
        phone_number_id="1234567890",
    ):
        message = {"from": wa_id, "id": message_id, "timestamp": "1700000000", "type": message_type}
        if message_type == "text":
            message["text"] = {"body": text}
        return {
            "object": "whatsapp_business_account",
            "entry": [
                {
                    "id": "WABA_ID",
                    "changes": [
                        {
                            "field": "messages",
                            "value": {
                                "messaging_product": "whatsapp",
                                "metadata": {
                                    "display_phone_number": "971500000000",
                                    "phone_number_id": phone_number_id,
                                },
                                "contacts": [{"profile": {"name": name}, "wa_id": wa_id}],
                                "messages": [message],
                            },
                        }
                    ],
                }
            ],
        }

    return _build


@pytest.fixture
def fake_post(monkeypatch):
    """Replace ``requests.post`` used by the WhatsApp client; records every call."""

    calls = []
    state = {"status_code": 200, "json": {"messages": [{"id": "wamid.OUT1"}]}}

    def _post(url, json=None, headers=None, timeout=None):
        calls.append({"url": url, "json": json, "headers": headers, "timeout": timeout})
        body = state["json"]
        return SimpleNamespace(
            status_code=state["status_code"],
            json=lambda: body,
            text=str(body),
        )

    monkeypatch.setattr("apps.channels.services.requests.post", _post)
    return SimpleNamespace(calls=calls, state=state)


@pytest.fixture
def post_webhook(client):
    def _post(payload, **extra):
        body = payload if isinstance(payload, (bytes, str)) else json.dumps(payload)
        return client.post(
            "/api/whatsapp/webhook",
            data=body,
            content_type="application/json",
            **extra,
        )

    return _post


@pytest.fixture
def hub_signature():
    def _sign(secret: str, body: bytes) -> str:
        return "sha256=" + hmac.new(secret.encode(), body, hashlib.sha256).hexdigest()

    return _sign
