from types import SimpleNamespace

import pytest
import requests
from django.core.exceptions import ImproperlyConfigured

from apps.channels.models import WhatsAppAccount
from apps.channels.services import (
    WhatsAppCloudClient,
    WhatsAppCredentials,
    WhatsAppDeliveryError,
    resolve_credentials,
    send_whatsapp_text,
    verify_signature,
)


def test_send_text_posts_cloud_api_payload(whatsapp_settings, fake_post):
    message_id = send_whatsapp_text("971500000001", "Hello")

    assert message_id == "wamid.OUT1"
    call = fake_post.calls[0]
    assert call["url"] == "https://graph.example.test/v20.0/1234567890/messages"
    assert call["json"] == {
        "messaging_product": "whatsapp",
        "to": "971500000001",
        "type": "text",
        "text": {"body": "Hello"},
    }
    assert call["headers"]["Authorization"] == "Bearer test-token"
    assert call["timeout"] == 10


def test_non_2xx_raises_with_provider_body(whatsapp_settings, fake_post):
    fake_post.state["status_code"] = 400
    fake_post.state["json"] = {"error": {"message": "Recipient not in allowed list"}}

    with pytest.raises(WhatsAppDeliveryError) as excinfo:
        send_whatsapp_text("971500000001", "Hello")

    assert excinfo.value.status_code == 400
    assert excinfo.value.body == {"error": {"message": "Recipient not in allowed list"}}


def test_transport_error_raises_delivery_error(whatsapp_settings, monkeypatch):
    def _boom(*args, **kwargs):
        raise requests.ConnectionError("connection reset")

    monkeypatch.setattr("apps.channels.services.requests.post", _boom)
    client = WhatsAppCloudClient(WhatsAppCredentials("1234567890", "token"))

    with pytest.raises(WhatsAppDeliveryError):
        client.send_text("971500000001", "Hello")


def test_non_json_error_body_keeps_text(whatsapp_settings, monkeypatch):
    def _bad_gateway(*args, **kwargs):
        def _json():
            raise ValueError("not json")

        return SimpleNamespace(status_code=502, json=_json, text="Bad Gateway")

    monkeypatch.setattr("apps.channels.services.requests.post", _bad_gateway)

    with pytest.raises(WhatsAppDeliveryError) as excinfo:
        send_whatsapp_text("971500000001", "Hello")
    assert excinfo.value.body == "Bad Gateway"


def test_missing_credentials_raise_improperly_configured(settings):
    settings.WHATSAPP_PHONE_NUMBER_ID = ""
    settings.WHATSAPP_ACCESS_TOKEN = ""
    with pytest.raises(ImproperlyConfigured):
        resolve_credentials()


@pytest.mark.django_db
def test_account_token_is_encrypted_and_preferred(workspace, whatsapp_settings):
    account = WhatsAppAccount.objects.create(
        workspace=workspace,
        phone_number_id="555000",
        access_token="account-secret",
    )
    account.refresh_from_db()

    assert account.access_token != "account-secret"
    assert account.get_access_token() == "account-secret"
    credentials = resolve_credentials(account)
    assert credentials == WhatsAppCredentials("555000", "account-secret")


def test_signature_check_is_skipped_without_secret(settings):
    settings.WHATSAPP_APP_SECRET = ""
    assert verify_signature(b"{}", None) is True


def test_signature_check(settings, hub_signature):
    settings.WHATSAPP_APP_SECRET = "app-secret"
    body = b'{"object": "whatsapp_business_account"}'

    assert verify_signature(body, hub_signature("app-secret", body)) is True
    assert verify_signature(body, hub_signature("other", body)) is False
    assert verify_signature(body, None) is False
