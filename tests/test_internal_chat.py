import json

import pytest

from apps.conversations.models import ChannelType, Conversation, Message, MessageDirection
from apps.leads.models import Lead

pytestmark = pytest.mark.django_db


def _post(client, payload):
    return client.post("/api/internal-chat", data=json.dumps(payload), content_type="application/json")


def test_internal_chat_replies_without_sending(client, workspace, fake_post):
    response = _post(client, {"message": "My brakes make a noise"})

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["language"] == "en"
    assert data["flow"] == "C_MECHANICAL"
    assert data["reply"].startswith("Got it, you are describing a mechanical issue.")
    assert [m["direction"] for m in data["messages"]] == [
        MessageDirection.INBOUND,
        MessageDirection.OUTBOUND,
    ]

    assert fake_post.calls == []
    assert not Lead.objects.exists()
    conversation = Conversation.objects.get(channel=ChannelType.INTERNAL)
    assert conversation.last_flow == "C_MECHANICAL"
    assert conversation.messages.count() == 2


def test_internal_chat_history_accumulates(client, workspace):
    _post(client, {"message": "Bonjour, je veux un rdv"})
    _post(client, {"message": "Ceramic coating please"})

    response = client.get("/api/internal-chat")

    items = response.json()["data"]["items"]
    assert len(items) == 4
    assert items[0]["text"] == "Bonjour, je veux un rdv"
    assert items[2]["text"] == "Ceramic coating please"
    assert Conversation.objects.filter(channel=ChannelType.INTERNAL).count() == 1


def test_internal_chat_requires_message(client, workspace):
    response = _post(client, {"message": "   "})

    assert response.status_code == 400
    assert response.json()["error"] == "INVALID_PAYLOAD"
    assert not Message.objects.exists()


def test_internal_chat_empty_history(client, workspace):
    response = client.get("/api/internal-chat")
    assert response.json() == {"ok": True, "data": {"items": []}}


def test_internal_chat_rejects_non_object_body(client, workspace):
    response = _post(client, ["hi"])

    assert response.status_code == 400
    assert response.json()["error"] == "INVALID_PAYLOAD"
    assert "non_field_errors" in response.json()["details"]
    assert not Message.objects.exists()
