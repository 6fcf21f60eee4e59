"""Messaging channel helpers (WhatsApp Cloud API)."""

from __future__ import annotations

import hashlib
import hmac
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests
from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

from apps.channels.models import WhatsAppAccount
from apps.workspaces.models import Workspace
from apps.workspaces.services import get_default_workspace

logger = logging.getLogger(__name__)

DEFAULT_API_BASE = "https://graph.facebook.com/v20.0"


class WhatsAppDeliveryError(RuntimeError):
    """Raised when the Cloud API refuses or cannot receive an outbound message."""

    def __init__(self, message: str, *, status_code: int | None = None, body: Any = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


@dataclass(frozen=True)
class WhatsAppCredentials:
    phone_number_id: str
    access_token: str


def resolve_credentials(account: WhatsAppAccount | None = None) -> WhatsAppCredentials:
    """Credentials of the receiving account, else the process-wide settings."""

    if account is not None:
        token = account.get_access_token()
        if token:
            return WhatsAppCredentials(account.phone_number_id, token)
    phone_number_id = getattr(settings, "WHATSAPP_PHONE_NUMBER_ID", "")
    token = getattr(settings, "WHATSAPP_ACCESS_TOKEN", "")
    if not phone_number_id or not token:
        raise ImproperlyConfigured(
            "Missing WHATSAPP_PHONE_NUMBER_ID or WHATSAPP_ACCESS_TOKEN for outbound WhatsApp messages."
        )
    return WhatsAppCredentials(phone_number_id, token)


def resolve_whatsapp_account(phone_number_id: str | None) -> WhatsAppAccount | None:
    if not phone_number_id:
        return None
    return (
        WhatsAppAccount.objects.select_related("workspace")
        .filter(phone_number_id=phone_number_id)
        .first()
    )


def resolve_inbound_workspace(account: WhatsAppAccount | None) -> Workspace:
    if account is not None:
        return account.workspace
    return get_default_workspace()


def verify_signature(raw_body: bytes, header_value: str | None) -> bool:
    """Check ``X-Hub-Signature-256``; always passes when no app secret is configured."""

    secret = getattr(settings, "WHATSAPP_APP_SECRET", "")
    if not secret:
        return True
    if not header_value or not header_value.startswith("sha256="):
        return False
    expected = hmac.new(secret.encode("utf-8"), raw_body, hashlib.sha256).hexdigest()
    return hmac.compare_digest(expected, header_value[len("sha256="):])


class WhatsAppCloudClient:
    """Thin wrapper around the Cloud API ``/messages`` endpoint."""

    def __init__(self, credentials: WhatsAppCredentials) -> None:
        self.credentials = credentials
        self.api_base = getattr(settings, "WHATSAPP_API_BASE", DEFAULT_API_BASE).rstrip("/")
        self.timeout = float(getattr(settings, "WHATSAPP_SEND_TIMEOUT_SECONDS", 10))

    def send_text(self, to: str, body: str) -> Dict[str, Any]:
        url = f"{self.api_base}/{self.credentials.phone_number_id}/messages"
        payload = {
            "messaging_product": "whatsapp",
            "to": to,
            "type": "text",
            "text": {"body": body},
        }
        headers = {
            "Authorization": f"Bearer {self.credentials.access_token}",
            "Content-Type": "application/json",
        }
        try:
            response = requests.post(url, json=payload, headers=headers, timeout=self.timeout)
        except requests.RequestException as exc:
            raise WhatsAppDeliveryError(f"WhatsApp API unreachable: {exc}") from exc

        data = _json_or_none(response)
        if response.status_code >= 400:
            raise WhatsAppDeliveryError(
                f"WhatsApp API error ({response.status_code})",
                status_code=response.status_code,
                body=data if data is not None else getattr(response, "text", ""),
            )
        return data or {}


def _json_or_none(response) -> Optional[Dict[str, Any]]:
    try:
        data = response.json()
    except ValueError:
        return None
    return data if isinstance(data, dict) else None


def extract_message_id(response_data: Dict[str, Any]) -> str | None:
    messages = response_data.get("messages") if isinstance(response_data, dict) else None
    if isinstance(messages, list) and messages and isinstance(messages[0], dict):
        return messages[0].get("id")
    return None


def send_whatsapp_text(to: str, body: str, *, account: WhatsAppAccount | None = None) -> str | None:
    """Send ``body`` once and return the provider message id."""

    client = WhatsAppCloudClient(resolve_credentials(account))
    data = client.send_text(to, body)
    return extract_message_id(data)
