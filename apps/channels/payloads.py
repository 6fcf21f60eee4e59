"""Extraction of text messages from WhatsApp Cloud API webhook deliveries."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

WHATSAPP_OBJECT = "whatsapp_business_account"


@dataclass(frozen=True)
class ParsedWhatsAppMessage:
    wa_id: str
    name: Optional[str]
    text: str
    wa_message_id: Optional[str]
    phone_number_id: Optional[str] = None


def _first(items: Any) -> Any:
    if isinstance(items, list) and items:
        return items[0]
    return None


def parse_whatsapp_incoming(body: Any) -> ParsedWhatsAppMessage | None:
    """Return the single text message carried by ``body`` or ``None``.

    Anything that is not a text message from a known sender (status callbacks,
    media, reactions, foreign webhooks) yields ``None``; this never raises.
    """

    if not isinstance(body, Mapping) or body.get("object") != WHATSAPP_OBJECT:
        return None

    entry = _first(body.get("entry"))
    change = _first(entry.get("changes")) if isinstance(entry, Mapping) else None
    value = change.get("value") if isinstance(change, Mapping) else None
    if not isinstance(value, Mapping):
        return None

    contact = _first(value.get("contacts"))
    message = _first(value.get("messages"))
    if not isinstance(contact, Mapping) or not isinstance(message, Mapping):
        return None

    if message.get("type") != "text":
        return None
    text_block = message.get("text")
    text = text_block.get("body") if isinstance(text_block, Mapping) else None
    if not isinstance(text, str) or not text:
        return None

    wa_id = contact.get("wa_id")
    if not wa_id:
        return None

    profile = contact.get("profile")
    name = profile.get("name") if isinstance(profile, Mapping) else None
    metadata = value.get("metadata")
    phone_number_id = metadata.get("phone_number_id") if isinstance(metadata, Mapping) else None

    return ParsedWhatsAppMessage(
        wa_id=str(wa_id),
        name=name or None,
        text=text,
        wa_message_id=message.get("id"),
        phone_number_id=str(phone_number_id) if phone_number_id else None,
    )
