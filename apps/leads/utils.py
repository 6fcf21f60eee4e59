"""Utility helpers for lead data normalization."""

import re

NON_DIGITS = re.compile(r"\D")


def normalize_phone(raw: str | None) -> str | None:
    """Reduce a phone number to the digits-only form WhatsApp uses as ``wa_id``."""
    if not raw:
        return None
    cleaned = NON_DIGITS.sub("", str(raw))
    if cleaned.startswith("00"):
        cleaned = cleaned[2:]
    return cleaned or None
