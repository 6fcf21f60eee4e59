"""Utility helpers shared across apps."""

from __future__ import annotations

from typing import Any, Dict

from django.http import JsonResponse


def minimal_ok(**extra: Any) -> JsonResponse:
    """Return the default JSON envelope used by webhook endpoints."""
    payload: Dict[str, Any] = {"ok": True}
    payload.update(extra)
    return JsonResponse(payload)


def split_display_name(raw: str | None) -> tuple[str | None, str | None]:
    """Split a profile name into first name and the remainder."""
    if not raw or not raw.strip():
        return None, None
    parts = raw.strip().split(" ")
    first_name = parts[0]
    last_name = " ".join(parts[1:]).strip() or None
    return first_name, last_name
