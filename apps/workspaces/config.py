"""Defaults applied when a workspace or caller leaves a value blank.

Every silent fallback of the application is declared here so it can be audited
in one place.
"""

from __future__ import annotations

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from django.conf import settings

FALLBACK_TIMEZONE = "Asia/Dubai"
DEFAULT_PLAN = "TRIAL"
DEFAULT_PLAN_STATUS = "ACTIVE"


def default_timezone() -> str:
    return getattr(settings, "DEFAULT_WORKSPACE_TIMEZONE", "") or FALLBACK_TIMEZONE


def resolve_timezone_name(name: str | None) -> str:
    """Return ``name`` stripped, or the configured default when blank."""
    if name and name.strip():
        return name.strip()
    return default_timezone()


def is_valid_timezone(name: str | None) -> bool:
    if not name or not name.strip():
        return False
    try:
        ZoneInfo(name.strip())
    except (ZoneInfoNotFoundError, ValueError):
        return False
    return True
