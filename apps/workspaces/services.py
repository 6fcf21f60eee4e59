"""Workspace resolution helpers shared by APIs, pages and webhooks."""

from __future__ import annotations

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from django.utils.text import slugify

from apps.workspaces.models import Workspace


def get_default_workspace_slug() -> str:
    slug = getattr(settings, "DEFAULT_WORKSPACE_SLUG", "")
    if not slug:
        raise ImproperlyConfigured("DEFAULT_WORKSPACE_SLUG is not configured.")
    return slug


def get_default_workspace() -> Workspace:
    slug = get_default_workspace_slug()
    workspace = Workspace.objects.filter(slug=slug).first()
    if workspace is None:
        raise ImproperlyConfigured(f"DEFAULT_WORKSPACE_SLUG '{slug}' does not match any workspace.")
    return workspace


def resolve_workspace(identifier: str | None = None) -> Workspace | None:
    """Return the named workspace, or the default one when no identifier is given.

    An explicit identifier that matches nothing yields ``None`` so callers can
    answer 404 instead of silently writing into the default tenant.
    """
    if identifier:
        return Workspace.objects.filter(slug=str(identifier).strip()).first()
    return get_default_workspace()


def unique_workspace_slug(name: str) -> str:
    base = slugify(name)[:40] or "workspace"
    candidate = base
    suffix = 2
    while Workspace.objects.filter(slug=candidate).exists():
        candidate = f"{base}-{suffix}"
        suffix += 1
    return candidate
