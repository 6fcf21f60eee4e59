"""Accounts and tenancy models."""

from __future__ import annotations

from django.contrib.auth.models import User
from django.db import models

from apps.common.models import TimeStampedModel
from apps.workspaces.models import Workspace


class WorkspaceMembership(TimeStampedModel):
    """Links a login to the single workspace it operates."""

    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name="membership")
    workspace = models.ForeignKey(Workspace, on_delete=models.CASCADE, related_name="memberships")
    is_owner = models.BooleanField(default=False)

    def __str__(self) -> str:
        return f"{self.user.email} @ {self.workspace.slug}"


class AuditLog(TimeStampedModel):
    """Audit records for authentication events."""

    actor_user = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, blank=True)
    action = models.CharField(max_length=255)
    workspace = models.ForeignKey(Workspace, null=True, blank=True, on_delete=models.SET_NULL)
    meta = models.JSONField(default=dict, blank=True)

    class Meta:
        ordering = ["-created_at"]
