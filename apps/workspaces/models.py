"""Domain models for the workspaces module."""

from django.db import models

from apps.common.models import TimeStampedModel
from apps.workspaces.config import default_timezone


class LanguageChoices(models.TextChoices):
    """Languages the auto-reply pipeline can answer in."""

    ENGLISH = "en", "English"
    FRENCH = "fr", "French"
    ARABIC = "ar", "Arabic"


class WorkspacePlan(models.TextChoices):
    TRIAL = "TRIAL", "Trial"
    STARTER = "STARTER", "Starter"
    PRO = "PRO", "Pro"


class PlanStatus(models.TextChoices):
    ACTIVE = "ACTIVE", "Active"
    PAST_DUE = "PAST_DUE", "Past due"
    CANCELLED = "CANCELLED", "Cancelled"


class Workspace(TimeStampedModel):
    """A garage account; the tenant boundary for every other record."""

    name = models.CharField(max_length=255)
    slug = models.SlugField(unique=True)
    timezone = models.CharField(max_length=64, default=default_timezone)
    plan = models.CharField(
        max_length=16, choices=WorkspacePlan.choices, default=WorkspacePlan.TRIAL
    )
    plan_status = models.CharField(
        max_length=16, choices=PlanStatus.choices, default=PlanStatus.ACTIVE
    )
    brand_tone = models.CharField(max_length=255, blank=True, null=True)
    opening_hours = models.JSONField(default=dict, blank=True)

    class Meta:
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


class Service(TimeStampedModel):
    """A service the garage offers (detailing, PPF, polishing...)."""

    workspace = models.ForeignKey(
        Workspace, on_delete=models.CASCADE, related_name="services"
    )
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, null=True)

    class Meta:
        ordering = ["created_at", "id"]

    def __str__(self) -> str:
        return f"{self.workspace.name}: {self.name}"
