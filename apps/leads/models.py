"""Domain models for the leads module."""

from django.db import models
from django.db.models import Q

from apps.common.models import TimeStampedModel
from apps.workspaces.models import Workspace


class LeadSource(models.TextChoices):
    WHATSAPP = "WHATSAPP", "WhatsApp"
    MANUAL = "MANUAL", "Manual"
    INTERNAL_CHAT = "INTERNAL_CHAT", "Internal chat"


class LeadStatus(models.TextChoices):
    NEW = "NEW", "New"
    CONTACTED = "CONTACTED", "Contacted"
    QUALIFIED = "QUALIFIED", "Qualified"
    BOOKED = "BOOKED", "Booked"
    LOST = "LOST", "Lost"


class Lead(TimeStampedModel):
    """A prospective customer of a garage."""

    workspace = models.ForeignKey(
        Workspace, on_delete=models.CASCADE, related_name="leads"
    )
    first_name = models.CharField(max_length=150, blank=True, null=True)
    last_name = models.CharField(max_length=150, blank=True, null=True)
    phone = models.CharField(max_length=32, blank=True, null=True)
    city = models.CharField(max_length=120, blank=True, null=True)
    consent_whatsapp = models.BooleanField(default=False)
    desired_service = models.CharField(max_length=255, blank=True, null=True)
    problem_summary = models.TextField(blank=True, null=True)
    source = models.CharField(
        max_length=20, choices=LeadSource.choices, default=LeadSource.MANUAL
    )
    status = models.CharField(
        max_length=16, choices=LeadStatus.choices, default=LeadStatus.NEW
    )

    class Meta:
        ordering = ["-created_at", "-id"]
        constraints = [
            models.UniqueConstraint(
                fields=["workspace", "phone"],
                condition=Q(phone__isnull=False),
                name="unique_lead_phone_per_workspace",
            ),
        ]

    def __str__(self) -> str:
        return self.display_name or self.phone or f"Lead {self.pk}"

    @property
    def display_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)
