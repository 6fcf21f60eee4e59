"""Domain models for the appointments module."""

from django.db import models
from django.db.models import F, Q

from apps.common.models import TimeStampedModel
from apps.leads.models import Lead
from apps.workspaces.models import Workspace


class AppointmentStatus(models.TextChoices):
    """Possible lifecycle states for an appointment."""

    PROPOSED = "PROPOSED", "Proposed"
    CONFIRMED = "CONFIRMED", "Confirmed"
    CANCELLED = "CANCELLED", "Cancelled"
    COMPLETED = "COMPLETED", "Completed"


class AppointmentQuerySet(models.QuerySet):
    """Custom queryset helpers for appointments."""

    def confirmed(self):
        return self.filter(status=AppointmentStatus.CONFIRMED)

    def starting_between(self, start, end):
        return self.filter(starts_at__gte=start, starts_at__lt=end)


class Appointment(TimeStampedModel):
    """A booked visit of a lead to the garage."""

    workspace = models.ForeignKey(
        Workspace, on_delete=models.CASCADE, related_name="appointments"
    )
    lead = models.ForeignKey(
        Lead, on_delete=models.CASCADE, related_name="appointments"
    )
    status = models.CharField(
        max_length=16,
        choices=AppointmentStatus.choices,
        default=AppointmentStatus.PROPOSED,
    )
    starts_at = models.DateTimeField()
    ends_at = models.DateTimeField()
    duration_minutes = models.PositiveIntegerField()
    notes = models.TextField(blank=True, null=True)

    objects = AppointmentQuerySet.as_manager()

    class Meta:
        ordering = ["-created_at", "-id"]
        constraints = [
            models.CheckConstraint(
                condition=Q(ends_at__gt=F("starts_at")),
                name="appointment_ends_after_start",
            ),
        ]

    def __str__(self) -> str:
        return f"Appointment<{self.pk}> {self.starts_at:%Y-%m-%d %H:%M}"
