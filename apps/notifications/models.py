"""Internal operational alerts shown to garage staff."""

from django.db import models

from apps.common.models import TimeStampedModel
from apps.leads.models import Lead
from apps.workspaces.models import Workspace


class NotificationType(models.TextChoices):
    WHATSAPP_SEND_FAILED = "WHATSAPP_SEND_FAILED", "WhatsApp send failed"
    REMINDER_OUT_OF_WINDOW = "REMINDER_OUT_OF_WINDOW", "Reminder outside session window"
    SYSTEM = "SYSTEM", "System"


class NotificationStatus(models.TextChoices):
    NEW = "NEW", "New"
    READ = "READ", "Read"


class Notification(TimeStampedModel):
    workspace = models.ForeignKey(
        Workspace, on_delete=models.CASCADE, related_name="notifications"
    )
    lead = models.ForeignKey(
        Lead,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="notifications",
    )
    type = models.CharField(max_length=32, choices=NotificationType.choices)
    message = models.TextField()
    status = models.CharField(
        max_length=8, choices=NotificationStatus.choices, default=NotificationStatus.NEW
    )
    # Set for reminder alerts so a sweep never flags the same appointment twice.
    appointment = models.ForeignKey(
        "appointments.Appointment",
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="notifications",
    )

    class Meta:
        ordering = ["-created_at", "-id"]
        constraints = [
            models.UniqueConstraint(
                fields=["appointment", "type"],
                condition=models.Q(appointment__isnull=False),
                name="unique_notification_per_appointment_type",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.type} ({self.status})"

    def mark_read(self) -> bool:
        """Move NEW to READ. Returns False when the notification was already read."""
        if self.status == NotificationStatus.READ:
            return False
        self.status = NotificationStatus.READ
        self.save(update_fields=["status", "updated_at"])
        return True
