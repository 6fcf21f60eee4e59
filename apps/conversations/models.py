"""Domain models for the conversations module."""

from django.db import models

from apps.leads.models import Lead
from apps.workspaces.models import LanguageChoices, Workspace
from apps.common.models import TimeStampedModel


class ChannelType(models.TextChoices):
    """Where a conversation takes place."""

    WHATSAPP = "WHATSAPP", "WhatsApp"
    INTERNAL = "INTERNAL", "Internal chat"


class MessageDirection(models.TextChoices):
    """Flow direction for a message record."""

    INBOUND = "INBOUND", "Inbound"
    OUTBOUND = "OUTBOUND", "Outbound"


class Conversation(TimeStampedModel):
    """One messaging thread per (workspace, channel, external id)."""

    workspace = models.ForeignKey(
        Workspace, on_delete=models.CASCADE, related_name="conversations"
    )
    channel = models.CharField(
        max_length=16, choices=ChannelType.choices, default=ChannelType.WHATSAPP
    )
    external_id = models.CharField(max_length=255)
    lead = models.ForeignKey(
        Lead,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="conversations",
    )
    language = models.CharField(
        max_length=2, choices=LanguageChoices.choices, blank=True, null=True
    )
    last_flow = models.CharField(max_length=32, blank=True, null=True)
    last_inbound_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["-updated_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["workspace", "channel", "external_id"],
                name="unique_conversation_per_channel_sender",
            ),
        ]

    def __str__(self) -> str:
        return f"Conversation<{self.pk}> {self.channel}:{self.external_id}"


class Message(models.Model):
    """A single inbound or outbound chat line. Rows are write-once."""

    conversation = models.ForeignKey(
        Conversation, on_delete=models.CASCADE, related_name="messages"
    )
    direction = models.CharField(
        max_length=10, choices=MessageDirection.choices, db_index=True
    )
    text = models.TextField(blank=True, null=True)
    external_message_id = models.CharField(max_length=255, blank=True, null=True)
    raw_payload = models.JSONField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["created_at", "id"]

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValueError("Messages are immutable once stored.")
        super().save(*args, **kwargs)
