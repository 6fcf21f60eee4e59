"""Domain models for the channels module."""

from django.db import models

from apps.common.models import TimeStampedModel
from apps.common.security import seal_token, unseal_token
from apps.workspaces.models import Workspace


class WhatsAppAccount(TimeStampedModel):
    """WhatsApp Cloud API number owned by a workspace.

    Inbound deliveries carry ``metadata.phone_number_id``; that id selects the
    workspace and the credentials used to answer.
    """

    workspace = models.ForeignKey(
        Workspace, on_delete=models.CASCADE, related_name="whatsapp_accounts"
    )
    phone_number_id = models.CharField(max_length=64, unique=True)
    display_phone_number = models.CharField(max_length=32, blank=True)
    access_token = models.TextField(blank=True)

    class Meta:
        ordering = ["workspace_id", "phone_number_id"]

    def __str__(self) -> str:
        return self.display_phone_number or self.phone_number_id

    def save(self, *args, **kwargs):
        self.access_token = seal_token(self.access_token)
        super().save(*args, **kwargs)

    def get_access_token(self) -> str:
        return unseal_token(self.access_token)
