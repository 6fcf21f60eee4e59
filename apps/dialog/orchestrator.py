"""Coordinates lead upsert, classification, slot proposals and the WhatsApp reply."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from django.core.exceptions import ImproperlyConfigured
from django.utils import timezone

from apps.appointments.scheduling import format_slots_text, generate_default_slots
from apps.channels.models import WhatsAppAccount
from apps.channels.payloads import ParsedWhatsAppMessage
from apps.channels.services import WhatsAppDeliveryError, send_whatsapp_text
from apps.common.utils import split_display_name
from apps.conversations.models import ChannelType, Conversation, Message, MessageDirection
from apps.dialog.classifier import OrchestratorResult, run_orchestrator
from apps.leads.models import Lead, LeadSource
from apps.leads.utils import normalize_phone
from apps.notifications.models import Notification, NotificationType
from apps.workspaces.models import Workspace

logger = logging.getLogger(__name__)

INTERNAL_CHAT_EXTERNAL_ID = "internal-chat"


@dataclass
class ReplyOutcome:
    conversation: Conversation
    result: OrchestratorResult
    reply: str
    inbound: Message
    outbound: Message
    lead: Optional[Lead] = None
    notification: Optional[Notification] = None

    @property
    def delivered(self) -> bool:
        return bool(self.outbound.external_message_id)


def compose_reply(result: OrchestratorResult, workspace: Workspace, now: datetime | None = None) -> str:
    """Canned reply plus the three proposed slots in the workspace time zone."""

    slots = generate_default_slots(workspace.timezone, now=now)
    slots_text = format_slots_text(result.language, slots, workspace.timezone)
    return "\n\n".join(part for part in (result.reply, slots_text) if part)


def send_failure_message(lead: Lead) -> str:
    return f"WhatsApp send failed for lead {lead.first_name or ''} {lead.last_name or ''} ({lead.phone})."


class DialogOrchestrator:
    """Main entrypoint for inbound message handling."""

    def upsert_lead(self, workspace: Workspace, parsed: ParsedWhatsAppMessage) -> Lead:
        first_name, last_name = split_display_name(parsed.name)
        lead, _ = Lead.objects.get_or_create(
            workspace=workspace,
            phone=normalize_phone(parsed.wa_id) or parsed.wa_id,
            defaults={
                "first_name": first_name,
                "last_name": last_name,
                "source": LeadSource.WHATSAPP,
            },
        )
        return lead

    def upsert_conversation(
        self,
        workspace: Workspace,
        channel: str,
        external_id: str,
        lead: Lead | None = None,
    ) -> Conversation:
        conversation, created = Conversation.objects.get_or_create(
            workspace=workspace,
            channel=channel,
            external_id=external_id,
            defaults={"lead": lead},
        )
        if not created and lead is not None and conversation.lead_id is None:
            conversation.lead = lead
            conversation.save(update_fields=["lead", "updated_at"])
        return conversation

    def _record_turn(
        self,
        conversation: Conversation,
        text: str,
        *,
        external_message_id: str | None = None,
        raw_payload: Any = None,
    ) -> tuple[OrchestratorResult, str, Message]:
        result = run_orchestrator(text)
        reply = compose_reply(result, conversation.workspace)

        conversation.language = result.language.value
        conversation.last_flow = result.flow.value
        conversation.last_inbound_at = timezone.now()
        conversation.save(update_fields=["language", "last_flow", "last_inbound_at", "updated_at"])

        inbound = Message.objects.create(
            conversation=conversation,
            direction=MessageDirection.INBOUND,
            text=text,
            external_message_id=external_message_id,
            raw_payload=raw_payload,
        )
        return result, reply, inbound

    def handle_whatsapp(
        self,
        workspace: Workspace,
        parsed: ParsedWhatsAppMessage,
        raw_payload: Any,
        account: WhatsAppAccount | None = None,
    ) -> ReplyOutcome:
        lead = self.upsert_lead(workspace, parsed)
        conversation = self.upsert_conversation(
            workspace, ChannelType.WHATSAPP, parsed.wa_id, lead=lead
        )
        result, reply, inbound = self._record_turn(
            conversation,
            parsed.text,
            external_message_id=parsed.wa_message_id,
            raw_payload=raw_payload,
        )

        outbound_id: str | None = None
        notification: Notification | None = None
        try:
            outbound_id = send_whatsapp_text(parsed.wa_id, reply, account=account)
        except (WhatsAppDeliveryError, ImproperlyConfigured) as exc:
            logger.error(
                "whatsapp.send_failed",
                extra={
                    "workspace_id": workspace.id,
                    "lead_id": lead.id,
                    "status_code": getattr(exc, "status_code", None),
                    "provider_body": getattr(exc, "body", None),
                    "error": str(exc),
                },
            )
            notification = Notification.objects.create(
                workspace=workspace,
                lead=lead,
                type=NotificationType.WHATSAPP_SEND_FAILED,
                message=send_failure_message(lead),
            )

        outbound = Message.objects.create(
            conversation=conversation,
            direction=MessageDirection.OUTBOUND,
            text=reply,
            external_message_id=outbound_id,
        )
        logger.info(
            "whatsapp.reply_recorded",
            extra={
                "conversation_id": conversation.id,
                "language": result.language.value,
                "flow": result.flow.value,
                "delivered": outbound_id is not None,
            },
        )
        return ReplyOutcome(
            conversation=conversation,
            result=result,
            reply=reply,
            inbound=inbound,
            outbound=outbound,
            lead=lead,
            notification=notification,
        )

    def handle_internal(self, workspace: Workspace, text: str) -> ReplyOutcome:
        """Run the same auto-reply on the staff simulator thread; nothing leaves the app."""

        conversation = self.upsert_conversation(
            workspace, ChannelType.INTERNAL, INTERNAL_CHAT_EXTERNAL_ID
        )
        result, reply, inbound = self._record_turn(conversation, text)
        outbound = Message.objects.create(
            conversation=conversation,
            direction=MessageDirection.OUTBOUND,
            text=reply,
        )
        return ReplyOutcome(
            conversation=conversation,
            result=result,
            reply=reply,
            inbound=inbound,
            outbound=outbound,
        )

    def internal_conversation(self, workspace: Workspace) -> Conversation | None:
        return Conversation.objects.filter(
            workspace=workspace,
            channel=ChannelType.INTERNAL,
            external_id=INTERNAL_CHAT_EXTERNAL_ID,
        ).first()
