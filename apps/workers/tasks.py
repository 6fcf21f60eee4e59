"""Celery tasks for appointment reminders."""

from __future__ import annotations

import logging
from datetime import timedelta

from celery import shared_task
from django.conf import settings
from django.db import IntegrityError, transaction
from django.db.models import F
from django.utils import timezone

from apps.appointments.models import Appointment
from apps.conversations.models import ChannelType, Conversation
from apps.notifications.models import Notification, NotificationType

logger = logging.getLogger(__name__)

REMINDER_LOOKAHEAD = timedelta(hours=24)


def _session_window() -> timedelta:
    return timedelta(hours=int(getattr(settings, "WHATSAPP_SESSION_WINDOW_HOURS", 24)))


def _within_session_window(conversation: Conversation | None, now) -> bool:
    if conversation is None or conversation.last_inbound_at is None:
        return False
    return now - conversation.last_inbound_at <= _session_window()


def _reminder_message(appointment: Appointment) -> str:
    lead = appointment.lead
    name = lead.display_name or lead.phone or f"#{lead.id}"
    return (
        f"Appointment for {name} on {appointment.starts_at:%Y-%m-%d %H:%M} UTC cannot be "
        "reminded on WhatsApp: the customer has not written in the last "
        f"{int(_session_window().total_seconds() // 3600)} hours."
    )


@shared_task
def flag_out_of_window_reminders() -> int:
    """Warn staff about confirmed appointments a free-form WhatsApp reminder cannot reach.

    Outside the customer-service window only approved templates may be sent,
    so the garage has to reach out another way. Returns the number of
    notifications created.
    """

    now = timezone.now()
    upcoming = (
        Appointment.objects.confirmed()
        .starting_between(now, now + REMINDER_LOOKAHEAD)
        .select_related("lead")
        .exclude(notifications__type=NotificationType.REMINDER_OUT_OF_WINDOW)
    )

    created = 0
    for appointment in upcoming:
        conversation = (
            Conversation.objects.filter(
                workspace_id=appointment.workspace_id,
                channel=ChannelType.WHATSAPP,
                lead_id=appointment.lead_id,
            )
            .order_by(F("last_inbound_at").desc(nulls_last=True))
            .first()
        )
        if _within_session_window(conversation, now):
            continue
        try:
            with transaction.atomic():
                Notification.objects.create(
                    workspace_id=appointment.workspace_id,
                    lead_id=appointment.lead_id,
                    appointment=appointment,
                    type=NotificationType.REMINDER_OUT_OF_WINDOW,
                    message=_reminder_message(appointment),
                )
        except IntegrityError:
            continue
        created += 1
        logger.info(
            "reminders.out_of_window",
            extra={"appointment_id": appointment.id, "workspace_id": appointment.workspace_id},
        )
    return created
