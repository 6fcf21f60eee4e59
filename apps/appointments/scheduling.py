"""Canned appointment proposals sent with every automatic reply."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time, timedelta
from typing import Iterable, List, Sequence
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from django.utils import timezone

from apps.workspaces.config import resolve_timezone_name

SLOT_HOURS = (10, 14, 17)
SLOT_DURATION = timedelta(minutes=30)

WEEKDAYS = {
    "en": ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"),
    "fr": ("lun.", "mar.", "mer.", "jeu.", "ven.", "sam.", "dim."),
    "ar": ("الاثنين", "الثلاثاء", "الأربعاء", "الخميس", "الجمعة", "السبت", "الأحد"),
}
DAY_PERIODS = {
    "en": ("AM", "PM"),
    "ar": ("ص", "م"),
}

INTRO_LINES = {
    "en": "Here are 3 suggested slots over the next days (local time):",
    "fr": "Voici 3 créneaux proposés sur les prochains jours (heure locale) :",
    "ar": "هذه 3 أوقات متاحة في الأيام القادمة (حسب توقيت المركز):",
}
PRIORITY_LINES = {
    "en": "If none of these slots work for you, I can ask our team for a priority option.",
    "fr": "Si aucun de ces créneaux ne vous convient, je peux demander une option prioritaire à notre équipe.",
    "ar": "إذا لم تناسبك أي من هذه الأوقات، يمكنني طلب خيار أولوية من فريقنا.",
}


class InvalidTimeZone(ValueError):
    """Raised for time zone names the IANA database does not know."""


@dataclass(frozen=True)
class GeneratedSlot:
    start: datetime
    end: datetime
    label: str


def load_zone(timezone_name: str | None) -> ZoneInfo:
    """Blank names fall back to the workspace default; unknown names raise."""

    name = resolve_timezone_name(timezone_name)
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise InvalidTimeZone(f"Unknown time zone: {name!r}") from exc


def _label(value: datetime) -> str:
    # en-GB short form, e.g. "Wed 21/10, 10:00"
    return f"{WEEKDAYS['en'][value.weekday()]} {value:%d/%m}, {value:%H:%M}"


def generate_default_slots(timezone_name: str | None, now: datetime | None = None) -> List[GeneratedSlot]:
    """Three 30 minute slots: tomorrow 10:00, in two days 14:00, in three days 17:00."""

    zone = load_zone(timezone_name)
    local_now = (now or timezone.now()).astimezone(zone)
    slots: List[GeneratedSlot] = []
    for day_offset, hour in enumerate(SLOT_HOURS, start=1):
        day = local_now.date() + timedelta(days=day_offset)
        start = datetime.combine(day, time(hour=hour), tzinfo=zone)
        slots.append(GeneratedSlot(start=start, end=start + SLOT_DURATION, label=_label(start)))
    return slots


def _render_slot(language: str, value: datetime) -> str:
    weekday = WEEKDAYS[language][value.weekday()]
    if language == "fr":
        return f"{weekday} {value:%d/%m} {value:%H:%M}"
    period = DAY_PERIODS[language][0 if value.hour < 12 else 1]
    if language == "ar":
        return f"{weekday}، {value:%d/%m}، {value:%I:%M} {period}"
    return f"{weekday}, {value:%m/%d}, {value:%I:%M} {period}"


def normalize_language(language: str | None) -> str:
    code = getattr(language, "value", language)
    return code if code in INTRO_LINES else "en"


def format_slots_text(
    language: str | None,
    slots: Sequence[GeneratedSlot] | Iterable[GeneratedSlot],
    timezone_name: str | None = None,
) -> str:
    """Render ``slots`` as the bulleted proposal appended to a reply.

    French uses a 24-hour clock, English and Arabic a 12-hour one. Times are
    shown in ``timezone_name`` (default zone when blank).
    """

    slots = list(slots or [])
    if not slots:
        return ""
    code = normalize_language(language)
    zone = load_zone(timezone_name)
    bullets = [f"- {_render_slot(code, slot.start.astimezone(zone))}" for slot in slots]
    return "\n".join([INTRO_LINES[code], *bullets, PRIORITY_LINES[code]])
