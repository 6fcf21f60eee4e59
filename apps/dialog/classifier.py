"""Rule-based language and flow detection for inbound customer messages."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple


class Language(str, Enum):
    ENGLISH = "en"
    FRENCH = "fr"
    ARABIC = "ar"


class Flow(str, Enum):
    DIRECT_BOOKING = "A_RDV_DIRECT"
    DETAILING = "B_DETAILING_PPF"
    MECHANICAL = "C_MECHANICAL"


@dataclass(frozen=True)
class Classification:
    language: Language
    flow: Flow


@dataclass(frozen=True)
class OrchestratorResult:
    reply: str
    language: Language
    flow: Flow


ARABIC_LETTERS = re.compile("[ء-ي]")

FRENCH_HINTS = (
    "bonjour",
    "salut",
    "voiture",
    "rdv",
    "rendez-vous",
    "nettoyage",
    "intérieur",
    "interieur",
    "extérieur",
    "exterieur",
    "problème",
    "probleme",
    "moteur",
    "frein",
    "freins",
    "vibration",
    "vibrations",
    "accélération",
    "acceleration",
    "j'ai",
    "j ai",
)

# Order matters: the first group with a hit decides the flow.
FLOW_KEYWORDS: Tuple[Tuple[Flow, Tuple[str, ...]], ...] = (
    (
        Flow.MECHANICAL,
        (
            "noise",
            "vibration",
            "engine",
            "brakes",
            "brake",
            "check engine",
            "probleme moteur",
            "problème moteur",
            "bruit",
            "moteur",
            "frein",
        ),
    ),
    (
        Flow.DETAILING,
        (
            "detail",
            "detailing",
            "ppf",
            "polish",
            "ceramic",
            "ceramique",
            "céramique",
            "lustrage",
            "polissage",
            "film",
        ),
    ),
    (Flow.DIRECT_BOOKING, ("rdv", "appointment", "book")),
)

SAFETY_EN = "Final pricing and the definitive diagnosis will be confirmed after inspection by our team."
SAFETY_FR = "Les tarifs et le diagnostic définitifs seront confirmés après inspection par notre équipe."
SAFETY_AR = "سيتم تأكيد الأسعار والتشخيص النهائي بعد فحص السيارة من قِبَل فريقنا."

REPLIES: Dict[Tuple[Language, Flow], Tuple[str, str, str, str]] = {
    (Language.ENGLISH, Flow.DIRECT_BOOKING): (
        "Thank you, I can help you book an appointment.",
        "Please confirm the service you want and your car make, model and year.",
        "Would you like to add our premium add-on for this service? Most clients choose it for better, longer-lasting results.",
        SAFETY_EN,
    ),
    (Language.ENGLISH, Flow.DETAILING): (
        "Thank you for your message. I can help you with your detailing / PPF request.",
        "Please send your car make, model and year, plus 2–3 photos of the vehicle.",
        "Would you like to add our premium add-on for this service? Most clients choose it for better, longer-lasting results and extra protection.",
        SAFETY_EN,
    ),
    (Language.ENGLISH, Flow.MECHANICAL): (
        "Got it, you are describing a mechanical issue.",
        "Please describe the symptoms, how urgent it is, and, if possible, send a short video showing the noise or vibration.",
        "Would you like to add our premium add-on (a preventive full check on top of your request)? Most clients choose it to keep the car safer and more reliable.",
        SAFETY_EN,
    ),
    (Language.FRENCH, Flow.DIRECT_BOOKING): (
        "Merci, je peux vous aider à planifier un rendez-vous.",
        "Pouvez-vous me préciser le service souhaité ainsi que la marque, le modèle et l’année de votre véhicule ?",
        "Souhaitez-vous ajouter notre option premium sur ce service ? La plupart de nos clients la choisissent pour un meilleur résultat et une tenue plus longue.",
        SAFETY_FR,
    ),
    (Language.FRENCH, Flow.DETAILING): (
        "Merci pour votre message. Je peux vous aider pour votre demande de detailing / PPF.",
        "Pouvez-vous m’indiquer la marque, le modèle et l’année du véhicule, puis envoyer 2–3 photos ?",
        "Souhaitez-vous ajouter notre option premium sur ce service ? La plupart de nos clients la prennent pour un résultat plus durable et une meilleure protection.",
        SAFETY_FR,
    ),
    (Language.FRENCH, Flow.MECHANICAL): (
        "Merci, j’ai bien noté que vous avez un souci mécanique.",
        "Pouvez-vous décrire les symptômes, l’urgence, et envoyer une courte vidéo si un bruit ou une vibration est présent ?",
        "Souhaitez-vous ajouter notre option premium (contrôle préventif complet en plus de votre demande) ? La plupart de nos clients la choisissent pour sécuriser le véhicule.",
        SAFETY_FR,
    ),
    (Language.ARABIC, Flow.DIRECT_BOOKING): (
        "شكرًا لك، يمكنني مساعدتك في حجز موعد.",
        "من فضلك أخبرني بالخدمة المطلوبة مع نوع السيارة، الموديل وسنة الصنع.",
        "هل ترغب في إضافة باقة الترقية المميزة لهذه الخدمة؟ أغلب عملائنا يختارونها لنتيجة أفضل تدوم لفترة أطول.",
        SAFETY_AR,
    ),
    (Language.ARABIC, Flow.DETAILING): (
        "شكرًا لرسالتك، يمكنني مساعدتك في خدمة التلميع / الحماية PPF.",
        "من فضلك أرسل نوع السيارة، الموديل، سنة الصنع، مع 2–3 صور للسيارة.",
        "هل ترغب في إضافة باقة الترقية المميزة لهذا النوع من الخدمة؟ أغلب عملائنا يختارونها لنتيجة أفضل وحماية تدوم أطول.",
        SAFETY_AR,
    ),
    (Language.ARABIC, Flow.MECHANICAL): (
        "تم استلام طلبك بخصوص مشكلة ميكانيكية.",
        "من فضلك صف الأعراض ودرجة الاستعجال، وإن أمكن أرسل فيديو قصير يوضح الصوت أو الاهتزاز.",
        "هل ترغب في إضافة باقة الترقية المميزة (فحص وقائي كامل مع خدمتك)؟ أغلب العملاء يختارونها لزيادة الأمان.",
        SAFETY_AR,
    ),
}


def detect_language(text: str) -> Language:
    raw = text or ""
    if ARABIC_LETTERS.search(raw):
        return Language.ARABIC
    lowered = raw.lower()
    if any(hint in lowered for hint in FRENCH_HINTS):
        return Language.FRENCH
    return Language.ENGLISH


def detect_flow(text: str) -> Flow:
    lowered = (text or "").lower()
    for flow, keywords in FLOW_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return flow
    return Flow.DIRECT_BOOKING


def classify(text: str) -> Classification:
    return Classification(language=detect_language(text), flow=detect_flow(text))


def build_reply(language: Language, flow: Flow) -> str:
    return " ".join(REPLIES[(language, flow)])


def run_orchestrator(text: str) -> OrchestratorResult:
    """Classify ``text`` and pick the canned reply for its language and flow."""

    result = classify(text)
    return OrchestratorResult(
        reply=build_reply(result.language, result.flow),
        language=result.language,
        flow=result.flow,
    )
