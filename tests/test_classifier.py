import itertools

import pytest

from apps.dialog.classifier import (
    REPLIES,
    Flow,
    Language,
    classify,
    detect_flow,
    detect_language,
    run_orchestrator,
)


@pytest.mark.parametrize(
    "text",
    [
        "مرحبا، أريد موعد",
        "Bonjour مرحبا",
        "brake noise شكرا",
    ],
)
def test_arabic_letters_win_over_other_hints(text):
    assert detect_language(text) == Language.ARABIC


@pytest.mark.parametrize(
    "text",
    [
        "Bonjour",
        "SALUT, ma VOITURE est sale",
        "je veux un rdv",
        "nettoyage interieur svp",
        "J'ai une vibration",
        "probleme d'acceleration",
    ],
)
def test_french_hints_are_case_insensitive(text):
    assert detect_language(text) == Language.FRENCH


@pytest.mark.parametrize("text", ["Hello there", "", "1234", "Can I book for tomorrow?"])
def test_english_is_the_fallback_language(text):
    assert detect_language(text) == Language.ENGLISH


def test_mechanical_beats_detailing_and_booking():
    assert detect_flow("Need to book a polish, also my brake squeaks") == Flow.MECHANICAL


def test_detailing_beats_booking():
    assert detect_flow("Book a ceramic coating appointment") == Flow.DETAILING


@pytest.mark.parametrize(
    "text,flow",
    [
        ("engine light is on", Flow.MECHANICAL),
        ("bruit bizarre", Flow.MECHANICAL),
        ("PPF for my new car", Flow.DETAILING),
        ("lustrage complet", Flow.DETAILING),
        ("I want an appointment", Flow.DIRECT_BOOKING),
        ("what are your prices?", Flow.DIRECT_BOOKING),
    ],
)
def test_flow_keywords(text, flow):
    assert detect_flow(text) == flow


def test_reply_table_covers_every_language_and_flow():
    for language, flow in itertools.product(Language, Flow):
        sentences = REPLIES[(language, flow)]
        assert len(sentences) == 4
        assert all(sentence.strip() for sentence in sentences)


def test_french_mechanical_reply():
    result = run_orchestrator("Bonjour, j'ai un problème de frein")

    assert result.language == Language.FRENCH
    assert result.flow == Flow.MECHANICAL
    assert result.reply.startswith("Merci, j’ai bien noté que vous avez un souci mécanique. ")
    assert result.reply.endswith(
        "Les tarifs et le diagnostic définitifs seront confirmés après inspection par notre équipe."
    )


def test_reply_does_not_echo_the_customer_text():
    result = run_orchestrator("my secret plate ABC123 needs a polish")
    assert "ABC123" not in result.reply
    assert result.reply == " ".join(REPLIES[(Language.ENGLISH, Flow.DETAILING)])


def test_classify_returns_both_axes():
    classification = classify("شكرا، عندي مشكلة في engine")
    assert classification.language == Language.ARABIC
    assert classification.flow == Flow.MECHANICAL
