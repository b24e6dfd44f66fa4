import json

import pytest

from pawsignal.parsing import DescriptionParser, format_report, parse_description
from pawsignal.signals import InterpretationResult, ObservationDescription


def test_plain_json():
    text = json.dumps({"posture": "crouched low", "tail": "tucked"})
    description = DescriptionParser.parse_model_output(text)
    assert description.posture == "crouched low"
    assert description.tail == "tucked"
    assert description.ears is None


def test_fenced_json():
    text = '```json\n{"ears": "pinned back", "sounds": "none"}\n```'
    description = DescriptionParser.parse_model_output(text)
    assert description.ears == "pinned back"
    assert description.sounds == "none"


def test_json_embedded_in_prose():
    text = 'Here is what I see: {"eyes": "half-closed", "mouth": "closed"} Hope that helps.'
    description = DescriptionParser.parse_model_output(text)
    assert description.eyes == "half-closed"


def test_spanish_keys():
    text = json.dumps({"postura": "pecho en el suelo", "cola": "moviendo", "sonidos": "ninguno"})
    description = DescriptionParser.parse_model_output(text)
    assert description.posture == "pecho en el suelo"
    assert description.tail == "moviendo"
    assert description.sounds == "ninguno"


def test_list_values_are_joined():
    description = DescriptionParser.parse_model_output(json.dumps({"movements": ["spinning", "jumping"]}))
    assert description.movements == "spinning, jumping"


def test_unusable_answer_falls_back_to_undetermined():
    description = parse_description("I can't tell, the image is too dark.")
    assert description.posture == "posture undetermined"
    assert description.is_empty()


def test_json_without_known_keys_falls_back():
    description = parse_description(json.dumps({"caption": "a dog in a park"}))
    assert description.is_empty()


def test_strict_mode_raises():
    with pytest.raises(ValueError):
        DescriptionParser.parse_model_output("no json here", strict=True)


def test_format_report():
    result = InterpretationResult(
        translation="I'm scared. Please give me some space.",
        confidence=85,
        emotion="fearful",
        context="fear, submission",
        recommendation="The interpretation is reliable. You can act on it.",
    )
    report = format_report(result, ObservationDescription(tail="tucked between legs"))
    assert "Tail:" in report
    assert "tucked between legs" in report
    assert "Confidence: 85%" in report
    assert "[Recommendation]" in report
    assert "Posture:" not in report


def test_format_report_shows_pattern_and_situation():
    result = InterpretationResult(
        translation="Food! Food! Food!",
        confidence=75,
        emotion="demanding",
        method="reward-pattern",
        pattern="food_desire",
        context_impact="confirms",
    )
    report = format_report(result)
    assert "Pattern:    food_desire" in report
    assert "Situation:  confirms" in report
    assert "Situation:" not in format_report(result.model_copy(update={"context_impact": "neutral"}))
