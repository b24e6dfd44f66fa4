import json

import pytest

from pawsignal.engine import SignalInterpreter, create_interpreter
from pawsignal.engine.detectors import PLAY_BOW_TRANSLATION
from pawsignal.engine.synthesizer import UNCLEAR_TRANSLATION
from pawsignal.engine_conf import EngineConfig
from pawsignal.signals import ObservationDescription, SignalDatabase

from conftest import make_record


def test_aggressive_scenario(interpreter, scenario_a):
    result = interpreter.interpret(scenario_a)
    assert result.emotion == "aggressive"
    assert result.confidence > 80
    assert result.method == "signal-matrix"
    assert result.translation.startswith("Back off!")
    assert result.context == "aggression, warning"


def test_fearful_scenario(interpreter, scenario_b):
    result = interpreter.interpret(scenario_b)
    assert result.emotion == "fearful"
    assert result.success
    matched = interpreter.match(scenario_b)
    assert {s.id for s in matched} == {18, 19, 20, 21, 24}


def test_play_bow_scenario(interpreter, scenario_c):
    result = interpreter.interpret(scenario_c)
    assert result.emotion == "playful"
    assert result.confidence == 95
    assert result.translation == PLAY_BOW_TRANSLATION
    assert result.method == "play-bow"
    assert "Posture: chest down, hips up." in result.behavior


def test_undetermined_scenario(interpreter, scenario_d):
    assert interpreter.match(scenario_d) == []
    result = interpreter.interpret(scenario_d)
    assert result.emotion == "neutral"
    assert result.confidence == 30
    assert result.translation == UNCLEAR_TRANSLATION


def test_happy_description(interpreter):
    result = interpreter.interpret({
        "posture": "loose, relaxed body",
        "eyes": "soft, squinting",
        "mouth": "slightly open, tongue visible",
    })
    assert result.emotion == "happy"
    assert result.translation.startswith("Life is good right now.")


def test_play_bow_with_tension_goes_through_matching(interpreter):
    result = interpreter.interpret({"posture": "chest down, hips up", "eyes": "fixed stare"})
    assert result.method == "signal-matrix"
    # the play-bow record still matches but the suppressed override is not re-applied
    matched = interpreter.match({"posture": "chest down, hips up", "eyes": "fixed stare"})
    assert "Play bow" in [s.label for s in matched]
    assert result.emotion == "aggressive"


def test_tense_play_bow_is_aggressive(interpreter):
    description = {"posture": "chest down, hips up, rigid, tense", "mouth": "bared teeth"}
    detection = interpreter.detector.detect(ObservationDescription(**description))
    assert not detection.is_play_bow
    assert detection.suppressed_by == "rigid"

    result = interpreter.interpret(description)
    assert result.method == "signal-matrix"
    assert result.emotion == "aggressive"
    assert result.translation.startswith(("Back off!", "I'm on high alert"))

    # the classifier alone reaches the same verdict
    bucket = interpreter.classify(interpreter.match(description))
    assert bucket.emotion.value == "aggressive"


def test_play_bow_survives_growling(interpreter):
    result = interpreter.interpret({"posture": "chest on the ground", "tail": "wagging", "sounds": "growling"})
    assert result.method == "play-bow"
    assert result.emotion == "playful"
    assert result.confidence == 95


def test_dog_asking_for_a_treat(interpreter):
    result = interpreter.interpret({
        "eyes": "eye contact with the owner",
        "mouth": "drooling",
        "movements": "paw raised",
    })
    assert result.method == "reward-pattern"
    assert result.pattern == "full_demand"
    assert result.emotion == "demanding"
    assert result.confidence == 95
    assert "Movements: paw raised." in result.behavior


def test_growling_cancels_the_reward_pattern(interpreter):
    result = interpreter.interpret({"eyes": "eye contact", "movements": "paw raised", "sounds": "growling"})
    assert result.method == "signal-matrix"
    assert result.emotion == "aggressive"
    assert result.pattern is None


def test_reward_pattern_never_overrides_a_play_bow(interpreter, scenario_c):
    result = interpreter.interpret(dict(scenario_c, movements="paw raised"))
    assert result.method == "play-bow"


@pytest.mark.parametrize("fixture, situation, expected", [
    ("scenario_b", {"place": "vet"}, "amplifies"),
    ("scenario_c", {"lugar": "casa"}, "confirms"),
    ("scenario_a", {"interaction": "unfamiliar dog at the park"}, "requires_caution"),
    ("scenario_a", {"place": "vet"}, "neutral"),
])
def test_situation_sets_context_impact(interpreter, request, fixture, situation, expected):
    description = request.getfixturevalue(fixture)
    plain = interpreter.interpret(description)
    result = interpreter.interpret(description, situation)
    assert result.context_impact == expected
    assert plain.context_impact == "neutral"
    # the situation never changes the interpretation itself
    assert dict(result.model_dump(), context_impact="neutral") == plain.model_dump()


def test_spanish_keys(interpreter):
    result = interpreter.interpret({"postura": "pecho en el suelo", "cola": "moviendo"})
    assert result.method == "play-bow"


def test_interpret_is_idempotent(interpreter, scenario_b):
    first = interpreter.interpret(scenario_b).model_dump()
    second = interpreter.interpret(ObservationDescription(**scenario_b)).model_dump()
    assert first == second


def test_added_matching_field_never_lowers_bucket_score(interpreter, scenario_b):
    partial = dict(scenario_b, ears="undetermined")
    partial_bucket = interpreter.classify(interpreter.match(partial))
    full_bucket = interpreter.classify(interpreter.match(scenario_b))
    assert partial_bucket.emotion == full_bucket.emotion
    assert full_bucket.score > partial_bucket.score


def test_aggression_in_matched_set_is_always_aggressive(interpreter):
    result = interpreter.interpret({"posture": "rigid, tense", "mouth": "bared teeth"})
    assert result.emotion == "aggressive"


def test_internal_failure_returns_fallback(interpreter, monkeypatch, scenario_b):
    def broken(_description):
        raise RuntimeError("matcher exploded")

    monkeypatch.setattr(interpreter.matcher, "match", broken)
    result = interpreter.interpret(scenario_b)
    assert result.success
    assert result.method == "fallback"
    assert result.confidence == 20
    assert result.emotion == "neutral"


def test_malformed_description_returns_fallback(interpreter):
    result = interpreter.interpret(["not", "a", "mapping"])
    assert result.method == "fallback"


def test_empty_database_never_matches():
    interpreter = SignalInterpreter(SignalDatabase.from_records([]))
    result = interpreter.interpret({"posture": "crouched low"})
    assert result.method == "no-match"


def test_analyze_parses_captioning_answer(interpreter):
    answer = "```json\n" + json.dumps({
        "posture": "crouched low",
        "tail": "tucked between legs",
        "sounds": "none",
    }) + "\n```"
    analysis = interpreter.analyze(answer)
    assert analysis["analysis_method"] == "signal-matrix"
    assert analysis["emotion"] == "fearful"
    assert analysis["objective_description"]["posture"] == "crouched low"


def test_analyze_with_situation(interpreter):
    answer = json.dumps({"posture": "crouched low", "tail": "tucked between legs"})
    analysis = interpreter.analyze(answer, {"place": "veterinarian"})
    assert analysis["emotion"] == "fearful"
    assert analysis["context_impact"] == "amplifies"


def test_analyze_unusable_answer(interpreter):
    analysis = interpreter.analyze("Sorry, I cannot see an animal in this image.")
    assert analysis["emotion"] == "neutral"
    assert analysis["confidence"] == 30
    assert analysis["objective_description"]["tail"] == "tail undetermined"


def test_create_interpreter_with_custom_database(write_signals):
    path = write_signals([
        make_record(1, "Tail tucked", "fear, submission", 4,
                    description="Tail tucked between legs").model_dump(),
    ])
    interpreter = create_interpreter(EngineConfig(signals_path=str(path)))
    assert len(interpreter.database) == 1
    assert interpreter.interpret({"tail": "tucked between legs"}).emotion == "fearful"


def test_create_interpreter_with_injected_database():
    database = SignalDatabase.from_records([make_record(7, "Head tilt", "curiosity", 2)])
    interpreter = create_interpreter(EngineConfig(), database=database)
    assert interpreter.database is database
    assert interpreter.interpret({"posture": "head tilt"}).emotion == "curious"


def test_create_interpreter_rejects_invalid_config():
    database = SignalDatabase.from_records([])
    with pytest.raises(ValueError, match="confidence_base"):
        create_interpreter(EngineConfig(confidence_base="50"), database=database)


@pytest.mark.parametrize("field", ["posture", "tail", "ears", "eyes", "mouth", "movements", "sounds"])
def test_single_placeholder_field(interpreter, field):
    result = interpreter.interpret({field: "not clearly visible"})
    assert result.method == "no-match"
