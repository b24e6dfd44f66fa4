import json
import sys
from pathlib import Path

import pytest


PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from pawsignal.config import DEFAULT_SIGNALS_PATH, EnvKey  # noqa: E402
from pawsignal.engine import SignalInterpreter  # noqa: E402
from pawsignal.engine_conf import EngineConfig  # noqa: E402
from pawsignal.signals import SignalDatabase, SignalRecord  # noqa: E402


def make_record(id, label, emotion, intensity=3, description="", interpretation=None):
    return SignalRecord(
        id=id,
        label=label,
        description=description,
        probable_emotion=emotion,
        intensity=intensity,
        prioritized_interpretation=interpretation or f"{label} interpretation",
    )


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch):
    monkeypatch.delenv(EnvKey.SIGNALS_PATH, raising=False)
    monkeypatch.delenv(EnvKey.CONFIG_PATH, raising=False)


@pytest.fixture(scope="session")
def bundled_database():
    return SignalDatabase.from_path(DEFAULT_SIGNALS_PATH)


@pytest.fixture
def interpreter(bundled_database):
    return SignalInterpreter(bundled_database, EngineConfig())


@pytest.fixture
def write_signals(tmp_path):
    """Write a JSON payload to a temporary database file and return its path."""
    def _write(payload, name="signals.json"):
        path = tmp_path / name
        if isinstance(payload, str):
            path.write_text(payload, encoding="utf-8")
        else:
            path.write_text(json.dumps(payload), encoding="utf-8")
        return path
    return _write


@pytest.fixture
def scenario_a():
    return {
        "posture": "tense rigid body",
        "tail": "rigid held high",
        "ears": "back",
        "eyes": "fixed stare",
        "mouth": "baring teeth",
        "movements": "frozen",
        "sounds": "growling",
    }


@pytest.fixture
def scenario_b():
    return {
        "posture": "crouched low",
        "tail": "tucked between legs",
        "ears": "pinned back",
        "eyes": "half-closed avoiding contact",
        "mouth": "closed tense",
        "movements": "still",
        "sounds": "none",
    }


@pytest.fixture
def scenario_c():
    return {
        "posture": "chest down, hips up",
        "tail": "wagging side to side",
        "ears": "forward",
        "eyes": "bright",
        "mouth": "open tongue out",
        "movements": "bouncy",
        "sounds": "none",
    }


@pytest.fixture
def scenario_d():
    return {field: "undetermined" for field in (
        "posture", "tail", "ears", "eyes", "mouth", "movements", "sounds"
    )}
