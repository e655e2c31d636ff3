import json
from pathlib import Path

import pytest

from prompt_refiner.config import settings
from prompt_refiner.slots.types import SlotStatus
from prompt_refiner.telemetry.recorder import log_summary, log_turn, session_log_path


def test_turns_append_as_jsonl(isolated_settings: Path) -> None:
    log_turn("t1", 1, {"intent_score": 32, "mentions": {"type": {"웹", "api"}}})
    log_turn("t1", 2, {"intent_score": 70, "slot": SlotStatus(filled=True, weight=20)})
    log_summary("t1", {"stop_reason": "cutoff_met"})

    path = session_log_path("t1")
    assert path.parent == isolated_settings
    records = [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines()]

    assert [r.get("turn") for r in records] == [1, 2, None]
    assert records[0]["session_id"] == "t1"
    assert records[0]["mentions"]["type"] == ["api", "웹"]
    assert records[1]["slot"] == {"filled": True, "weight": 20}
    assert records[2]["kind"] == "summary"


def test_payload_is_not_mutated() -> None:
    payload = {"intent_score": 10}
    log_turn("t2", 1, payload)

    assert payload == {"intent_score": 10}


def test_disabled_telemetry_writes_nothing(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings, "TELEMETRY_ENABLED", False)
    log_turn("t3", 1, {"intent_score": 10})
    log_summary("t3", {"stop_reason": "turn_limit"})

    assert not session_log_path("t3").exists()
