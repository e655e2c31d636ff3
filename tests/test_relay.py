import pytest

from prompt_refiner.config import Settings
from prompt_refiner.relay.router import (
    CutoffNotMetError,
    public_config,
    relay,
    routing_table,
)


def _payload(domain: str, intent: int, prompt: int) -> dict:
    return {
        "version": "pc-0.3",
        "intent": {"domain": domain, "intentScore": intent},
        "prompt": {"text": "16:9 비율 포스터", "total": prompt},
    }


def test_relay_routes_by_domain() -> None:
    result = relay(_payload("video", 100, 95))

    assert result.ok is True
    assert result.routed_to == "video"
    assert result.model == "Pika"
    assert result.received["prompt"]["total"] == 95


def test_unknown_domain_uses_dev_route() -> None:
    result = relay(_payload("music", 100, 100))

    assert result.model == "Claude"
    assert result.routed_to == "dev"


@pytest.mark.parametrize("intent,prompt", [(94, 100), (100, 94), (0, 0)])
def test_relay_refuses_below_cutoff(intent: int, prompt: int) -> None:
    with pytest.raises(CutoffNotMetError) as exc:
        relay(_payload("image", intent, prompt))

    assert exc.value.intent_score == intent
    assert exc.value.prompt_score == prompt


def test_relay_tolerates_malformed_scores() -> None:
    with pytest.raises(CutoffNotMetError) as exc:
        relay({"intent": {"intentScore": "high"}, "prompt": None})

    assert (exc.value.intent_score, exc.value.prompt_score) == (0, 0)


@pytest.mark.parametrize(
    "payload",
    [
        {"intent": "x", "prompt": {"total": 99}},
        {"intent": {"intentScore": 99}, "prompt": ["total", 99]},
        {"intent": 42, "prompt": "done"},
    ],
)
def test_relay_treats_non_object_parts_as_empty(payload: dict) -> None:
    with pytest.raises(CutoffNotMetError):
        relay(payload)


def test_routing_follows_settings() -> None:
    s = Settings(MCP_IMAGE_MODEL="flux", MCP_IMAGE_ENDPOINT="http://img.local")

    assert routing_table(s)["image"] == {"model": "flux", "endpoint": "http://img.local"}
    assert relay(_payload("image", 95, 95), s).endpoint == "http://img.local"


def test_public_config_mirrors_catalog() -> None:
    config = public_config()

    assert config["version"] == "pc-0.3"
    assert config["cutoffs"] == {"intent": 95, "prompt": 95}
    assert config["limits"]["maxQuestionsPerTurn"] == 2
    for domain, slots in config["intentSlots"].items():
        assert sum(s["weight"] for s in slots) == 100
        assert {s["key"] for s in slots} == set(config["questionPriority"][domain])
    assert sum(config["promptChecklist"]["weights"].values()) == 100
