"""Hand-off of a finished prompt to the per-domain generation model.

Only payloads that met both cutoffs are routed. Routing is an echo of the
payload plus the target; no outbound request is made.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from prompt_refiner.config import Settings, settings
from prompt_refiner.logging import get_logger
from prompt_refiner.quality.evaluator import CRITERIA
from prompt_refiner.slots.catalog import DEFAULT_CATALOG, SlotCatalog

logger = get_logger(__name__)


class CutoffNotMetError(Exception):
    def __init__(self, intent_score: int, prompt_score: int) -> None:
        super().__init__("cutoff_not_met")
        self.intent_score = intent_score
        self.prompt_score = prompt_score


@dataclass
class RelayResult:
    ok: bool
    routed_to: str
    model: str
    endpoint: str
    received: dict[str, Any] = field(default_factory=dict)


def routing_table(s: Settings = settings) -> dict[str, dict[str, str]]:
    return {
        "image": {"model": s.MCP_IMAGE_MODEL, "endpoint": s.MCP_IMAGE_ENDPOINT},
        "video": {"model": s.MCP_VIDEO_MODEL, "endpoint": s.MCP_VIDEO_ENDPOINT},
        "dev": {"model": s.MCP_DEV_MODEL, "endpoint": s.MCP_DEV_ENDPOINT},
    }


def _as_int(value: Any) -> int:
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        return 0


def _part(payload: Any, name: str) -> dict[str, Any]:
    value = payload.get(name) if isinstance(payload, dict) else None
    return value if isinstance(value, dict) else {}


def relay(payload: dict[str, Any], s: Settings = settings) -> RelayResult:
    intent = _part(payload, "intent")
    prompt = _part(payload, "prompt")
    intent_score = _as_int(intent.get("intentScore"))
    prompt_score = _as_int(prompt.get("total"))

    if intent_score < s.INTENT_CUTOFF or prompt_score < s.PROMPT_CUTOFF:
        logger.info(
            f"Relay refused: intent={intent_score} prompt={prompt_score} "
            f"(cutoffs {s.INTENT_CUTOFF}/{s.PROMPT_CUTOFF})"
        )
        raise CutoffNotMetError(intent_score, prompt_score)

    table = routing_table(s)
    domain = str(intent.get("domain") or "dev")
    if domain not in table:
        logger.warning(f"No route for domain {domain!r}, using dev")
        domain = "dev"
    route = table[domain]
    logger.info(f"Relaying {domain} prompt to {route['model']}")
    return RelayResult(
        ok=True,
        routed_to=domain,
        model=route["model"],
        endpoint=route["endpoint"],
        received=payload,
    )


def public_config(
    catalog: SlotCatalog = DEFAULT_CATALOG, s: Settings = settings
) -> dict[str, Any]:
    return {
        "version": s.CONFIG_VERSION,
        "intentSlots": {
            domain: [
                {"key": slot.key, "weight": slot.weight, "required": slot.required}
                for slot in slots
            ]
            for domain, slots in catalog.definitions.items()
        },
        "questionPriority": {d: dict(p) for d, p in catalog.priorities.items()},
        "promptChecklist": {"weights": {c.name: c.weight for c in CRITERIA}},
        "cutoffs": {"intent": s.INTENT_CUTOFF, "prompt": s.PROMPT_CUTOFF},
        "limits": {
            "maxTurns": s.MAX_TURNS,
            "maxQuestionsPerTurn": s.MAX_QUESTIONS_PER_TURN,
            "maxPromptLength": s.MAX_PROMPT_LENGTH,
        },
        "routing": routing_table(s),
    }
