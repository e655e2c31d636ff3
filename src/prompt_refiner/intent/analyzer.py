"""Weighted intent coverage over a domain's slots."""

from __future__ import annotations

from typing import Protocol, Sequence

from prompt_refiner.slots.catalog import DEFAULT_CATALOG, SlotCatalog
from prompt_refiner.slots.registry import SlotRegistry
from prompt_refiner.slots.types import IntentReport, MentionMap, SlotStatus

from .mentions import MentionExtractor

COMPLETE_SCORE = 95


def round_half_up(numerator: int, denominator: int) -> int:
    """Integer ``round(numerator / denominator)`` with .5 rounded up."""
    if denominator <= 0:
        return 0
    return (2 * numerator + denominator) // (2 * denominator)


def coverage_score(filled_weight: int, total_weight: int) -> int:
    return max(0, min(100, round_half_up(100 * filled_weight, total_weight)))


def build_blob(user_input: str, answers: Sequence[str] = ()) -> str:
    parts = [user_input or ""] + [a or "" for a in answers]
    return " ".join(parts).lower()


class FillStrategy(Protocol):
    name: str

    def is_filled(self, key: str, blob: str, mentions: MentionMap) -> bool: ...


class PatternFill:
    """Filled when the curated keyword pattern matched."""

    name = "pattern"

    def is_filled(self, key: str, blob: str, mentions: MentionMap) -> bool:
        return bool(mentions.get(key))


class VerbatimKeyFill:
    """Filled when the slot key itself (``_`` read as space) appears in the text."""

    name = "verbatim"

    def is_filled(self, key: str, blob: str, mentions: MentionMap) -> bool:
        needle = key.replace("_", " ").lower()
        return bool(needle) and needle in blob


class AnyFill:
    name = "any"

    def __init__(self, *strategies: FillStrategy) -> None:
        self.strategies = strategies

    def is_filled(self, key: str, blob: str, mentions: MentionMap) -> bool:
        return any(s.is_filled(key, blob, mentions) for s in self.strategies)


DEFAULT_FILL = AnyFill(PatternFill(), VerbatimKeyFill())


class IntentAnalyzer:
    def __init__(
        self,
        catalog: SlotCatalog = DEFAULT_CATALOG,
        extractor: MentionExtractor | None = None,
        fill: FillStrategy = DEFAULT_FILL,
        complete_at: int = COMPLETE_SCORE,
    ) -> None:
        self.registry = SlotRegistry(catalog)
        self.extractor = extractor or MentionExtractor(catalog)
        self.fill = fill
        self.complete_at = complete_at

    def analyze(
        self, user_input: str, prior_answers: Sequence[str] = (), domain: str = "dev"
    ) -> IntentReport:
        blob = build_blob(user_input, prior_answers)
        mentions = self.extractor.extract(blob)
        slots = self.registry.slots_for(domain)

        breakdown: dict[str, SlotStatus] = {}
        missing: list[str] = []
        filled_weight = 0
        total_weight = 0
        for slot in slots:
            filled = self.fill.is_filled(slot.key, blob, mentions)
            breakdown[slot.key] = SlotStatus(filled=filled, weight=slot.weight)
            total_weight += slot.weight
            if filled:
                filled_weight += slot.weight
            else:
                missing.append(slot.key)

        score = coverage_score(filled_weight, total_weight)
        all_required = bool(slots) and all(
            breakdown[s.key].filled for s in slots if s.required
        )
        return IntentReport(
            domain=domain,
            intent_score=score,
            slot_breakdown=breakdown,
            is_complete=all_required or score >= self.complete_at,
            missing_slots=missing,
            mentions={k: sorted(v) for k, v in sorted(mentions.items())},
        )
