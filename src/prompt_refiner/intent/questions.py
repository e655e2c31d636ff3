from __future__ import annotations

from typing import Sequence

from prompt_refiner.slots.catalog import DEFAULT_CATALOG, SlotCatalog
from prompt_refiner.slots.registry import SlotRegistry
from prompt_refiner.slots.types import Question

DEFAULT_LIMIT = 2


def _dedup(keys: Sequence[str]) -> list[str]:
    seen: set[str] = set()
    out: list[str] = []
    for key in keys:
        k = (key or "").strip()
        if not k or k in seen:
            continue
        seen.add(k)
        out.append(k)
    return out


class QuestionSelector:
    """Rank missing slots by question priority and phrase them as questions.

    Ordering: priority descending, then the slot's position in the domain
    definition. Keys the domain does not define keep their input order after
    the catalogued ones. With nothing missing, the domain's whole slot list is
    ranked instead.
    """

    def __init__(self, catalog: SlotCatalog = DEFAULT_CATALOG) -> None:
        self.catalog = catalog
        self.registry = SlotRegistry(catalog)

    def select(
        self, missing_slots: Sequence[str], domain: str, limit: int = DEFAULT_LIMIT
    ) -> list[Question]:
        if limit <= 0:
            return []
        keys = _dedup(missing_slots)
        if not keys:
            keys = list(self.catalog.keys_for(domain))

        priorities = self.catalog.priorities.get(domain, {})
        order = {key: idx for idx, key in enumerate(self.catalog.keys_for(domain))}
        unknown_base = len(order)

        def rank(item: tuple[int, str]) -> tuple[int, int]:
            pos, key = item
            return (-priorities.get(key, 0), order.get(key, unknown_base + pos))

        ranked = sorted(enumerate(keys), key=rank)
        return [
            Question(key=key, question=self.registry.question_for(key, domain))
            for _, key in ranked[:limit]
        ]
