from __future__ import annotations

from .catalog import DEFAULT_CATALOG, SlotCatalog
from .types import SlotDefinition


class SlotRegistry:
    """Read-only lookup over the slot catalog."""

    def __init__(self, catalog: SlotCatalog = DEFAULT_CATALOG) -> None:
        self.catalog = catalog
        self._questions: dict[str, str] = {}
        for slots in catalog.definitions.values():
            for slot in slots:
                # first definition wins for keys shared across domains
                self._questions.setdefault(slot.key, slot.question)

    def slots_for(self, domain: str) -> tuple[SlotDefinition, ...]:
        return tuple(self.catalog.definitions.get(domain, ()))

    def question_for(self, key: str, domain: str | None = None) -> str:
        if domain is not None:
            for slot in self.catalog.definitions.get(domain, ()):
                if slot.key == key:
                    return slot.question
        question = self._questions.get(key)
        if question:
            return question
        return self.catalog.fallback_question.format(key=key)
