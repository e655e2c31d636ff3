from __future__ import annotations

import re
from typing import Mapping

from prompt_refiner.slots.catalog import DEFAULT_CATALOG, SlotCatalog
from prompt_refiner.slots.types import MentionMap


class MentionExtractor:
    """Find literal slot evidence in free text.

    The result is sparse: a key is present only when its pattern matched at
    least once. Matching is case-insensitive and purely lexical.
    """

    def __init__(self, catalog: SlotCatalog = DEFAULT_CATALOG) -> None:
        self.patterns: Mapping[str, re.Pattern[str]] = catalog.patterns

    def extract(self, text: str) -> MentionMap:
        lowered = (text or "").lower()
        mentions: MentionMap = {}
        if not lowered.strip():
            return mentions
        for key, pattern in self.patterns.items():
            found = {m.group(0) for m in pattern.finditer(lowered) if m.group(0)}
            if found:
                mentions[key] = found
        return mentions
