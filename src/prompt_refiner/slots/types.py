from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

Domain = Literal["image", "video", "dev"]
DOMAINS: tuple[str, ...] = ("image", "video", "dev")

MentionMap = dict[str, set[str]]


@dataclass(frozen=True)
class SlotDefinition:
    key: str
    question: str
    weight: int  # coverage weight, relative within the domain
    required: bool = True


@dataclass(frozen=True)
class SlotStatus:
    filled: bool
    weight: int


@dataclass
class IntentReport:
    domain: str
    intent_score: int = 0  # 0..100
    slot_breakdown: dict[str, SlotStatus] = field(default_factory=dict)
    is_complete: bool = False
    missing_slots: list[str] = field(default_factory=list)
    mentions: dict[str, list[str]] = field(default_factory=dict)


@dataclass(frozen=True)
class Question:
    key: str
    question: str
