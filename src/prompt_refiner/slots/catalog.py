"""Single source of truth for the per-domain slot vocabulary.

Three tables share slot keys but stay separate:

* ``SLOT_DEFINITIONS`` -- ordered slots per domain with their display question
  and coverage weight (used for intent scoring).
* ``QUESTION_PRIORITY`` -- how urgently a missing slot should be asked about.
* ``SLOT_PATTERNS`` -- lexical evidence per key (see ``slots.patterns``).

``SlotCatalog`` bundles them and is injected into the registry, the mention
extractor, the analyzer and the question selector.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Mapping

from .patterns import SLOT_PATTERNS
from .types import SlotDefinition

SLOT_DEFINITIONS: dict[str, tuple[SlotDefinition, ...]] = {
    "image": (
        SlotDefinition("subject", "무엇을(주체/피사체) 그릴까요? 특징도 알려주세요.", 22),
        SlotDefinition("style", "원하는 스타일은 무엇인가요? (사실적, 일러스트, 3D 등)", 20),
        SlotDefinition("ratio_size", "이미지 비율이나 크기, 해상도가 정해져 있나요?", 18),
        SlotDefinition("lighting_camera", "조명이나 카메라 구도/앵글에 대한 요구가 있나요?", 18),
        SlotDefinition("use_rights", "상업적 이용 여부나 라이선스 조건이 있나요?", 12),
        SlotDefinition("negatives", "반드시 제외하거나 피해야 할 요소가 있나요?", 10),
    ),
    "video": (
        SlotDefinition("purpose", "영상의 주요 목적은 무엇인가요? (광고, 교육, 엔터테인먼트 등)", 22),
        SlotDefinition("length", "영상 길이는 대략 몇 초/몇 분인가요?", 18),
        SlotDefinition("style", "어떤 스타일의 영상을 원하시나요? (실사, 애니메이션, 모션그래픽 등)", 18),
        SlotDefinition("platform", "어느 플랫폼에 올릴 예정인가요? (유튜브, 틱톡, 인스타 등)", 14),
        SlotDefinition("audio_caption", "음악/효과음이나 자막이 필요한가요?", 14),
        SlotDefinition("rights", "상업적 이용이나 저작권/라이선스 조건이 있나요?", 14),
    ),
    "dev": (
        SlotDefinition("type", "어떤 종류의 프로젝트인가요? (웹, 모바일 앱, API/백엔드 등)", 20),
        SlotDefinition("core_features", "꼭 필요한 핵심 기능은 무엇인가요?", 22),
        SlotDefinition("target_users", "주요 사용자층(대상)은 누구인가요?", 16),
        SlotDefinition("tech_pref_constraints", "선호하는 기술 스택이나 제약 조건이 있나요?", 18),
        SlotDefinition("priority", "가장 먼저 완성해야 할 우선순위나 일정이 있나요?", 12),
        SlotDefinition("security_auth", "로그인/인증 방식이나 보안 요구사항이 있나요?", 12),
    ),
}

QUESTION_PRIORITY: dict[str, dict[str, int]] = {
    "image": {
        "subject": 9,
        "style": 9,
        "ratio_size": 8,
        "lighting_camera": 8,
        "use_rights": 6,
        "negatives": 5,
    },
    "video": {
        "purpose": 9,
        "length": 9,
        "style": 8,
        "platform": 8,
        "audio_caption": 6,
        "rights": 5,
    },
    "dev": {
        "type": 9,
        "core_features": 9,
        "target_users": 8,
        "tech_pref_constraints": 8,
        "security_auth": 7,
        "priority": 6,
    },
}

FALLBACK_QUESTION = "{key}에 대해 알려주세요."


class CatalogError(ValueError):
    """Raised when the slot tables disagree on their key vocabulary."""


@dataclass(frozen=True)
class SlotCatalog:
    definitions: Mapping[str, tuple[SlotDefinition, ...]] = field(
        default_factory=lambda: SLOT_DEFINITIONS
    )
    priorities: Mapping[str, Mapping[str, int]] = field(
        default_factory=lambda: QUESTION_PRIORITY
    )
    patterns: Mapping[str, re.Pattern[str]] = field(
        default_factory=lambda: SLOT_PATTERNS
    )
    fallback_question: str = FALLBACK_QUESTION

    def domains(self) -> tuple[str, ...]:
        return tuple(self.definitions.keys())

    def keys_for(self, domain: str) -> tuple[str, ...]:
        return tuple(slot.key for slot in self.definitions.get(domain, ()))

    def validate(self) -> None:
        """Check that every table covers exactly the same keys per domain."""
        problems: list[str] = []
        if set(self.definitions) != set(self.priorities):
            problems.append(
                f"domain mismatch: definitions={sorted(self.definitions)} "
                f"priorities={sorted(self.priorities)}"
            )
        for domain, slots in self.definitions.items():
            keys = [slot.key for slot in slots]
            if len(keys) != len(set(keys)):
                problems.append(f"{domain}: duplicate slot keys")
            for slot in slots:
                if slot.weight <= 0:
                    problems.append(f"{domain}.{slot.key}: weight must be positive")
            prio_keys = set(self.priorities.get(domain, {}))
            if set(keys) != prio_keys:
                problems.append(
                    f"{domain}: priority keys {sorted(prio_keys)} != slot keys {sorted(keys)}"
                )
            missing_patterns = [k for k in keys if k not in self.patterns]
            if missing_patterns:
                problems.append(f"{domain}: no pattern for {missing_patterns}")
        if problems:
            raise CatalogError("; ".join(problems))


DEFAULT_CATALOG = SlotCatalog()
DEFAULT_CATALOG.validate()
