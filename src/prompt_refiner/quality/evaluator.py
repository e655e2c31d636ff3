"""Pass/fail rubric for synthesized draft prompts.

Each criterion is an independent boolean gate worth its full weight or
nothing. Gates never look at each other, so the total only depends on which
of them passed.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Callable

MAX_SCORE = 100
DEFAULT_MAX_LENGTH = 500

_DEMONSTRATIVE = re.compile(r"(?<![가-힣])(이것|그것|저것|이거|그거|저거)")
_VAGUE = re.compile(
    r"(애매|모호|대충|적당히|아무거나|알아서|ambiguous|vague|whatever|somehow)",
    re.IGNORECASE,
)
_DIGIT = re.compile(r"\d")
_QUANTIFIABLE = re.compile(
    r"(비율|형식|포맷|길이|스펙|사양|조건|상업|권리|라이선스"
    r"|ratio|format|length|spec|condition|commercial|rights)",
    re.IGNORECASE,
)
_HANGUL = re.compile(r"[가-힣]")
_INFEASIBLE = re.compile(
    r"(불가능|미정|모름|모르겠|정해지지 않|impossible|undetermined|unknown|tbd)",
    re.IGNORECASE,
)
_NEGATIVE = re.compile(
    r"(제외|금지|빼고|없이|피해|하지 말|넣지 말|avoid|exclude|without|negative)",
    re.IGNORECASE,
)
_SPEC_RIGHTS_RATIO = re.compile(
    r"(스펙|사양|권리|라이선스|비율|spec|rights|ratio)", re.IGNORECASE
)


@dataclass(frozen=True)
class Criterion:
    name: str
    weight: int
    hint: str
    check: Callable[[str, int], bool]


def _clarity(text: str, max_length: int) -> bool:
    return not _DEMONSTRATIVE.search(text) and not _VAGUE.search(text)


def _specificity(text: str, max_length: int) -> bool:
    return bool(_DIGIT.search(text) or _QUANTIFIABLE.search(text))


def _format(text: str, max_length: int) -> bool:
    return len(text) <= max_length and bool(_HANGUL.search(text))


def _executability(text: str, max_length: int) -> bool:
    return not _INFEASIBLE.search(text)


def _constraints(text: str, max_length: int) -> bool:
    return bool(_NEGATIVE.search(text) or _SPEC_RIGHTS_RATIO.search(text))


CRITERIA: tuple[Criterion, ...] = (
    Criterion(
        "clarity",
        20,
        "'이것/그것' 같은 지시대명사와 모호한 표현을 구체적인 대상으로 바꿔 주세요.",
        _clarity,
    ),
    Criterion(
        "specificity",
        25,
        "수치나 조건(비율, 길이, 형식, 사용 권리 등)을 하나 이상 명시해 주세요.",
        _specificity,
    ),
    Criterion(
        "format",
        20,
        "한국어로, 정해진 길이 이내로 작성해 주세요.",
        _format,
    ),
    Criterion(
        "executability",
        20,
        "불가능하거나 미정인 요구를 빼고 실행 가능한 지시만 남겨 주세요.",
        _executability,
    ),
    Criterion(
        "constraints_quality",
        15,
        "제외할 요소(부정 프롬프트)나 스펙/권리/비율 제약을 추가해 주세요.",
        _constraints,
    ),
)


_GRADES: tuple[tuple[int, str], ...] = (
    (95, "S+"),
    (90, "S"),
    (85, "A+"),
    (80, "A"),
    (75, "B+"),
    (70, "B"),
    (65, "C+"),
    (60, "C"),
)


def grade_for(score: int) -> str:
    for threshold, grade in _GRADES:
        if score >= threshold:
            return grade
    return "D"


@dataclass
class QualityReport:
    total: int = 0
    criteria_scores: dict[str, int] = field(default_factory=dict)
    max_score: int = MAX_SCORE
    improvement_suggestions: list[str] = field(default_factory=list)
    grade: str = "D"


class PromptQualityEvaluator:
    def __init__(
        self,
        criteria: tuple[Criterion, ...] = CRITERIA,
        max_length: int = DEFAULT_MAX_LENGTH,
    ) -> None:
        self.criteria = criteria
        self.max_length = max_length

    def evaluate(self, draft_prompt: str, domain: str = "dev") -> QualityReport:
        # domain does not change any gate; it is accepted for the wire contract
        text = draft_prompt or ""
        scores: dict[str, int] = {}
        suggestions: list[str] = []
        for criterion in self.criteria:
            passed = criterion.check(text, self.max_length)
            scores[criterion.name] = criterion.weight if passed else 0
            if not passed:
                suggestions.append(criterion.hint)

        weight_sum = sum(c.weight for c in self.criteria)
        earned = sum(scores.values())
        total = 0
        if weight_sum > 0:
            total = (2 * MAX_SCORE * earned + weight_sum) // (2 * weight_sum)
        total = max(0, min(MAX_SCORE, total))
        return QualityReport(
            total=total,
            criteria_scores=scores,
            improvement_suggestions=suggestions,
            grade=grade_for(total),
        )
