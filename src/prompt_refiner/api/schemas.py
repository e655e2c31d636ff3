"""Request/response models for the HTTP transport (camelCase on the wire)."""

from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from prompt_refiner.quality.evaluator import QualityReport
from prompt_refiner.slots.types import IntentReport


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AnalyzeIntentRequest(CamelModel):
    user_input: str = ""
    answers: List[str] = Field(default_factory=list)
    domain: str = "dev"


class EvaluatePromptRequest(CamelModel):
    prompt: str = ""
    domain: str = "dev"


class SelectQuestionsRequest(CamelModel):
    missing_slots: List[str] = Field(default_factory=list)
    domain: str = "dev"
    limit: int = Field(default=2, ge=0)


class NextQuestionsRequest(CamelModel):
    domain: str = "dev"
    user_input: str = ""
    answers: List[str] = Field(default_factory=list)
    asked_keys: List[str] = Field(default_factory=list)
    prompt_score: int = 0


class StartSessionRequest(CamelModel):
    user_input: str
    domain: Optional[str] = None


class SubmitAnswersRequest(CamelModel):
    answers: dict[str, str] = Field(default_factory=dict)


class SlotStatusModel(CamelModel):
    filled: bool
    weight: int


class QuestionModel(CamelModel):
    key: str
    question: str


class IntentReportResponse(CamelModel):
    domain: str
    intent_score: int
    slot_breakdown: dict[str, SlotStatusModel]
    is_complete: bool
    missing_slots: List[str]
    mentions: dict[str, List[str]] = Field(default_factory=dict)

    @classmethod
    def from_report(cls, report: IntentReport) -> IntentReportResponse:
        return cls(
            domain=report.domain,
            intent_score=report.intent_score,
            slot_breakdown={
                k: SlotStatusModel(filled=v.filled, weight=v.weight)
                for k, v in report.slot_breakdown.items()
            },
            is_complete=report.is_complete,
            missing_slots=list(report.missing_slots),
            mentions=report.mentions,
        )


class QualityReportResponse(CamelModel):
    total: int
    criteria_scores: dict[str, int]
    max_score: int
    improvement_suggestions: List[str]
    grade: str

    @classmethod
    def from_report(cls, report: QualityReport) -> QualityReportResponse:
        return cls(
            total=report.total,
            criteria_scores=dict(report.criteria_scores),
            max_score=report.max_score,
            improvement_suggestions=list(report.improvement_suggestions),
            grade=report.grade,
        )


class NextQuestionsResponse(CamelModel):
    questions: List[QuestionModel]
    missing: List[str]
    intent_score: int


class SessionResponse(CamelModel):
    session_id: str
    state: str
    domain: str
    turns: int
    intent_score: int
    prompt_score: int
    missing: List[str]
    questions: List[QuestionModel]
    draft: str
    stop_reason: Optional[str] = None


class HealthResponse(BaseModel):
    status: str
    version: str
    components: dict[str, Any]
