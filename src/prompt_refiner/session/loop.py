"""Turn loop that drives the scoring engine until both cutoffs are met.

AWAIT_INPUT -> ASK_QUESTIONS -> AWAIT_ANSWERS -> SCORE -> (DONE | ASK_QUESTIONS)

The engine components are stateless; everything that has to survive between
turns (answers, asked keys, last reports) lives on the session.
"""

from __future__ import annotations

import threading
import uuid
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Mapping

from prompt_refiner.config import Settings, settings
from prompt_refiner.intent.analyzer import IntentAnalyzer
from prompt_refiner.intent.questions import QuestionSelector
from prompt_refiner.logging import get_logger
from prompt_refiner.quality.evaluator import PromptQualityEvaluator, QualityReport
from prompt_refiner.slots.types import IntentReport, Question
from prompt_refiner.telemetry.recorder import log_summary, log_turn

from .draft import fit_length, format_answer, synthesize_prompt
from .llm import generate_llm_draft

logger = get_logger(__name__)


class SessionState(str, Enum):
    AWAIT_INPUT = "AWAIT_INPUT"
    ASK_QUESTIONS = "ASK_QUESTIONS"
    AWAIT_ANSWERS = "AWAIT_ANSWERS"
    SCORE = "SCORE"
    DONE = "DONE"


class StopReason:
    CUTOFF_MET = "cutoff_met"
    TURN_LIMIT = "turn_limit"
    FINALIZED_EARLY = "finalized_early"


class SessionError(Exception):
    """Base class for session lifecycle errors."""


class EmptyInputError(SessionError):
    pass


class SessionClosedError(SessionError):
    pass


class InvalidStateError(SessionError):
    pass


@dataclass(frozen=True)
class Cutoffs:
    intent: int = 95
    prompt: int = 95
    max_turns: int = 10
    max_questions: int = 2
    max_prompt_length: int = 500

    @classmethod
    def from_settings(cls, s: Settings) -> Cutoffs:
        return cls(
            intent=s.INTENT_CUTOFF,
            prompt=s.PROMPT_CUTOFF,
            max_turns=s.MAX_TURNS,
            max_questions=s.MAX_QUESTIONS_PER_TURN,
            max_prompt_length=s.MAX_PROMPT_LENGTH,
        )


@dataclass
class FinalPayload:
    version: str
    intent: dict[str, Any]
    prompt: dict[str, Any]
    meta: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class RefinementSession:
    def __init__(
        self,
        user_input: str,
        domain: str = "dev",
        *,
        session_id: str | None = None,
        cutoffs: Cutoffs | None = None,
        analyzer: IntentAnalyzer | None = None,
        selector: QuestionSelector | None = None,
        evaluator: PromptQualityEvaluator | None = None,
    ) -> None:
        self.id = session_id or uuid.uuid4().hex
        self.user_input = (user_input or "").strip()
        self.domain = domain
        self.cutoffs = cutoffs or Cutoffs.from_settings(settings)
        self.analyzer = analyzer or IntentAnalyzer(complete_at=self.cutoffs.intent)
        self.selector = selector or QuestionSelector()
        self.evaluator = evaluator or PromptQualityEvaluator(
            max_length=self.cutoffs.max_prompt_length
        )
        self.lock = threading.Lock()
        self.log = logger.bind(session_id=self.id)

        self.state = SessionState.AWAIT_INPUT
        self.answers: list[str] = []
        self.asked_keys: list[str] = []
        self.pending: list[Question] = []
        self.turns = 0
        self.intent: IntentReport | None = None
        self.quality: QualityReport | None = None
        self.draft = ""
        self.stop_reason: str | None = None

    # ------------------------------------------------------------------ flow

    def start(self) -> list[Question]:
        if self.state is not SessionState.AWAIT_INPUT:
            raise InvalidStateError(f"session already started (state={self.state.value})")
        if not self.user_input:
            raise EmptyInputError("user input is required")
        self.log.info(f"Session started (domain={self.domain})")
        self._score()
        return self._ask()

    def submit_answers(self, answers: Mapping[str, str]) -> list[Question]:
        if self.state is SessionState.DONE:
            raise SessionClosedError(f"session {self.id} is finished")
        if self.state is not SessionState.AWAIT_ANSWERS:
            raise InvalidStateError(f"not awaiting answers (state={self.state.value})")

        line = format_answer(dict(answers))
        if line:
            self.answers.append(line)
        for q in self.pending:
            if q.key not in self.asked_keys:
                self.asked_keys.append(q.key)
        self.pending = []

        self._score()
        self.turns += 1
        log_turn(self.id, self.turns, self._turn_record(line))
        return self._ask()

    def next_questions(self) -> list[Question]:
        missing: list[str] = []
        if self.intent is not None:
            asked = set(self.asked_keys)
            missing = [k for k in self.intent.missing_slots if k not in asked]
        # an empty list makes the selector fall back to every domain slot
        return self.selector.select(missing, self.domain, self.cutoffs.max_questions)

    def converged(self) -> bool:
        if self.intent is None or self.quality is None:
            return False
        intent_ok = self.intent.is_complete or self.intent.intent_score >= self.cutoffs.intent
        return intent_ok and self.quality.total >= self.cutoffs.prompt

    def finalize(self) -> FinalPayload:
        if self.state is SessionState.AWAIT_INPUT:
            raise InvalidStateError("session has not started")
        if self.state is not SessionState.DONE:
            self._finish(StopReason.FINALIZED_EARLY)
        text = fit_length(self.draft, self.cutoffs.max_prompt_length)
        return FinalPayload(
            version=settings.CONFIG_VERSION,
            intent={
                "domain": self.domain,
                "intentScore": self.intent.intent_score if self.intent else 0,
            },
            prompt={
                "text": text,
                "total": self.quality.total if self.quality else 0,
                "language": settings.PROMPT_LANGUAGE,
                "length_limit": self.cutoffs.max_prompt_length,
            },
            meta={
                "assumptions": [],
                "warnings": self._warnings(),
                "turns": self.turns,
                "stop_reason": self.stop_reason,
                "timestamp": datetime.now(timezone.utc).isoformat(),
            },
        )

    # ------------------------------------------------------------ internals

    def _score(self) -> None:
        self.state = SessionState.SCORE
        self.intent = self.analyzer.analyze(self.user_input, self.answers, self.domain)
        draft = synthesize_prompt(
            self.user_input, self.answers, self.domain, self.cutoffs.max_prompt_length
        )
        self.draft = generate_llm_draft(
            draft,
            self.user_input,
            self.answers,
            self.domain,
            self.cutoffs.max_prompt_length,
        )
        self.quality = self.evaluator.evaluate(self.draft, self.domain)
        self.log.debug(
            f"Scored: intent={self.intent.intent_score} "
            f"prompt={self.quality.total} missing={self.intent.missing_slots}"
        )

    def _ask(self) -> list[Question]:
        if self.converged():
            self._finish(StopReason.CUTOFF_MET)
            return []
        if self.turns >= self.cutoffs.max_turns:
            self._finish(StopReason.TURN_LIMIT)
            return []
        self.state = SessionState.ASK_QUESTIONS
        self.pending = self.next_questions()
        self.state = SessionState.AWAIT_ANSWERS
        return list(self.pending)

    def _finish(self, reason: str) -> None:
        self.state = SessionState.DONE
        self.stop_reason = reason
        self.pending = []
        self.log.info(
            f"Done ({reason}) after {self.turns} turns: "
            f"intent={self.intent.intent_score if self.intent else 0} "
            f"prompt={self.quality.total if self.quality else 0}"
        )
        log_summary(
            self.id,
            {
                "stop_reason": reason,
                "turns": self.turns,
                "intent_score": self.intent.intent_score if self.intent else 0,
                "prompt_total": self.quality.total if self.quality else 0,
                "draft": self.draft,
            },
        )

    def _warnings(self) -> list[str]:
        warnings: list[str] = []
        if self.intent and self.intent.missing_slots:
            warnings.append("missing_slots:" + ",".join(self.intent.missing_slots))
        if self.quality and self.quality.total < self.cutoffs.prompt:
            warnings.append(f"prompt_below_cutoff:{self.quality.total}")
        return warnings

    def _turn_record(self, answer_line: str) -> dict[str, Any]:
        return {
            "domain": self.domain,
            "answer": answer_line,
            "intent_score": self.intent.intent_score if self.intent else 0,
            "missing_slots": self.intent.missing_slots if self.intent else [],
            "prompt_total": self.quality.total if self.quality else 0,
            "criteria": self.quality.criteria_scores if self.quality else {},
            "asked_keys": list(self.asked_keys),
        }

    def snapshot(self) -> dict[str, Any]:
        return {
            "sessionId": self.id,
            "state": self.state.value,
            "domain": self.domain,
            "turns": self.turns,
            "intentScore": self.intent.intent_score if self.intent else 0,
            "promptScore": self.quality.total if self.quality else 0,
            "missing": self.intent.missing_slots if self.intent else [],
            "questions": [asdict(q) for q in self.pending],
            "draft": self.draft,
            "stopReason": self.stop_reason,
        }
