"""HTTP routes around the scoring engine and the refinement sessions.

Session and relay errors propagate to the handlers registered in
``api.app``. Handlers that may run the chat-model rewrite are plain ``def``
so FastAPI runs them in its threadpool.
"""

from dataclasses import asdict
from typing import Any, List

from fastapi import APIRouter

from prompt_refiner.api.schemas import (
    AnalyzeIntentRequest,
    EvaluatePromptRequest,
    HealthResponse,
    IntentReportResponse,
    NextQuestionsRequest,
    NextQuestionsResponse,
    QualityReportResponse,
    QuestionModel,
    SelectQuestionsRequest,
    SessionResponse,
    StartSessionRequest,
    SubmitAnswersRequest,
)
from prompt_refiner.config import settings
from prompt_refiner.intent.analyzer import IntentAnalyzer
from prompt_refiner.intent.domain import detect_domain
from prompt_refiner.intent.questions import QuestionSelector
from prompt_refiner.logging import get_logger
from prompt_refiner.quality.evaluator import PromptQualityEvaluator
from prompt_refiner.relay.router import public_config, relay
from prompt_refiner.session.loop import RefinementSession
from prompt_refiner.session.store import SessionStore

logger = get_logger(__name__)

VERSION = "0.1.0"

router = APIRouter()

analyzer = IntentAnalyzer(complete_at=settings.INTENT_CUTOFF)
selector = QuestionSelector()
evaluator = PromptQualityEvaluator(max_length=settings.MAX_PROMPT_LENGTH)
store = SessionStore()


def _questions(items: list[Any]) -> List[QuestionModel]:
    return [QuestionModel(**asdict(q)) for q in items]


def _session_response(session: RefinementSession) -> SessionResponse:
    return SessionResponse(**session.snapshot())


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    return HealthResponse(
        status="healthy",
        version=VERSION,
        components={
            "sessions": len(store),
            "llm_draft": "enabled" if settings.USE_LLM_DRAFT else "disabled",
            "config_version": settings.CONFIG_VERSION,
        },
    )


@router.get("/api/config")
async def get_config() -> dict[str, Any]:
    return public_config()


@router.post("/api/score/intent", response_model=IntentReportResponse)
async def score_intent(request: AnalyzeIntentRequest) -> IntentReportResponse:
    report = analyzer.analyze(request.user_input, request.answers, request.domain)
    return IntentReportResponse.from_report(report)


@router.post("/api/score/prompt", response_model=QualityReportResponse)
async def score_prompt(request: EvaluatePromptRequest) -> QualityReportResponse:
    report = evaluator.evaluate(request.prompt, request.domain)
    return QualityReportResponse.from_report(report)


@router.post("/api/questions/select", response_model=List[QuestionModel])
async def select_questions(request: SelectQuestionsRequest) -> List[QuestionModel]:
    return _questions(
        selector.select(request.missing_slots, request.domain, request.limit)
    )


@router.post("/api/questions", response_model=NextQuestionsResponse)
async def next_questions(request: NextQuestionsRequest) -> NextQuestionsResponse:
    report = analyzer.analyze(request.user_input, request.answers, request.domain)
    asked = set(request.asked_keys)
    missing = [k for k in report.missing_slots if k not in asked]

    if (
        report.intent_score >= settings.INTENT_CUTOFF
        and request.prompt_score >= settings.PROMPT_CUTOFF
    ):
        return NextQuestionsResponse(
            questions=[], missing=missing, intent_score=report.intent_score
        )

    picked = selector.select(missing, request.domain, settings.MAX_QUESTIONS_PER_TURN)
    return NextQuestionsResponse(
        questions=_questions(picked), missing=missing, intent_score=report.intent_score
    )


@router.post("/api/sessions", response_model=SessionResponse)
def start_session(request: StartSessionRequest) -> SessionResponse:
    domain = request.domain or detect_domain(request.user_input).primary
    session = RefinementSession(request.user_input, domain)
    session.start()
    store.add(session)
    logger.info(f"Created session {session.id} (domain={domain}, open={len(store)})")
    return _session_response(session)


@router.get("/api/sessions/{session_id}", response_model=SessionResponse)
async def get_session(session_id: str) -> SessionResponse:
    return _session_response(store.get(session_id))


@router.post("/api/sessions/{session_id}/answers", response_model=SessionResponse)
def submit_answers(session_id: str, request: SubmitAnswersRequest) -> SessionResponse:
    session = store.get(session_id)
    with session.lock:
        session.submit_answers(request.answers)
        return _session_response(session)


@router.get("/api/sessions/{session_id}/final")
def final_payload(session_id: str) -> dict[str, Any]:
    session = store.get(session_id)
    with session.lock:
        payload = session.finalize().to_dict()
    # the final payload is the last thing a client needs from a session
    store.drop(session_id)
    return payload


@router.post("/api/mcp")
async def relay_prompt(payload: dict[str, Any]) -> dict[str, Any]:
    result = relay(payload)
    return {
        "ok": result.ok,
        "routedTo": result.routed_to,
        "model": result.model,
        "endpoint": result.endpoint,
        "received": result.received,
    }
