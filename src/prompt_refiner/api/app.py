"""FastAPI application factory."""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from prompt_refiner.api.routes import VERSION, router
from prompt_refiner.logging import configure_logging
from prompt_refiner.relay.router import CutoffNotMetError
from prompt_refiner.session.loop import (
    EmptyInputError,
    InvalidStateError,
    SessionClosedError,
)
from prompt_refiner.session.store import SessionNotFoundError


def _detail(status_code: int, detail: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"detail": detail})


async def _session_not_found(request: Request, exc: Exception) -> JSONResponse:
    return _detail(404, "session_not_found")


async def _session_closed(request: Request, exc: Exception) -> JSONResponse:
    return _detail(409, "session_closed")


async def _invalid_state(request: Request, exc: Exception) -> JSONResponse:
    return _detail(409, str(exc))


async def _empty_input(request: Request, exc: Exception) -> JSONResponse:
    return _detail(400, "user_input_required")


async def _cutoff_not_met(request: Request, exc: CutoffNotMetError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={
            "ok": False,
            "error": "cutoff_not_met",
            "scores": {"intent": exc.intent_score, "prompt": exc.prompt_score},
        },
    )


def create_app() -> FastAPI:
    """Build the refinement API: engine scoring, sessions and relay."""
    configure_logging()

    app = FastAPI(
        title="Prompt Refiner",
        description="Intent coverage and prompt quality scoring for iterative "
        "prompt refinement",
        version=VERSION,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    app.add_exception_handler(SessionNotFoundError, _session_not_found)
    app.add_exception_handler(SessionClosedError, _session_closed)
    app.add_exception_handler(InvalidStateError, _invalid_state)
    app.add_exception_handler(EmptyInputError, _empty_input)
    app.add_exception_handler(CutoffNotMetError, _cutoff_not_met)

    app.include_router(router)

    return app
