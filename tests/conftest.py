"""Pytest configuration file."""

from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from prompt_refiner.api.app import create_app
from prompt_refiner.config import settings

DEV_REQUEST = "사용자 인증이 필요한 웹 api를 만들고 싶어요"


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Keep session logs out of the working tree and the chat model switched off."""
    log_dir = tmp_path / "logs"
    monkeypatch.setattr(settings, "log_dir", str(log_dir))
    monkeypatch.setattr(settings, "USE_LLM_DRAFT", False)
    monkeypatch.setattr(settings, "TELEMETRY_ENABLED", True)
    return log_dir


@pytest.fixture
def dev_request() -> str:
    return DEV_REQUEST


@pytest.fixture
def app() -> FastAPI:
    """Create a test FastAPI application."""
    return create_app()


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Create a test client."""
    return TestClient(app)
