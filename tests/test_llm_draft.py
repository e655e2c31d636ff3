from types import SimpleNamespace
from typing import Any

import pytest
from openai import OpenAIError

from prompt_refiner.config import settings
from prompt_refiner.session import llm
from prompt_refiner.session.llm import generate_llm_draft, llm_enabled

DRAFT = "개발 작업 지시 프롬프트(한국어, 500자 이내): 웹 api"


class FakeCompletions:
    def __init__(self, content: str | None = None, error: Exception | None = None):
        self.content = content
        self.error = error
        self.calls: list[dict[str, Any]] = []

    def create(self, **kwargs: Any) -> Any:
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def _install(monkeypatch: pytest.MonkeyPatch, completions: FakeCompletions) -> None:
    monkeypatch.setattr(settings, "USE_LLM_DRAFT", True)
    monkeypatch.setattr(settings, "OPENAI_API_KEY", "sk-test")
    client = SimpleNamespace(chat=SimpleNamespace(completions=completions))
    monkeypatch.setattr(llm, "_get_client", lambda: client)


def test_disabled_by_default() -> None:
    assert llm_enabled() is False
    assert generate_llm_draft(DRAFT, "웹 api", [], "dev") == DRAFT


def test_needs_an_api_key(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings, "USE_LLM_DRAFT", True)
    monkeypatch.setattr(settings, "OPENAI_API_KEY", None)

    assert llm_enabled() is False


def test_rewrite_is_used_and_trimmed(monkeypatch: pytest.MonkeyPatch) -> None:
    completions = FakeCompletions(content="  결제 기능을 제외한   웹 api 개발  ")
    _install(monkeypatch, completions)

    out = generate_llm_draft(DRAFT, "웹 api", ["priority: mvp"], "dev", max_length=500)

    assert out == "결제 기능을 제외한 웹 api 개발"
    call = completions.calls[0]
    assert call["model"] == settings.LLM_MODEL
    assert "priority: mvp" in call["messages"][1]["content"]


def test_rewrite_respects_length(monkeypatch: pytest.MonkeyPatch) -> None:
    _install(monkeypatch, FakeCompletions(content="가" * 50))

    out = generate_llm_draft(DRAFT, "웹 api", [], "dev", max_length=20)

    assert len(out) == 19
    assert out.endswith("…")


def test_api_error_keeps_rule_draft(monkeypatch: pytest.MonkeyPatch) -> None:
    _install(monkeypatch, FakeCompletions(error=OpenAIError("boom")))

    assert generate_llm_draft(DRAFT, "웹 api", [], "dev") == DRAFT


def test_empty_completion_keeps_rule_draft(monkeypatch: pytest.MonkeyPatch) -> None:
    _install(monkeypatch, FakeCompletions(content="   "))

    assert generate_llm_draft(DRAFT, "웹 api", [], "dev") == DRAFT
