"""Optional chat-model rewrite of the synthesized draft prompt.

The deterministic draft is always computed first; the model only gets to
rephrase it. Any failure falls back to the deterministic text.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from openai import OpenAI, OpenAIError

from prompt_refiner.config import settings
from prompt_refiner.logging import get_logger

from .draft import fit_length

logger = get_logger(__name__)

_SYSTEM_PROMPT = (
    "You are a world-class prompt engineer. Rewrite the draft into one concise, "
    "executable generation prompt written in Korean. Use ONLY facts present in the "
    "draft or the user's answers; never invent brands, platforms or examples. "
    "Keep explicit exclusions, numbers, ratios and usage rights. "
    "Return only the prompt text."
)


@dataclass
class _ClientCache:
    client: OpenAI | None = None


_CLIENT_CACHE = _ClientCache()


def _get_client() -> OpenAI:
    if _CLIENT_CACHE.client is None:
        base_url = settings.OPENAI_BASE_URL or "https://api.openai.com/v1"
        _CLIENT_CACHE.client = OpenAI(
            api_key=settings.OPENAI_API_KEY,
            base_url=base_url,
            organization=settings.OPENAI_ORG,
            timeout=settings.LLM_TIMEOUT,
        )
    return _CLIENT_CACHE.client


def llm_enabled() -> bool:
    return bool(settings.USE_LLM_DRAFT and settings.OPENAI_API_KEY)


def _build_messages(
    draft: str, user_input: str, answers: Sequence[str], domain: str, max_length: int
) -> list[dict[str, str]]:
    facts = "\n".join([user_input, *answers])
    user_prompt = (
        f"Domain: {domain}\n"
        f"Length limit: {max_length} characters\n"
        f"Facts:\n{facts}\n\n"
        f"Draft:\n{draft}"
    )
    return [
        {"role": "system", "content": _SYSTEM_PROMPT},
        {"role": "user", "content": user_prompt},
    ]


def generate_llm_draft(
    draft: str,
    user_input: str,
    answers: Sequence[str],
    domain: str,
    max_length: int = 500,
) -> str:
    if not llm_enabled():
        return draft

    messages = _build_messages(draft, user_input, answers, domain, max_length)
    try:
        response = _get_client().chat.completions.create(
            model=settings.LLM_MODEL,
            messages=messages,  # type: ignore[arg-type]
            temperature=settings.TEMPERATURE,
            max_tokens=settings.LLM_MAX_TOKENS,
        )
    except OpenAIError as e:
        logger.warning(f"LLM draft rewrite failed, keeping rule draft: {e}")
        return draft

    content = ""
    if response.choices:
        content = (response.choices[0].message.content or "").strip()
    if not content:
        logger.warning("LLM draft rewrite returned empty content, keeping rule draft")
        return draft
    return fit_length(content, max_length)
