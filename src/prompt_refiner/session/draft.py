from __future__ import annotations

import re
from typing import Sequence

_HEADERS: dict[str, str] = {
    "image": "이미지 생성용 프롬프트(한국어, {limit}자 이내): ",
    "video": "영상 생성용 프롬프트(한국어, {limit}자 이내): ",
    "dev": "개발 작업 지시 프롬프트(한국어, {limit}자 이내): ",
}
_DEFAULT_HEADER = "생성용 프롬프트(한국어, {limit}자 이내): "
_ELLIPSIS = "…"


def collapse_whitespace(text: str) -> str:
    return re.sub(r"\s+", " ", text or "").strip()


def fit_length(text: str, max_length: int = 500) -> str:
    """Collapse whitespace and cut to ``max_length`` characters, ellipsis included."""
    t = collapse_whitespace(text)
    if len(t) <= max_length:
        return t
    return t[: max(0, max_length - 2)] + _ELLIPSIS


def synthesize_prompt(
    user_input: str, answers: Sequence[str], domain: str, max_length: int = 500
) -> str:
    header = _HEADERS.get(domain, _DEFAULT_HEADER).format(limit=max_length)
    body = collapse_whitespace(" ".join([user_input or "", *answers]))
    return fit_length(header + body, max_length)


def format_answer(answers: dict[str, str]) -> str:
    """Render one turn's answers as ``key: value, key: value``; blanks are dropped."""
    parts = [
        f"{key}: {collapse_whitespace(value)}"
        for key, value in answers.items()
        if collapse_whitespace(value or "")
    ]
    return ", ".join(parts)
