from __future__ import annotations

import json
from dataclasses import asdict, is_dataclass
from pathlib import Path
from typing import Any

from prompt_refiner.config import settings


def _ensure_log_dir() -> Path:
    d = Path(settings.log_dir or "logs")
    d.mkdir(parents=True, exist_ok=True)
    return d


def session_log_path(session_id: str) -> Path:
    return Path(settings.log_dir or "logs") / f"session_{session_id}.jsonl"


def log_turn(session_id: str, turn: int, payload: dict[str, Any]) -> None:
    if not settings.TELEMETRY_ENABLED:
        return
    d = _ensure_log_dir()
    path = d / f"session_{session_id}.jsonl"
    data = payload.copy()
    data.setdefault("session_id", session_id)
    data.setdefault("turn", turn)
    with open(path, "a", encoding="utf-8") as f:
        f.write(_jsonl_line(data))


def log_summary(session_id: str, payload: dict[str, Any]) -> None:
    if not settings.TELEMETRY_ENABLED:
        return
    d = _ensure_log_dir()
    path = d / f"session_{session_id}.jsonl"
    data = payload.copy()
    data.setdefault("session_id", session_id)
    data.setdefault("kind", "summary")
    with open(path, "a", encoding="utf-8") as f:
        f.write(_jsonl_line(data))


def _jsonl_line(obj: Any) -> str:
    if is_dataclass(obj) and not isinstance(obj, type):
        obj = asdict(obj)
    return json.dumps(obj, ensure_ascii=False, default=_default) + "\n"


def _default(value: Any) -> Any:
    if is_dataclass(value) and not isinstance(value, type):
        return asdict(value)
    if isinstance(value, set):
        return sorted(value)
    return str(value)
