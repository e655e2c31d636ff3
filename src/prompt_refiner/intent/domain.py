from __future__ import annotations

from dataclasses import dataclass, field

_DOMAIN_KEYWORDS: dict[str, tuple[str, ...]] = {
    "image": (
        "그림",
        "이미지",
        "사진",
        "포스터",
        "로고",
        "디자인",
        "일러스트",
        "드로잉",
        "페인팅",
        "image",
        "picture",
        "poster",
    ),
    "video": (
        "영상",
        "비디오",
        "동영상",
        "애니메이션",
        "영화",
        "편집",
        "촬영",
        "쇼츠",
        "video",
        "clip",
    ),
    "dev": (
        "웹사이트",
        "앱",
        "프로그램",
        "시스템",
        "코딩",
        "개발",
        "소프트웨어",
        "api",
        "서버",
        "website",
        "app",
    ),
}

_DEFAULT_DOMAIN = "image"


@dataclass
class DomainGuess:
    primary: str = _DEFAULT_DOMAIN
    secondary: list[str] = field(default_factory=list)
    confidence: float = 0.5  # 0..1


def detect_domain(text: str) -> DomainGuess:
    lowered = (text or "").lower()
    scores = {
        domain: sum(1 for kw in keywords if kw in lowered)
        for domain, keywords in _DOMAIN_KEYWORDS.items()
    }
    ranked = sorted(
        ((d, s) for d, s in scores.items() if s > 0), key=lambda x: x[1], reverse=True
    )
    if not ranked:
        return DomainGuess()
    primary, top = ranked[0]
    return DomainGuess(
        primary=primary,
        secondary=[d for d, _ in ranked[1:3]],
        confidence=min(1.0, top / 3),
    )
