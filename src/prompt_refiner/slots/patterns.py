"""Lexical evidence table: slot key -> keyword alternation.

Patterns are matched against lower-cased text. A slot counts as mentioned as
soon as one alternative matches; nothing here looks at context or position.
"""

from __future__ import annotations

import re


def _alternation(*words: str) -> re.Pattern[str]:
    return re.compile("(" + "|".join(words) + ")")


# "rights" (video) and "use_rights" (image) test the same vocabulary.
_RIGHTS = _alternation(
    "상업용",
    "비상업",
    "상업",
    "라이선스",
    "라이센스",
    "저작권",
    "사용권",
    "권리",
    "commercial",
    "licensing",
    "license",
    "copyright",
    "royalty",
    "rights",
)

SLOT_PATTERNS: dict[str, re.Pattern[str]] = {
    # image
    "subject": _alternation(
        "주제",
        "피사체",
        "주인공",
        "인물",
        "캐릭터",
        "동물",
        "강아지",
        "고양이",
        "제품",
        "풍경",
        "subject",
        "character",
        "object",
    ),
    "style": _alternation(
        "스타일",
        "화풍",
        "사실적",
        "실사",
        "3d",
        "애니메이션",
        "만화",
        "일러스트",
        "수채화",
        "유화",
        "추상",
        "미니멀",
        "모션그래픽",
        "realistic",
        "photoreal",
        "anime",
        "cartoon",
        "minimalist",
        "cinematic",
    ),
    "ratio_size": _alternation(
        "비율",
        "크기",
        "사이즈",
        "해상도",
        "정사각형",
        "가로형",
        "세로형",
        r"\d+\s*:\s*\d+",
        r"\d+\s*x\s*\d+",
        r"\d+\s*(?:px|cm|mm)",
        "4k",
        "8k",
        "uhd",
        "fhd",
        "ratio",
        "aspect",
        "resolution",
    ),
    "lighting_camera": _alternation(
        "조명",
        "역광",
        "자연광",
        "카메라",
        "렌즈",
        "앵글",
        "구도",
        "클로즈업",
        "시점",
        "심도",
        "lighting",
        "camera",
        "lens",
        "angle",
        "close-up",
        "bokeh",
    ),
    "use_rights": _RIGHTS,
    "negatives": _alternation(
        "제외",
        "금지",
        "빼고",
        "없이",
        "피해",
        "원하지 않",
        "하지 말",
        "negative",
        "avoid",
        "exclude",
        "without",
    ),
    # video
    "purpose": _alternation(
        "목적",
        "용도",
        "목표",
        "광고",
        "홍보",
        "교육",
        "튜토리얼",
        "소개",
        "브이로그",
        "엔터테인먼트",
        "purpose",
        "goal",
        "promotion",
        "tutorial",
        "entertain",
    ),
    "length": _alternation(
        "길이",
        "분량",
        "러닝타임",
        r"\d+\s*(?:초|분|시간)",
        r"\d+\s*(?:sec|seconds|min|minutes)",
        "duration",
        "length",
    ),
    "platform": _alternation(
        "유튜브",
        "틱톡",
        "인스타",
        "릴스",
        "쇼츠",
        "플랫폼",
        "youtube",
        "tiktok",
        "instagram",
        "reels",
        "shorts",
        "platform",
    ),
    "audio_caption": _alternation(
        "음악",
        "음향",
        "효과음",
        "배경음",
        "bgm",
        "내레이션",
        "나레이션",
        "보이스오버",
        "자막",
        "music",
        "sfx",
        "voiceover",
        "caption",
        "subtitle",
    ),
    "rights": _RIGHTS,
    # dev
    "type": _alternation(
        "웹사이트",
        "웹",
        "앱",
        "모바일",
        "데스크톱",
        "게임",
        "백엔드",
        "프론트엔드",
        "챗봇",
        "api",
        "website",
        "backend",
        "frontend",
        "mobile",
        "desktop",
    ),
    "core_features": _alternation(
        "기능",
        "핵심",
        "게시판",
        "결제",
        "검색",
        "채팅",
        "업로드",
        "대시보드",
        "예약",
        "장바구니",
        "알림",
        "feature",
        "crud",
        "dashboard",
    ),
    "target_users": _alternation(
        "사용자층",
        "타겟",
        "타깃",
        "대상",
        "고객",
        "소비자",
        "일반인",
        "학생",
        "기업",
        "직원",
        "관리자",
        "전문가",
        "audience",
        "customer",
        "b2b",
        "b2c",
    ),
    "tech_pref_constraints": _alternation(
        "기술 스택",
        "스택",
        "프레임워크",
        "데이터베이스",
        "제약",
        "예산",
        "서버리스",
        "react",
        "vue",
        "angular",
        r"next\.js",
        "python",
        "django",
        "fastapi",
        "flask",
        "java",
        "spring",
        "node",
        "typescript",
        "mysql",
        "postgres",
        "mongodb",
        "docker",
        "aws",
        "flutter",
        "kotlin",
        "swift",
    ),
    "priority": _alternation(
        "우선순위",
        "우선",
        "먼저",
        "마감",
        "일정",
        "중요",
        "mvp",
        "priority",
        "deadline",
        "asap",
        "urgent",
    ),
    "security_auth": _alternation(
        "인증",
        "로그인",
        "보안",
        "권한",
        "암호화",
        "비밀번호",
        "oauth",
        "jwt",
        "sso",
        "2fa",
        "auth",
        "security",
        "encryption",
        "password",
    ),
}
