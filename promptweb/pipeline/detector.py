"""
Backend-need detection.
=======================
Best-effort keyword heuristic deciding whether a prompt asks for
persistent data or authentication. Misses and false hits are tolerated;
the verdict only decides whether a database step is planned.
"""
from typing import FrozenSet

# Bump when the table changes so plans can be traced to the table that built them.
KEYWORD_TABLE_VERSION = 1

BACKEND_KEYWORDS: FrozenSet[str] = frozenset({
    # auth
    "로그인", "login", "auth", "인증", "authentication",
    "회원가입", "signup", "register", "등록",
    # storage
    "데이터베이스", "database", "db", "저장",
    # users
    "사용자", "user", "계정", "account",
    # community
    "게시판", "board", "댓글", "comment", "채팅", "chat", "메시지", "message",
    # commerce
    "결제", "payment", "주문", "order",
    # uploads
    "파일 업로드", "upload", "이미지 업로드",
})


def needs_backend(prompt: str) -> bool:
    """True if any backend keyword occurs in the prompt (case-insensitive substring match)."""
    text = (prompt or "").lower()
    return any(keyword in text for keyword in BACKEND_KEYWORDS)
