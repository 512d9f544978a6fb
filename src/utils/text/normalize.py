"""검색어 정규화.

캐시 키/DB 키/추출기 관련성 필터가 모두 같은 문자열을 보도록
요청 진입점에서 한 번만 정규화합니다.
"""

from __future__ import annotations

import re

_WHITESPACE_RE = re.compile(r"\s+")


def normalize_search_term(raw: str | None) -> str:
    """앞뒤 공백 제거 → 연속 공백을 하나로 → 소문자.

    예시:
    - "  Wireless   Mouse  " -> "wireless mouse"
    - "   " -> ""

    멱등: normalize_search_term(normalize_search_term(t)) == normalize_search_term(t)
    """
    if not raw:
        return ""
    return _WHITESPACE_RE.sub(" ", raw.strip()).lower()
