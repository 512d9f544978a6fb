"""Text utilities.

- normalize: 검색어 정규화 (캐시 키의 기준)
- tokenize: 토큰 겹침 기반 관련성 필터
- prices: DOM 가격 텍스트 파싱
"""

from .normalize import normalize_search_term
from .prices import digits_only, parse_price_text, parse_split_price
from .tokenize import is_relevant, token_overlap, tokenize_words

__all__ = [
    "normalize_search_term",
    "tokenize_words",
    "token_overlap",
    "is_relevant",
    "digits_only",
    "parse_split_price",
    "parse_price_text",
]
