"""Utilities package - Flat structure

- text: 검색어 정규화, 관련성 필터, 가격 파싱
- url: 링크/이미지 URL 정리
- cache_keys: 캐시 키 생성
"""

from .cache_keys import generate_cache_key
from .text import (
    digits_only,
    is_relevant,
    normalize_search_term,
    parse_price_text,
    parse_split_price,
    token_overlap,
    tokenize_words,
)
from .url import (
    absolute_url,
    extract_asin,
    last_dynamic_image_key,
    normalize_amazon_image_url,
    pick_from_srcset,
)

__all__ = [
    # cache
    "generate_cache_key",
    # text
    "normalize_search_term",
    "tokenize_words",
    "token_overlap",
    "is_relevant",
    "digits_only",
    "parse_split_price",
    "parse_price_text",
    # url
    "absolute_url",
    "extract_asin",
    "normalize_amazon_image_url",
    "pick_from_srcset",
    "last_dynamic_image_key",
]
