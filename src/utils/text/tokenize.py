"""Tokenization + relevance filter for candidate titles."""

from __future__ import annotations

import math

from src.core.config import settings


def tokenize_words(text: str) -> list[str]:
    """공백 기준 소문자 토큰 (중복 유지)"""
    if not text:
        return []
    return text.lower().split()


def token_overlap(query: str, title: str) -> int:
    """검색어 토큰 중 제목에 등장하는 토큰 수"""
    title_tokens = set(tokenize_words(title))
    return sum(1 for t in tokenize_words(query) if t in title_tokens)


def is_relevant(query: str, title: str, min_ratio: float | None = None) -> bool:
    """검색어 토큰의 min_ratio(기본 절반) 이상이 제목에 있으면 통과.

    순위 신호가 아니라 명백히 무관한 카드를 거르는 거친 필터입니다.
    예: "wireless mouse" vs "Wireless Mouse for Laptop" -> 2/2 통과
        "wireless mouse" vs "Bluetooth Keyboard" -> 0/2 탈락
    """
    if not title:
        return False
    query_tokens = tokenize_words(query)
    if not query_tokens:
        return False
    ratio = settings.relevance_min_ratio if min_ratio is None else min_ratio
    required = math.ceil(len(query_tokens) * ratio)
    return token_overlap(query, title) >= required
