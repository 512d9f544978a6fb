"""Price extraction helpers."""

from __future__ import annotations

import math
import re
from typing import Optional

_NON_DIGIT_RE = re.compile(r"\D")


def digits_only(text: Optional[str]) -> str:
    """텍스트에서 숫자만 남김 ("₹1,299." -> "1299")"""
    if not text:
        return ""
    return _NON_DIGIT_RE.sub("", text)


def parse_split_price(whole_text: Optional[str], fraction_text: Optional[str] = None) -> Optional[float]:
    """정수부/소수부로 쪼개진 DOM 텍스트를 하나의 가격으로 합침.

    정수부가 비어 있으면 None (해당 카드는 버림).
    """
    whole = digits_only(whole_text)
    if not whole:
        return None
    fraction = digits_only(fraction_text)
    value = float(f"{whole}.{fraction}") if fraction else float(whole)
    if not math.isfinite(value) or value < 0:
        return None
    return value


def parse_price_text(price_text: Optional[str]) -> Optional[float]:
    """한 덩어리 가격 텍스트 ("₹12,499") -> 12499.0"""
    return parse_split_price(price_text)
