"""URL 유틸리티 (링크 절대경로화, 식별자 추출, 이미지 URL 정리)"""
from __future__ import annotations

import json
import re
from typing import Optional
from urllib.parse import urljoin

_ASIN_RE = re.compile(r"/dp/([A-Z0-9]{10})")
_SIZE_TOKEN_RE = re.compile(r"\._[A-Za-z0-9,_-]+_")


def absolute_url(href: Optional[str], base: str) -> Optional[str]:
    """상대 링크를 base 기준 절대 URL로 변환"""
    if not href:
        return None
    href = href.strip()
    if not href or href.startswith(("javascript:", "#")):
        return None
    return urljoin(base, href)


def extract_asin(link: Optional[str]) -> Optional[str]:
    """Amazon 상품 링크에서 ASIN 추출 (/dp/XXXXXXXXXX)"""
    if not link:
        return None
    match = _ASIN_RE.search(link)
    return match.group(1) if match else None


def normalize_amazon_image_url(url: Optional[str]) -> Optional[str]:
    """Amazon 썸네일 URL을 원본 해상도 URL로 정리.

    - 쿼리스트링 제거
    - //로 시작하면 https: 부여
    - ._AC_UL320_ 같은 사이즈 토큰 제거
    """
    if not url:
        return None
    url = url.strip()
    if not url:
        return None

    q_idx = url.find("?")
    if q_idx != -1:
        url = url[:q_idx]

    if url.startswith("//"):
        url = "https:" + url

    url = _SIZE_TOKEN_RE.sub("", url)

    # 토큰이 남아 있으면 큰 사이즈로 치환
    url = re.sub(r"_SX\d+_", "_SX679_", url, count=1, flags=re.IGNORECASE)
    url = re.sub(r"_SL\d+_", "_SL1500_", url, count=1, flags=re.IGNORECASE)
    url = re.sub(r"_UX\d+_", "_UX1024_", url, count=1, flags=re.IGNORECASE)
    return url


def pick_from_srcset(srcset: Optional[str]) -> Optional[str]:
    """srcset("url1 1x, url2 2x") 중 마지막(가장 큰) URL"""
    if not srcset:
        return None
    parts = [p.strip() for p in srcset.split(",") if p.strip()]
    if not parts:
        return None
    url = parts[-1].split()[0]
    return normalize_amazon_image_url(url) or url


def last_dynamic_image_key(raw: Optional[str]) -> Optional[str]:
    """data-a-dynamic-image JSON({url: [w, h]})의 마지막 키"""
    if not raw:
        return None
    try:
        data = json.loads(raw)
    except (TypeError, ValueError):
        return None
    if not isinstance(data, dict) or not data:
        return None
    return list(data.keys())[-1]
