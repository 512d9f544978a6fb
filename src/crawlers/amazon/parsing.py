"""Amazon 검색 결과 - HTML 파싱 유틸.

네트워크/브라우저와 분리된 순수 파싱 로직입니다.
"""

from __future__ import annotations

from typing import List, Optional

from selectolax.parser import HTMLParser, Node

from src.core.config import settings
from src.core.logging import logger, sanitize_for_log
from src.schemas.product_schema import ProductRecord
from src.utils.text.prices import parse_split_price
from src.utils.text.tokenize import is_relevant
from src.utils.url import (
    absolute_url,
    extract_asin,
    last_dynamic_image_key,
    normalize_amazon_image_url,
    pick_from_srcset,
)

AMAZON_BASE_URL = "https://www.amazon.in"
RESULTS_SELECTOR = '[data-cel-widget^="MAIN-SEARCH_RESULTS-"]'
FALLBACK_SELECTOR = "div.s-main-slot"
FALLBACK_CARD_SELECTOR = 'div.s-main-slot [data-component-type="s-search-result"]'

# 이미지 속성 우선순위 (srcset 다음)
_IMAGE_ATTRS = (
    "data-old-hires",
    "data-hires",
    "data-src",
    "data-image-lazy-src",
)

# h2에서 감싸는 a 태그를 찾을 때 올라가는 최대 단계
_MAX_ANCHOR_DEPTH = 4


def find_cards(parser: HTMLParser) -> List[Node]:
    cards = parser.css(RESULTS_SELECTOR)
    if cards:
        return cards
    logger.debug("[Amazon] Primary card selector empty, using s-main-slot fallback")
    return parser.css(FALLBACK_CARD_SELECTOR)


def extract_title(card: Node) -> str:
    node = card.css_first("h2 span")
    if node is None:
        return ""
    return (node.text() or "").strip()


def extract_link(card: Node) -> Optional[str]:
    """h2를 감싸는 a 태그(신규 마크업) 또는 h2 안의 a 태그"""
    h2 = card.css_first("h2")
    if h2 is None:
        return None

    href: Optional[str] = None
    node = h2.parent
    depth = 0
    while node is not None and depth < _MAX_ANCHOR_DEPTH:
        if node.tag == "a":
            href = node.attributes.get("href")
            break
        node = node.parent
        depth += 1

    if not href:
        inner = h2.css_first("a")
        if inner is not None:
            href = inner.attributes.get("href")

    return absolute_url(href, AMAZON_BASE_URL)


def extract_image(card: Node) -> Optional[str]:
    img = card.css_first("img.s-image")
    if img is None:
        return None
    attrs = img.attributes

    srcset = attrs.get("srcset") or attrs.get("data-srcset")
    image = pick_from_srcset(srcset)
    if image:
        return image

    candidates = [attrs.get(name) for name in _IMAGE_ATTRS]
    candidates.append(last_dynamic_image_key(attrs.get("data-a-dynamic-image")))
    candidates.append(attrs.get("src"))
    for candidate in candidates:
        if candidate:
            return normalize_amazon_image_url(candidate) or candidate
    return None


def extract_price(card: Node) -> Optional[float]:
    whole = card.css_first(".a-price-whole")
    fraction = card.css_first(".a-price-fraction")
    return parse_split_price(
        whole.text() if whole is not None else None,
        fraction.text() if fraction is not None else None,
    )


def parse_amazon_results(html: str, term: str, max_products: Optional[int] = None) -> List[ProductRecord]:
    """검색 결과 HTML에서 관련 있는 상품을 문서 순서대로 추출 (상한 도달 시 중단)"""
    limit = max_products or settings.max_products_per_source
    parser = HTMLParser(html or "")
    results: List[ProductRecord] = []

    for card in find_cards(parser):
        title = extract_title(card)
        if not is_relevant(term, title):
            continue

        link = extract_link(card)
        if not link:
            continue

        price = extract_price(card)
        if price is None:
            continue

        asin = extract_asin(link) or card.attributes.get("data-asin") or None

        results.append(ProductRecord(
            title=title,
            link=link,
            image=extract_image(card),
            price=price,
            asin=asin,
        ))
        if len(results) >= limit:
            break

    logger.debug(f"[Amazon] Parsed {len(results)} relevant cards for '{sanitize_for_log(term)}'")
    return results
