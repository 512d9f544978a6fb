"""Flipkart 검색 결과 - HTML 파싱 유틸.

Flipkart는 난독화된 클래스명을 자주 바꾸므로 필드마다 구/신 셀렉터를
순서대로 시도합니다.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from selectolax.parser import HTMLParser, Node

from src.core.config import settings
from src.core.logging import logger, sanitize_for_log
from src.schemas.product_schema import ProductRecord
from src.utils.text.prices import parse_price_text
from src.utils.text.tokenize import is_relevant
from src.utils.url import absolute_url

FLIPKART_BASE_URL = "https://www.flipkart.com"
RESULTS_SELECTOR = "div[data-id]"
FALLBACK_SELECTOR = "div._1AtVbE"
LOGIN_POPUP_SELECTOR = "button._2KpZ6l._2doB4z"

TITLE_IMAGE_SELECTOR = "img.DByuf4"
TITLE_TEXT_SELECTORS = ("div.KzDlHZ", "div._4rR01T")
TITLE_LINK_SELECTOR = "a.wjcEIp"
PRICE_SELECTORS = ("div.Nx9bqj", "div._30jeq3")
RATING_SELECTORS = ("div.XQDdHH", "div._3LWZlK")


def _first_text(card: Node, selectors: Sequence[str]) -> Optional[str]:
    for selector in selectors:
        node = card.css_first(selector)
        if node is not None:
            text = (node.text() or "").strip()
            if text:
                return text
    return None


def find_cards(parser: HTMLParser) -> List[Node]:
    cards = parser.css(RESULTS_SELECTOR)
    if cards:
        return cards
    logger.debug("[Flipkart] data-id cards missing, using legacy container fallback")
    return parser.css(FALLBACK_SELECTOR)


def extract_title(card: Node) -> str:
    img = card.css_first(TITLE_IMAGE_SELECTOR)
    if img is not None:
        alt = (img.attributes.get("alt") or "").strip()
        if alt:
            return alt

    text = _first_text(card, TITLE_TEXT_SELECTORS)
    if text:
        return text

    link = card.css_first(TITLE_LINK_SELECTOR)
    if link is not None:
        return (link.attributes.get("title") or link.text() or "").strip()
    return ""


def extract_link(card: Node) -> Optional[str]:
    anchor = card.css_first('a[href*="/p/"]')
    if anchor is None:
        return None
    return absolute_url(anchor.attributes.get("href"), FLIPKART_BASE_URL)


def extract_image(card: Node) -> Optional[str]:
    img = card.css_first(TITLE_IMAGE_SELECTOR) or card.css_first("img")
    if img is None:
        return None
    src = (img.attributes.get("src") or "").strip()
    return src or None


def parse_flipkart_results(html: str, term: str, max_products: Optional[int] = None) -> List[ProductRecord]:
    """검색 결과 HTML에서 관련 있는 상품을 문서 순서대로 추출 (상한 도달 시 중단)"""
    limit = max_products or settings.max_products_per_source
    parser = HTMLParser(html or "")
    results: List[ProductRecord] = []

    for card in find_cards(parser):
        title = extract_title(card)
        if not is_relevant(term, title):
            continue

        price = parse_price_text(_first_text(card, PRICE_SELECTORS))
        if price is None:
            continue

        results.append(ProductRecord(
            title=title,
            link=extract_link(card),
            image=extract_image(card),
            price=price,
            id=card.attributes.get("data-id") or None,
            rating=_first_text(card, RATING_SELECTORS),
        ))
        if len(results) >= limit:
            break

    logger.debug(f"[Flipkart] Parsed {len(results)} relevant cards for '{sanitize_for_log(term)}'")
    return results
