"""Flipkart 추출기"""

from __future__ import annotations

from typing import Optional

from src.core.config import settings
from src.crawlers.base_extractor import BrowserExtractor, SiteRules
from src.schemas.product_schema import ProductRecord

from .parsing import (
    FALLBACK_SELECTOR,
    FLIPKART_BASE_URL,
    LOGIN_POPUP_SELECTOR,
    RESULTS_SELECTOR,
    parse_flipkart_results,
)

FLIPKART_USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64)"


def flipkart_rules() -> SiteRules:
    return SiteRules(
        source="flipkart",
        search_url_template=FLIPKART_BASE_URL + "/search?q={query}",
        results_selector=RESULTS_SELECTOR,
        fallback_selector=FALLBACK_SELECTOR,
        goto_timeout_ms=settings.flipkart_goto_timeout_ms,
        selector_timeout_ms=settings.flipkart_selector_timeout_ms,
        user_agent=FLIPKART_USER_AGENT,
        wait_until="networkidle",
        settle_ms=settings.flipkart_settle_ms,
        popup_selector=LOGIN_POPUP_SELECTOR,
        popup_timeout_ms=settings.popup_dismiss_timeout_ms,
        popup_reflow_ms=1000,
    )


class FlipkartExtractor(BrowserExtractor):
    """Flipkart 검색 결과 추출기"""

    source = "flipkart"

    def __init__(self, rules: Optional[SiteRules] = None, max_products: Optional[int] = None):
        super().__init__(rules or flipkart_rules(), max_products)

    def parse(self, html: str, term: str) -> list[ProductRecord]:
        return parse_flipkart_results(html, term, self.max_products)
