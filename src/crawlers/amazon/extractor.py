"""Amazon.in 추출기"""

from __future__ import annotations

from typing import Optional

from src.core.config import settings
from src.crawlers.base_extractor import BrowserExtractor, SiteRules
from src.schemas.product_schema import ProductRecord

from .parsing import AMAZON_BASE_URL, FALLBACK_SELECTOR, RESULTS_SELECTOR, parse_amazon_results


def amazon_rules() -> SiteRules:
    return SiteRules(
        source="amazon",
        search_url_template=AMAZON_BASE_URL + "/s?k={query}&s=relevanceblender",
        results_selector=RESULTS_SELECTOR,
        fallback_selector=FALLBACK_SELECTOR,
        goto_timeout_ms=settings.amazon_goto_timeout_ms,
        selector_timeout_ms=settings.amazon_selector_timeout_ms,
        user_agent=settings.crawler_user_agent,
        wait_until="domcontentloaded",
        extra_headers={"Accept-Language": "en-IN,en;q=0.9"},
        locale="en-IN",
    )


class AmazonExtractor(BrowserExtractor):
    """Amazon 검색 결과 추출기"""

    source = "amazon"

    def __init__(self, rules: Optional[SiteRules] = None, max_products: Optional[int] = None):
        super().__init__(rules or amazon_rules(), max_products)

    def parse(self, html: str, term: str) -> list[ProductRecord]:
        return parse_amazon_results(html, term, self.max_products)
