"""브라우저 기반 추출기 공통 흐름.

검색 URL 생성 → 격리된 브라우저 세션 → goto → (대기) → 팝업 닫기
→ 결과 셀렉터(+폴백) 대기 → HTML 파싱 → 상한/정렬.

사이트별 차이는 SiteRules(네비게이션 규칙)와 parse()(DOM 파싱 규칙)로만
표현합니다. 사이트 개편 시 이 두 곳만 바꾸면 됩니다.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional
from urllib.parse import quote_plus

from playwright.async_api import Page

from src.core.config import settings
from src.core.logging import logger, sanitize_for_log
from src.core.exceptions import NavigationException, ParsingException, SelectorTimeoutException
from src.crawlers.playwright import (
    browser_session,
    capture_debug_artifacts,
    dismiss_popup,
    wait_for_any_selector,
)
from src.crawlers.result import finalize_products
from src.schemas.product_schema import ProductRecord


@dataclass(frozen=True)
class SiteRules:
    """사이트별 네비게이션 규칙"""

    source: str
    search_url_template: str  # "{query}" 자리에 URL 인코딩된 검색어
    results_selector: str
    fallback_selector: str
    goto_timeout_ms: int
    selector_timeout_ms: int
    user_agent: str
    wait_until: str = "domcontentloaded"
    extra_headers: dict[str, str] = field(default_factory=dict)
    locale: Optional[str] = None
    settle_ms: int = 0
    popup_selector: Optional[str] = None
    popup_timeout_ms: int = 5000
    popup_reflow_ms: int = 1000

    def build_search_url(self, term: str) -> str:
        return self.search_url_template.format(query=quote_plus(term))


class BrowserExtractor(ABC):
    """Playwright로 검색 결과 페이지를 열어 상품을 추출하는 기본 클래스"""

    source: str = ""

    def __init__(self, rules: SiteRules, max_products: Optional[int] = None):
        self.rules = rules
        self.max_products = max_products or settings.max_products_per_source

    @abstractmethod
    def parse(self, html: str, term: str) -> list[ProductRecord]:
        """결과 페이지 HTML에서 후보 상품을 문서 순서대로 추출"""

    async def extract(self, term: str) -> list[ProductRecord]:
        """검색어 하나에 대해 상품 목록 추출

        실패는 하나의 추출기 예외로 올라가며 부분 결과는 반환하지 않습니다.
        """
        if not term or not term.strip():
            raise ValueError("Missing searchTerm")

        url = self.rules.build_search_url(term)
        tag = self.source.capitalize()
        logger.info(f"[{tag}] Extracting: term='{sanitize_for_log(term)}'")

        async with browser_session(
            user_agent=self.rules.user_agent,
            extra_headers=self.rules.extra_headers,
            locale=self.rules.locale,
            source=self.source,
        ) as page:
            await self._navigate(page, url)

            if self.rules.settle_ms > 0:
                await page.wait_for_timeout(self.rules.settle_ms)

            if self.rules.popup_selector:
                await dismiss_popup(
                    page,
                    self.rules.popup_selector,
                    timeout_ms=self.rules.popup_timeout_ms,
                    reflow_ms=self.rules.popup_reflow_ms,
                )

            await self._wait_for_results(page)
            html = await page.content()

        try:
            candidates = self.parse(html, term)
        except Exception as e:
            logger.error(f"[{tag}] Failed to parse results page: {type(e).__name__}: {e}")
            raise ParsingException(f"{type(e).__name__}: {e}", {"source": self.source}) from e

        products = finalize_products(candidates, self.max_products)
        logger.info(f"[{tag}] Extracted {len(products)} products: term='{sanitize_for_log(term)}'")
        return products

    async def _navigate(self, page: Page, url: str) -> None:
        try:
            await page.goto(url, wait_until=self.rules.wait_until, timeout=self.rules.goto_timeout_ms)
        except Exception as e:
            logger.warning(f"[{self.source.capitalize()}] goto failed, capturing artifacts: {type(e).__name__}: {e}")
            artifacts = await capture_debug_artifacts(page, self.source, "goto-fail")
            raise NavigationException(
                self.source, url, f"{type(e).__name__}: {e}", {"url": url, "artifacts": artifacts}
            ) from e

    async def _wait_for_results(self, page: Page) -> str:
        selectors = [self.rules.results_selector, self.rules.fallback_selector]
        found = await wait_for_any_selector(page, selectors, self.rules.selector_timeout_ms)
        if found is not None:
            return found

        logger.warning(f"[{self.source.capitalize()}] Selector timeout, saving debug artifacts")
        artifacts = await capture_debug_artifacts(page, self.source, "debug")
        raise SelectorTimeoutException(
            self.source, selectors, self.rules.selector_timeout_ms, artifacts=artifacts
        )
