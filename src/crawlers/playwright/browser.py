"""Playwright 브라우저 세션 관리.

추출기 호출 한 번이 Playwright/브라우저/컨텍스트를 단독으로 소유하고,
성공/실패와 무관하게 종료 시 모두 정리합니다. (풀링/재사용 없음)
"""

from __future__ import annotations

import platform
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from playwright.async_api import async_playwright, Browser, BrowserContext, Page, Playwright

from src.core.config import settings
from src.core.logging import logger
from src.core.exceptions import BrowserException


def build_launch_args() -> list[str]:
    args: list[str] = [
        "--disable-dev-shm-usage",
        "--disable-blink-features=AutomationControlled",
        "--no-first-run",
        "--no-default-browser-check",
    ]

    if platform.system().lower() == "linux":
        args.extend(["--no-sandbox", "--disable-setuid-sandbox"])

    deduped: list[str] = []
    seen: set[str] = set()
    for a in args:
        if a not in seen:
            seen.add(a)
            deduped.append(a)
    return deduped


@asynccontextmanager
async def browser_session(
    *,
    user_agent: str,
    extra_headers: Optional[dict[str, str]] = None,
    locale: Optional[str] = None,
    source: str = "browser",
) -> AsyncIterator[Page]:
    """격리된 브라우저 세션에서 Page 하나를 제공

    Raises:
        BrowserException: Playwright 시작/브라우저 실행 실패
    """
    pw: Optional[Playwright] = None
    browser: Optional[Browser] = None
    context: Optional[BrowserContext] = None

    try:
        try:
            pw = await async_playwright().start()
            browser = await pw.chromium.launch(
                headless=settings.browser_headless,
                executable_path=settings.browser_executable_path or None,
                args=build_launch_args(),
            )
        except Exception as e:
            logger.error(f"[Playwright] Failed to launch browser for {source}: {type(e).__name__}: {e}")
            raise BrowserException(f"Browser launch failed: {e}", {"source": source}) from e

        context = await browser.new_context(
            user_agent=user_agent,
            locale=locale,
            viewport={
                "width": settings.crawler_viewport_width,
                "height": settings.crawler_viewport_height,
            },
            extra_http_headers=extra_headers or {},
        )
        page = await context.new_page()
        logger.debug(f"[Playwright] Session opened for {source}")
        yield page
    finally:
        await _close_session(pw, browser, context, source)


async def _close_session(
    pw: Optional[Playwright],
    browser: Optional[Browser],
    context: Optional[BrowserContext],
    source: str,
) -> None:
    # 정리 중 오류는 원래 실패를 가리지 않도록 로그만 남김
    if context is not None:
        try:
            await context.close()
        except Exception as e:
            logger.warning(f"[Playwright] Failed to close context ({source}): {type(e).__name__}: {e}")
    if browser is not None:
        try:
            await browser.close()
        except Exception as e:
            logger.warning(f"[Playwright] Failed to close browser ({source}): {type(e).__name__}: {e}")
    if pw is not None:
        try:
            await pw.stop()
        except Exception as e:
            logger.warning(f"[Playwright] Failed to stop playwright ({source}): {type(e).__name__}: {e}")
    logger.debug(f"[Playwright] Session closed for {source}")
