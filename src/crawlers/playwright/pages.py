"""Playwright page 보조 함수.

페이지 이동/셀렉터 대기/팝업 닫기처럼 추출기마다 반복되는 동작을 모읍니다.
"""

from __future__ import annotations

from typing import Optional, Sequence

from playwright.async_api import Page, TimeoutError as PlaywrightTimeoutError

from src.core.logging import logger


async def wait_for_any_selector(page: Page, selectors: Sequence[str], timeout_ms: int) -> Optional[str]:
    """셀렉터를 순서대로 기다려 처음 나타난 것을 반환 (모두 실패 시 None)

    각 셀렉터는 timeout_ms를 따로 가집니다.
    """
    for selector in selectors:
        try:
            await page.wait_for_selector(selector, timeout=timeout_ms)
            return selector
        except PlaywrightTimeoutError:
            logger.debug(f"[Playwright] Selector timeout: {selector} ({timeout_ms}ms)")
            continue
    return None


async def dismiss_popup(page: Page, selector: str, timeout_ms: int, reflow_ms: int = 1000) -> bool:
    """로그인 모달 등 인터스티셜을 닫아봄 (없으면 그냥 통과)

    Returns:
        닫기 버튼을 눌렀는지 여부
    """
    try:
        await page.click(selector, timeout=timeout_ms)
    except PlaywrightTimeoutError:
        logger.debug(f"[Playwright] No popup to close: {selector}")
        return False
    except Exception as e:
        logger.debug(f"[Playwright] Popup dismiss skipped: {type(e).__name__}: {e}")
        return False

    if reflow_ms > 0:
        await page.wait_for_timeout(reflow_ms)
    return True
