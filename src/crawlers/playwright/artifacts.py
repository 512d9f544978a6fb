"""실패 시 디버그 아티팩트(스크린샷 + HTML) 저장."""

from __future__ import annotations

import time
from pathlib import Path
from typing import Optional

from playwright.async_api import Page

from src.core.config import settings
from src.core.logging import logger


def artifact_base_path(source: str, stage: str, directory: Optional[str] = None) -> Path:
    """<dir>/<source>-<stage>-<epoch_ms>"""
    root = Path(directory or settings.debug_artifact_dir)
    return root / f"{source}-{stage}-{int(time.time() * 1000)}"


async def capture_debug_artifacts(page: Page, source: str, stage: str) -> list[str]:
    """스크린샷과 HTML을 남기고 저장된 경로 목록을 반환

    저장 실패는 로그만 남깁니다. 호출 측은 원래 오류를 그대로 올립니다.
    """
    if not settings.debug_artifacts_enabled:
        return []

    saved: list[str] = []
    base = artifact_base_path(source, stage)
    try:
        base.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.warning(f"[Debug] Cannot create artifact dir {base.parent}: {e}")
        return saved

    png_path = base.with_suffix(".png")
    try:
        await page.screenshot(path=str(png_path), full_page=True)
        saved.append(str(png_path))
    except Exception as e:
        logger.warning(f"[Debug] {source} screenshot failed: {type(e).__name__}: {e}")

    html_path = base.with_suffix(".html")
    try:
        html = await page.content()
        html_path.write_text(html, encoding="utf-8")
        saved.append(str(html_path))
    except Exception as e:
        logger.warning(f"[Debug] {source} HTML dump failed: {type(e).__name__}: {e}")

    if saved:
        logger.warning(f"[Debug] {source} {stage} artifacts saved: {saved}")
    return saved
