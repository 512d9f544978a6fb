"""헬스 체크 엔드포인트"""
import asyncio
from datetime import datetime

from fastapi import APIRouter, Depends

from src.schemas.product_schema import HealthResponse
from src.services.impl.cache_service import CacheService
from src.api.routes.scrape_routes import get_cache_service, get_database
from src.core.database import Database
from src.core.logging import logger
from src import __version__

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(
    cache_service: CacheService = Depends(get_cache_service),
    database: Database = Depends(get_database),
):
    """
    헬스 체크 엔드포인트

    - 서버 상태
    - Redis 연결 상태
    - DB 연결 상태
    """
    redis_ok = False
    db_ok = False

    try:
        redis_ok = await cache_service.health_check()
    except Exception as e:
        logger.error(f"Unexpected cache error: {e}")

    try:
        db_ok = await asyncio.to_thread(database.ping)
    except Exception as e:
        logger.error(f"Database connection error: {e}")

    status = "ok" if redis_ok and db_ok else ("degraded" if redis_ok or db_ok else "error")

    return HealthResponse(
        status=status,
        timestamp=datetime.now(),
        version=__version__
    )


@router.get("/")
async def root():
    """루트 엔드포인트"""
    return {
        "service": "가격 비교 집계 서비스",
        "version": __version__,
        "docs": "/docs"
    }
