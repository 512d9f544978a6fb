"""Scrape Routes - 집계 엔드포인트

HTTP Layer는 검색어 검증 후 Aggregator로 위임하는 Translator 역할만 수행합니다.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from src.core.config import settings
from src.core.database import Database
from src.core.exceptions import InvalidQueryException
from src.core.logging import logger, sanitize_for_log
from src.crawlers import build_extractors
from src.schemas.product_schema import ErrorResponse
from src.services.impl.aggregation_service import Aggregator
from src.services.impl.cache_service import CacheService
from src.services.impl.lookup_service import CacheAsideLookup
from src.services.impl.store_service import StoreService
from src.utils.text.normalize import normalize_search_term

router = APIRouter(prefix="/api", tags=["scrape"])

# 싱글톤 서비스
_cache_service: Optional[CacheService] = None
_database: Optional[Database] = None
_lookup: Optional[CacheAsideLookup] = None
_aggregator: Optional[Aggregator] = None


def get_cache_service() -> CacheService:
    """CacheService 싱글톤"""
    global _cache_service
    if _cache_service is None:
        _cache_service = CacheService()
    return _cache_service


def get_database() -> Database:
    """Database 싱글톤 (엔진은 첫 사용 시 생성)"""
    global _database
    if _database is None:
        _database = Database(settings.database_url)
    return _database


def get_aggregator(
    cache_service: CacheService = Depends(get_cache_service),
    database: Database = Depends(get_database),
) -> Aggregator:
    """Aggregator 싱글톤

    Redis/DB/추출기를 묶은 CacheAsideLookup을 소스 목록으로 fan-out합니다.
    """
    global _lookup, _aggregator
    if _aggregator is None:
        _lookup = CacheAsideLookup(
            cache_service=cache_service,
            store_service=StoreService(database),
            extractors=build_extractors(settings.enabled_sources),
        )
        _aggregator = Aggregator(_lookup, settings.enabled_sources)
    return _aggregator


async def shutdown_services() -> None:
    """앱 종료 시 리소스 정리"""
    global _cache_service, _database, _lookup, _aggregator
    if _lookup is not None:
        await _lookup.drain(timeout=5.0)
    if _cache_service is not None:
        await _cache_service.close()
    if _database is not None:
        _database.dispose()
    _cache_service = None
    _database = None
    _lookup = None
    _aggregator = None


@router.get("/scrape", responses={400: {"model": ErrorResponse}})
async def scrape(
    q: Optional[str] = Query(None, description="검색어"),
    aggregator: Aggregator = Depends(get_aggregator),
):
    """소스별 상품 목록 집계 API

    Flow:
        1. 검색어 정규화 (빈 문자열이면 400, fan-out 없음)
        2. Aggregator에 위임 (소스별 Redis → DB → 추출기)
        3. {source: [products] | {"error": msg}} 반환
    """
    term = normalize_search_term(q)
    if not term:
        error = InvalidQueryException()
        logger.warning(f"[API] Rejected empty query: raw='{sanitize_for_log(q or '')}'")
        return JSONResponse(ErrorResponse(error=error.message).model_dump(), status_code=400)

    logger.info(f"[API] Scrape request: term='{sanitize_for_log(term)}'")
    payload = await aggregator.aggregate(term)
    return JSONResponse(payload, status_code=200)
