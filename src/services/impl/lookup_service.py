"""Cache-Aside Lookup - 소스 하나 × 검색어 하나

Redis → DB → 추출기 순서로 조회하고, 추출 성공 시 두 계층 모두에 기록합니다.
어떤 경로로 실패하든 예외를 밖으로 던지지 않고 소스별 오류 결과로 바꿉니다.
"""
import asyncio
from typing import Mapping, Optional, Set

from src.core.exceptions import UnknownSourceException, error_message_of
from src.core.logging import logger, sanitize_for_log
from src.crawlers.executor import RetailerExtractor
from src.schemas.product_schema import LookupTier, ProductRecord, SourceResult
from src.services.impl.cache_service import CacheService
from src.services.impl.store_service import StoreService


class CacheAsideLookup:
    """
    소스별 캐시 어사이드 조회 - SRP: 계층 조회 순서만 담당

    - 1차 캐시는 CacheService (Redis)
    - 2차 캐시는 StoreService (DB)
    - 추출은 RetailerExtractor
    """

    def __init__(
        self,
        cache_service: CacheService,
        store_service: StoreService,
        extractors: Mapping[str, RetailerExtractor],
    ):
        self.cache_service = cache_service
        self.store_service = store_service
        self.extractors = dict(extractors)
        # fire-and-forget 작업이 GC되지 않도록 참조 유지
        self._warm_tasks: Set[asyncio.Task] = set()

    async def lookup(self, source: str, term: str) -> SourceResult:
        """
        소스 하나에 대한 조회

        1. Redis 히트 → 즉시 반환 (DB/추출기 미접근)
        2. DB 히트 → Redis 재적재(비동기, 실패 무시) 후 반환
        3. 전체 미스 → 추출 → Redis/DB 기록 → 반환
        4. 추출 실패 → 캐시 기록 없이 {error}

        Returns:
            SourceResult (products 또는 error)
        """
        try:
            cached = await self.cache_service.get_products(source, term)
            if cached is not None:
                return SourceResult.success(source, cached, LookupTier.CACHE)

            stored = await self.store_service.find_products(source, term)
            if stored is not None:
                self._schedule_warm(source, term, stored)
                return SourceResult.success(source, stored, LookupTier.STORE)
        except Exception as e:
            logger.error(f"[Lookup] {source} cache/store lookup failed: {type(e).__name__}: {e}")
            return SourceResult.failure(source, error_message_of(e))

        extractor = self.extractors.get(source)
        if extractor is None:
            return SourceResult.failure(source, UnknownSourceException(source).message)

        logger.info(f"[Lookup] Full miss, extracting: {source}:{sanitize_for_log(term)}")
        try:
            products = await extractor.extract(term)
        except Exception as e:
            logger.error(f"[Lookup] Error scraping [{source}]: {type(e).__name__}: {e}")
            return SourceResult.failure(source, error_message_of(e))

        try:
            await self.cache_service.set_products(source, term, products)
        except Exception as e:
            logger.error(f"[Lookup] {source} cache write failed: {type(e).__name__}: {e}")
            return SourceResult.failure(source, error_message_of(e))

        try:
            await self.store_service.save_products(source, term, products)
        except Exception as e:
            logger.error(f"[Lookup] {source} store write failed: {type(e).__name__}: {e}")
            # DB에 없는 결과가 Redis에서 서빙되지 않도록 되돌림
            await self._evict_cache(source, term)
            return SourceResult.failure(source, error_message_of(e))

        return SourceResult.success(source, products, LookupTier.SCRAPE)

    async def _evict_cache(self, source: str, term: str) -> None:
        try:
            await self.cache_service.delete_products(source, term)
        except Exception as e:
            logger.warning(f"[Lookup] Cache evict failed for {source}:{sanitize_for_log(term)}: {type(e).__name__}: {e}")

    def _schedule_warm(self, source: str, term: str, products: list[ProductRecord]) -> None:
        task = asyncio.create_task(self._warm_cache(source, term, products))
        self._warm_tasks.add(task)
        task.add_done_callback(self._warm_tasks.discard)

    async def _warm_cache(self, source: str, term: str, products: list[ProductRecord]) -> None:
        try:
            await self.cache_service.set_products(source, term, products)
            logger.debug(f"[Lookup] Warmed cache from store: {source}:{sanitize_for_log(term)}")
        except Exception as e:
            logger.warning(f"[Lookup] Cache warm failed for {source}:{sanitize_for_log(term)}: {type(e).__name__}: {e}")

    async def drain(self, timeout: Optional[float] = None) -> None:
        """진행 중인 캐시 재적재 작업 완료 대기"""
        pending = list(self._warm_tasks)
        if not pending:
            return
        await asyncio.wait(pending, timeout=timeout)
