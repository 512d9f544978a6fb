"""영속 저장소 서비스 - 동기 리포지토리를 이벤트 루프 밖에서 실행"""
import asyncio
from typing import Optional

from src.core.config import settings
from src.core.database import Database
from src.core.logging import logger, sanitize_for_log
from src.repositories.impl.product_cache_repository import ProductCacheRepository
from src.schemas.product_schema import ProductRecord


class StoreService:
    """DB 캐시 관리 서비스 (2차 캐시)

    SQLAlchemy 세션은 동기이므로 모든 호출을 asyncio.to_thread로 감쌉니다.
    """

    def __init__(self, database: Database, ttl_days: Optional[int] = None):
        self.database = database
        self.ttl_days = ttl_days or settings.store_ttl_days

    async def find_products(self, source: str, term: str) -> Optional[list[ProductRecord]]:
        raw = await asyncio.to_thread(self._find, source, term)
        if raw is None:
            return None
        products = [ProductRecord(**item) for item in raw]
        logger.info(f"[Store] Hit for {source}:{sanitize_for_log(term)} ({len(products)} products)")
        return products

    async def save_products(self, source: str, term: str, products: list[ProductRecord]) -> None:
        payload = [p.model_dump() for p in products]
        await asyncio.to_thread(self._save, source, term, payload)
        logger.info(f"[Store] Saved {source}:{sanitize_for_log(term)} ({len(products)} products)")

    def _find(self, source: str, term: str):
        with self.database.session() as db:
            return ProductCacheRepository(db).find(source, term, self.ttl_days)

    def _save(self, source: str, term: str, payload: list[dict]) -> None:
        with self.database.session() as db:
            ProductCacheRepository(db).upsert(source, term, payload)
