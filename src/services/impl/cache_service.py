"""Redis 캐시 서비스 - 캐싱 로직만 담당"""
import json
from typing import Optional

from redis.asyncio import Redis

from src.core.config import settings
from src.core.logging import logger, sanitize_for_log
from src.core.exceptions import (
    CacheConnectionException,
    CacheSerializationException,
)
from src.schemas.product_schema import ProductRecord
from src.utils.cache_keys import generate_cache_key


class CacheService:
    """Redis 캐시 관리 서비스 (1차 캐시)"""

    def __init__(self, redis_client: Optional[Redis] = None):
        """Redis 클라이언트 초기화

        연결은 첫 명령 실행 시점에 맺어집니다.
        """
        try:
            self.redis_client = redis_client or Redis.from_url(
                settings.redis_url,
                decode_responses=True,
                socket_connect_timeout=5,
                socket_timeout=5
            )
        except Exception as e:
            logger.error(f"[Cache] Failed to create Redis client: {e}")
            raise CacheConnectionException(str(e), {"reason": str(e)})

    async def get_products(self, source: str, term: str) -> Optional[list[ProductRecord]]:
        """
        캐시된 상품 목록 조회

        Args:
            source: 소스명
            term: 정규화된 검색어

        Returns:
            ProductRecord 목록 또는 None (미스)
        """
        cache_key = generate_cache_key(source, term)
        try:
            cached_data = await self.redis_client.get(cache_key)
        except Exception as e:
            logger.error(f"[Cache] Read error: {e}")
            raise CacheConnectionException(f"read failed: {e}", {"key": cache_key})

        if cached_data is None:
            logger.info(f"[Cache] Miss for key: {sanitize_for_log(cache_key)}")
            return None

        try:
            data = json.loads(cached_data)
            if not isinstance(data, list):
                raise ValueError(f"expected list, got {type(data).__name__}")
            products = [ProductRecord(**item) for item in data]
        except (json.JSONDecodeError, TypeError, ValueError) as e:
            logger.error(f"[Cache] Failed to deserialize {sanitize_for_log(cache_key)}: {e}")
            raise CacheSerializationException("deserialize", str(e), {"key": cache_key})

        logger.info(f"[Cache] Hit for key: {sanitize_for_log(cache_key)} ({len(products)} products)")
        return products

    async def set_products(
        self,
        source: str,
        term: str,
        products: list[ProductRecord],
        ttl: Optional[int] = None,
    ) -> bool:
        """
        상품 목록 캐싱 (SET key value EX ttl)

        Returns:
            성공 여부
        """
        cache_key = generate_cache_key(source, term)
        try:
            cached_value = json.dumps([p.model_dump() for p in products], ensure_ascii=False)
        except (TypeError, ValueError) as e:
            logger.error(f"[Cache] Failed to serialize cache data: {e}")
            raise CacheSerializationException("serialize", str(e), {"key": cache_key})

        expire = ttl or settings.cache_ttl
        try:
            await self.redis_client.set(cache_key, cached_value, ex=expire)
        except Exception as e:
            logger.error(f"[Cache] Write error: {e}")
            raise CacheConnectionException(f"write failed: {e}", {"key": cache_key})

        logger.info(f"[Cache] Set for key: {sanitize_for_log(cache_key)}, TTL: {expire}s")
        return True

    async def delete_products(self, source: str, term: str) -> bool:
        """캐시 삭제"""
        cache_key = generate_cache_key(source, term)
        try:
            result = await self.redis_client.delete(cache_key)
            logger.info(f"[Cache] Deleted key: {sanitize_for_log(cache_key)}")
            return result > 0
        except Exception as e:
            logger.error(f"[Cache] Delete error: {e}")
            return False

    async def health_check(self) -> bool:
        """Redis 연결 상태 확인"""
        try:
            return bool(await self.redis_client.ping())
        except Exception:
            return False

    async def close(self) -> None:
        try:
            await self.redis_client.aclose()
        except Exception as e:
            logger.warning(f"[Cache] Failed to close Redis client: {e}")
