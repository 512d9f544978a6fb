"""상품 캐시 리포지토리 - DB 기반 영속 캐시."""

from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from src.core.logging import logger, sanitize_for_log
from src.core.exceptions import DatabaseException
from src.repositories.models import ProductCache


def utcnow() -> datetime:
    """naive UTC 시각 (DB 컬럼이 timezone 없는 TIMESTAMP)"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class ProductCacheRepository:
    def __init__(self, db: Session):
        self.db = db

    def find(self, source: str, search_term: str, max_age_days: int) -> Optional[List[Dict[str, Any]]]:
        """(source, search_term) 정확 일치 + 만료 전 문서의 products 반환."""
        if not source or not search_term:
            return None
        cutoff = utcnow() - timedelta(days=max(1, int(max_age_days)))
        try:
            row = (
                self.db.query(ProductCache)
                .filter(ProductCache.source == source)
                .filter(ProductCache.search_term == search_term)
                .filter(ProductCache.updated_at >= cutoff)
                .first()
            )
        except Exception as e:
            logger.error(f"[Store] Read error: {type(e).__name__}: {e}")
            raise DatabaseException(f"Failed to read product cache: {e}")

        if not row:
            return None
        try:
            products = json.loads(row.products_json)
        except (TypeError, ValueError) as e:
            logger.error(f"[Store] Corrupted products_json for {source}:{sanitize_for_log(search_term)}: {e}")
            return None
        return products if isinstance(products, list) else None

    def upsert(self, source: str, search_term: str, products: List[Dict[str, Any]]) -> None:
        """(source, search_term) 문서를 삽입/갱신하고 updated_at을 새로 찍음."""
        if not source or not search_term:
            return
        payload_json = json.dumps(products, ensure_ascii=False)

        try:
            self._write(source, search_term, payload_json)
        except IntegrityError:
            # 동시 요청이 먼저 insert한 경우: 갱신으로 재시도 (last-write-wins)
            self.db.rollback()
            try:
                self._write(source, search_term, payload_json)
            except Exception as e:
                self.db.rollback()
                logger.error(f"[Store] Write retry failed: {type(e).__name__}: {e}")
                raise DatabaseException(f"Failed to write product cache: {e}")
        except Exception as e:
            self.db.rollback()
            logger.error(f"[Store] Write error: {type(e).__name__}: {e}")
            raise DatabaseException(f"Failed to write product cache: {e}")

    def _write(self, source: str, search_term: str, payload_json: str) -> None:
        row = (
            self.db.query(ProductCache)
            .filter(ProductCache.source == source)
            .filter(ProductCache.search_term == search_term)
            .first()
        )
        if row:
            row.products_json = payload_json
            row.updated_at = utcnow()
        else:
            row = ProductCache(
                source=source,
                search_term=search_term,
                products_json=payload_json,
                updated_at=utcnow(),
            )
            self.db.add(row)
        self.db.commit()

    def purge_expired(self, max_age_days: int) -> int:
        """만료된 문서 삭제 후 삭제 건수 반환."""
        cutoff = utcnow() - timedelta(days=max(1, int(max_age_days)))
        try:
            deleted = (
                self.db.query(ProductCache)
                .filter(ProductCache.updated_at < cutoff)
                .delete(synchronize_session=False)
            )
            self.db.commit()
            return int(deleted or 0)
        except Exception as e:
            self.db.rollback()
            logger.error(f"[Store] Purge error: {type(e).__name__}: {e}")
            raise DatabaseException(f"Failed to purge product cache: {e}")

    def count(self) -> int:
        return self.db.query(ProductCache).count()
