"""데이터베이스 모델"""
from sqlalchemy import Column, Integer, String, TIMESTAMP, func, Index, Text
from src.core.database import Base


class ProductCache(Base):
    """소스별 검색 결과 영속 캐시 (Redis 미스 시 재사용).

    - source: 소스명 (amazon, flipkart)
    - search_term: 정규화된 검색어 (trim + 공백 축약 + 소문자)
    - products_json: ProductRecord 목록을 JSON으로 직렬화한 값
    - updated_at: 마지막 저장 시각 (store_ttl_days 동안 유효)
    """

    __tablename__ = "product_cache"

    id = Column(Integer, primary_key=True, index=True)
    source = Column(String(50), nullable=False, index=True)
    search_term = Column(String(500), nullable=False)
    products_json = Column(Text, nullable=False)
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now(), nullable=False, index=True)

    __table_args__ = (
        Index("idx_product_cache_source_term", "source", "search_term", unique=True),
    )

    def __repr__(self) -> str:
        return f"<ProductCache(source={self.source}, term={self.search_term}, updated_at={self.updated_at})>"
