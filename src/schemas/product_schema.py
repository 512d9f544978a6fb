"""Pydantic 스키마 정의"""
import math
from datetime import datetime
from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class ProductRecord(BaseModel):
    """소스 하나가 반환하는 상품 한 건

    - Amazon: title/link/image/price/asin
    - Flipkart: title/link/image/price/id/rating
    """
    model_config = ConfigDict(extra="ignore")

    title: Optional[str] = Field(None, description="상품명")
    link: Optional[str] = Field(None, description="상품 상세 URL")
    image: Optional[str] = Field(None, description="대표 이미지 URL")
    price: float = Field(..., ge=0, description="가격 (통화 단위 그대로)")
    asin: Optional[str] = Field(None, description="Amazon ASIN")
    id: Optional[str] = Field(None, description="소스별 상품 식별자")
    rating: Optional[str] = Field(None, description="평점 원문")

    @field_validator("price")
    @classmethod
    def validate_price(cls, v: float) -> float:
        if not math.isfinite(v):
            raise ValueError("price must be finite")
        return v


class LookupTier(str, Enum):
    """결과가 어느 계층에서 왔는지"""

    CACHE = "cache"  # Redis
    STORE = "store"  # DB
    SCRAPE = "scrape"  # 추출기 실행
    ERROR = "error"


class SourceResult(BaseModel):
    """소스별 조회 결과 (products 또는 error 중 하나만 존재)"""

    source: str
    products: Optional[list[ProductRecord]] = None
    error: Optional[str] = None
    tier: LookupTier = LookupTier.ERROR

    @model_validator(mode="after")
    def _exactly_one(self) -> "SourceResult":
        if (self.products is None) == (self.error is None):
            raise ValueError("SourceResult must carry exactly one of products or error")
        return self

    @property
    def is_error(self) -> bool:
        return self.error is not None

    @classmethod
    def success(cls, source: str, products: list[ProductRecord], tier: LookupTier) -> "SourceResult":
        return cls(source=source, products=products, tier=tier)

    @classmethod
    def failure(cls, source: str, message: str) -> "SourceResult":
        return cls(source=source, error=message or "Unknown error", tier=LookupTier.ERROR)

    def to_payload(self) -> Union[list[dict[str, Any]], dict[str, str]]:
        """응답 payload의 값 형태로 변환 (소스에 없는 필드는 생략)"""
        if self.error is not None:
            return {"error": self.error}
        return [p.model_dump(exclude_none=True) for p in self.products or []]


class ErrorResponse(BaseModel):
    """요청 단위 오류 응답"""
    error: str


class HealthResponse(BaseModel):
    """헬스 체크 응답"""
    status: str
    timestamp: datetime
    version: str
