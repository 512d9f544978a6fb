"""전역 테스트 설정

역할:
- 테스트 환경 구성
- 공통 Fake(캐시/저장소/추출기) 주입

금지:
- 실제 Redis/DB 서버, 브라우저, 네트워크 호출
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import pytest


# 프로젝트 루트를 경로에 추가
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DEBUG_ARTIFACTS_ENABLED", "false")

from src.schemas.product_schema import ProductRecord  # noqa: E402


@pytest.fixture(scope="session", autouse=True)
def test_env() -> None:
    """테스트 환경 변수 설정 (세션 전역)"""
    os.environ["ENVIRONMENT"] = "test"
    os.environ["LOG_LEVEL"] = "INFO"


@dataclass
class FakeCache:
    """CacheService 대역 (메모리 dict)"""

    store: dict[str, list[ProductRecord]] = field(default_factory=dict)
    get_calls: int = 0
    set_calls: int = 0
    get_error: Optional[Exception] = None
    set_error: Optional[Exception] = None

    async def get_products(self, source: str, term: str) -> Optional[list[ProductRecord]]:
        self.get_calls += 1
        if self.get_error:
            raise self.get_error
        return self.store.get(f"products:{source}:{term}")

    async def set_products(self, source: str, term: str, products: list[ProductRecord], ttl: Optional[int] = None) -> bool:
        self.set_calls += 1
        if self.set_error:
            raise self.set_error
        self.store[f"products:{source}:{term}"] = list(products)
        return True

    async def delete_products(self, source: str, term: str) -> bool:
        return self.store.pop(f"products:{source}:{term}", None) is not None


@dataclass
class FakeStore:
    """StoreService 대역"""

    docs: dict[tuple[str, str], list[ProductRecord]] = field(default_factory=dict)
    find_calls: int = 0
    save_calls: int = 0
    find_error: Optional[Exception] = None
    save_error: Optional[Exception] = None

    async def find_products(self, source: str, term: str) -> Optional[list[ProductRecord]]:
        self.find_calls += 1
        if self.find_error:
            raise self.find_error
        return self.docs.get((source, term))

    async def save_products(self, source: str, term: str, products: list[ProductRecord]) -> None:
        self.save_calls += 1
        if self.save_error:
            raise self.save_error
        self.docs[(source, term)] = list(products)


class FakeExtractor:
    """RetailerExtractor 대역"""

    def __init__(self, source: str, products: Optional[list[ProductRecord]] = None, error: Optional[Exception] = None):
        self.source = source
        self.products = products or []
        self.error = error
        self.calls: list[str] = []

    async def extract(self, term: str) -> list[ProductRecord]:
        self.calls.append(term)
        if self.error:
            raise self.error
        return list(self.products)


def make_products(*prices: float, prefix: str = "Wireless Mouse") -> list[ProductRecord]:
    return [
        ProductRecord(title=f"{prefix} {i}", link=f"https://example.com/p/{i}", price=price)
        for i, price in enumerate(prices, start=1)
    ]


@pytest.fixture
def fake_cache() -> FakeCache:
    return FakeCache()


@pytest.fixture
def fake_store() -> FakeStore:
    return FakeStore()
