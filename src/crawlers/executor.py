"""Extractor Protocol - 소스별 추출기가 구현해야 할 인터페이스"""

from typing import Protocol

from src.schemas.product_schema import ProductRecord


class RetailerExtractor(Protocol):
    """소매 사이트 추출기 프로토콜

    Cache-Aside Lookup은 이 인터페이스만 알고, 사이트별 셀렉터/파싱 규칙은
    각 구현체 안에 갇혀 있습니다.

    구현 예시:
        class AmazonExtractor(BrowserExtractor):
            source = "amazon"
            def parse(self, html: str, term: str) -> list[ProductRecord]:
                ...
    """

    source: str

    async def extract(self, term: str) -> list[ProductRecord]:
        """검색 결과 추출

        Args:
            term: 정규화된(비어 있지 않은) 검색어

        Returns:
            가격 오름차순, 최대 N개의 ProductRecord

        Raises:
            NavigationException: 검색 페이지 이동 실패
            SelectorTimeoutException: 결과 컨테이너 대기 타임아웃
            BrowserException: 브라우저 실행 실패
        """
        ...
