"""집계 서비스 - 소스별 조회를 병렬로 실행하고 하나의 응답으로 합침"""
import asyncio
from typing import Any, Dict, Iterable, List, Union

from src.core.exceptions import InvalidQueryException, error_message_of
from src.core.logging import logger, sanitize_for_log
from src.schemas.product_schema import SourceResult
from src.services.impl.lookup_service import CacheAsideLookup
from src.utils.text.normalize import normalize_search_term

AggregatedResponse = Dict[str, Union[List[Dict[str, Any]], Dict[str, str]]]


class Aggregator:
    """
    검색어 하나를 모든 소스로 fan-out

    - 소스 간 순서 의존 없음 (gather)
    - 한 소스의 실패/지연은 다른 소스 결과에 영향 없음
    - 모든 소스가 끝난 뒤에만 반환 (부분 결과 조기 반환 없음)
    """

    def __init__(self, lookup: CacheAsideLookup, sources: Iterable[str]):
        self.lookup = lookup
        self.sources = list(sources)
        if not self.sources:
            raise ValueError("sources must not be empty")

    async def search(self, raw_query: str) -> AggregatedResponse:
        """원본 검색어 정규화 후 집계

        Raises:
            InvalidQueryException: 정규화 결과가 빈 문자열
        """
        term = normalize_search_term(raw_query)
        if not term:
            raise InvalidQueryException()
        return await self.aggregate(term)

    async def aggregate(self, term: str) -> AggregatedResponse:
        """정규화된 검색어로 모든 소스 조회

        Returns:
            {source: [product, ...]} 또는 {source: {"error": message}}
        """
        logger.info(f"[Aggregator] Search started: term='{sanitize_for_log(term)}', sources={self.sources}")

        outcomes = await asyncio.gather(
            *(self.lookup.lookup(source, term) for source in self.sources),
            return_exceptions=True,
        )

        results: List[SourceResult] = []
        for source, outcome in zip(self.sources, outcomes):
            if isinstance(outcome, BaseException):
                logger.error(f"[Aggregator] Unexpected lookup error [{source}]: {type(outcome).__name__}: {outcome}")
                results.append(SourceResult.failure(source, error_message_of(outcome)))
            else:
                results.append(outcome)

        payload = self.combine(results)
        summary = {r.source: (r.tier.value if not r.is_error else "error") for r in results}
        logger.info(f"[Aggregator] Search completed: term='{sanitize_for_log(term)}', tiers={summary}")
        return payload

    @staticmethod
    def combine(results: Iterable[SourceResult]) -> AggregatedResponse:
        """[SourceResult] → {source: products | {"error": msg}}"""
        payload: AggregatedResponse = {}
        for result in results:
            payload[result.source] = result.to_payload()
        return payload
