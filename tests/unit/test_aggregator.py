"""Aggregator 테스트 (소스 간 격리 / 병렬 실행)"""

import asyncio

import pytest

from src.core.exceptions import InvalidQueryException
from src.schemas.product_schema import LookupTier, SourceResult
from src.services import Aggregator, CacheAsideLookup
from tests.conftest import FakeCache, FakeExtractor, FakeStore, make_products


class ScriptedLookup:
    """소스별 결과를 미리 정해두는 Lookup 대역"""

    def __init__(self, outcomes: dict):
        self.outcomes = outcomes
        self.calls: list[tuple[str, str]] = []

    async def lookup(self, source: str, term: str) -> SourceResult:
        self.calls.append((source, term))
        outcome = self.outcomes[source]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def test_requires_sources():
    with pytest.raises(ValueError):
        Aggregator(ScriptedLookup({}), [])


@pytest.mark.asyncio
async def test_one_source_failure_does_not_affect_other():
    lookup = ScriptedLookup({
        "amazon": SourceResult.failure("amazon", "Timeout"),
        "flipkart": SourceResult.success("flipkart", make_products(500, 600), LookupTier.STORE),
    })
    aggregator = Aggregator(lookup, ["amazon", "flipkart"])

    payload = await aggregator.aggregate("wireless mouse")

    assert payload["amazon"] == {"error": "Timeout"}
    assert [p["price"] for p in payload["flipkart"]] == [500.0, 600.0]


@pytest.mark.asyncio
async def test_unexpected_lookup_exception_is_isolated():
    lookup = ScriptedLookup({
        "amazon": RuntimeError("boom"),
        "flipkart": SourceResult.success("flipkart", [], LookupTier.CACHE),
    })
    payload = await Aggregator(lookup, ["amazon", "flipkart"]).aggregate("x")

    assert payload == {"amazon": {"error": "boom"}, "flipkart": []}


@pytest.mark.asyncio
async def test_every_source_gets_a_key():
    lookup = ScriptedLookup({
        "amazon": SourceResult.success("amazon", [], LookupTier.SCRAPE),
        "flipkart": SourceResult.success("flipkart", [], LookupTier.SCRAPE),
    })
    payload = await Aggregator(lookup, ["amazon", "flipkart"]).aggregate("x")
    assert set(payload) == {"amazon", "flipkart"}


@pytest.mark.asyncio
async def test_sources_run_concurrently():
    """느린 소스가 다른 소스의 시작을 막지 않음"""
    started = asyncio.Event()

    class SlowExtractor(FakeExtractor):
        async def extract(self, term):
            await asyncio.wait_for(started.wait(), timeout=1.0)
            return make_products(10)

    class SignalExtractor(FakeExtractor):
        async def extract(self, term):
            started.set()
            return make_products(20)

    lookup = CacheAsideLookup(
        FakeCache(), FakeStore(),
        {"amazon": SlowExtractor("amazon"), "flipkart": SignalExtractor("flipkart")},
    )
    payload = await Aggregator(lookup, ["amazon", "flipkart"]).aggregate("wireless mouse")

    assert payload["amazon"][0]["price"] == 10.0
    assert payload["flipkart"][0]["price"] == 20.0


@pytest.mark.asyncio
async def test_search_normalizes_query():
    lookup = ScriptedLookup({"amazon": SourceResult.success("amazon", [], LookupTier.CACHE)})
    await Aggregator(lookup, ["amazon"]).search("  Wireless   Mouse  ")
    assert lookup.calls == [("amazon", "wireless mouse")]


@pytest.mark.asyncio
async def test_search_rejects_blank_query():
    lookup = ScriptedLookup({})
    with pytest.raises(InvalidQueryException):
        await Aggregator(lookup, ["amazon"]).search("   ")
    assert lookup.calls == []
