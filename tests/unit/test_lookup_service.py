"""Cache-Aside Lookup 테스트

외부 호출 없음 (Redis/DB/브라우저는 Fake로 대체)
"""

import logging

import pytest

from src.core.exceptions import CacheConnectionException, DatabaseException, SelectorTimeoutException
from src.schemas.product_schema import LookupTier
from src.services import CacheAsideLookup
from tests.conftest import FakeCache, FakeExtractor, FakeStore, make_products


def make_lookup(cache: FakeCache, store: FakeStore, *extractors: FakeExtractor) -> CacheAsideLookup:
    return CacheAsideLookup(cache, store, {e.source: e for e in extractors})


@pytest.mark.asyncio
async def test_cache_hit_skips_store_and_extractor(fake_cache, fake_store):
    fake_cache.store["products:amazon:wireless mouse"] = make_products(349)
    extractor = FakeExtractor("amazon", make_products(1))
    lookup = make_lookup(fake_cache, fake_store, extractor)

    result = await lookup.lookup("amazon", "wireless mouse")

    assert result.tier == LookupTier.CACHE
    assert [p.price for p in result.products] == [349.0]
    assert fake_store.find_calls == 0
    assert extractor.calls == []


@pytest.mark.asyncio
async def test_empty_cached_list_is_a_hit(fake_cache, fake_store):
    fake_cache.store["products:amazon:zzz"] = []
    extractor = FakeExtractor("amazon", make_products(1))
    lookup = make_lookup(fake_cache, fake_store, extractor)

    result = await lookup.lookup("amazon", "zzz")

    assert result.products == []
    assert extractor.calls == []


@pytest.mark.asyncio
async def test_store_hit_warms_cache_without_extracting(fake_cache, fake_store):
    fake_store.docs[("flipkart", "wireless mouse")] = make_products(500, 600)
    extractor = FakeExtractor("flipkart", make_products(1))
    lookup = make_lookup(fake_cache, fake_store, extractor)

    result = await lookup.lookup("flipkart", "wireless mouse")
    await lookup.drain()

    assert result.tier == LookupTier.STORE
    assert [p.price for p in result.products] == [500.0, 600.0]
    assert extractor.calls == []
    assert [p.price for p in fake_cache.store["products:flipkart:wireless mouse"]] == [500.0, 600.0]


@pytest.mark.asyncio
async def test_cache_warm_failure_does_not_fail_request(fake_cache, fake_store):
    fake_cache.set_error = CacheConnectionException("down")
    fake_store.docs[("amazon", "wireless mouse")] = make_products(100)
    lookup = make_lookup(fake_cache, fake_store, FakeExtractor("amazon"))

    result = await lookup.lookup("amazon", "wireless mouse")
    await lookup.drain()

    assert result.is_error is False
    assert fake_cache.set_calls == 1


@pytest.mark.asyncio
async def test_full_miss_extracts_and_writes_both_tiers(fake_cache, fake_store):
    extractor = FakeExtractor("amazon", make_products(349, 699))
    lookup = make_lookup(fake_cache, fake_store, extractor)

    result = await lookup.lookup("amazon", "wireless mouse")

    assert result.tier == LookupTier.SCRAPE
    assert extractor.calls == ["wireless mouse"]
    assert "products:amazon:wireless mouse" in fake_cache.store
    assert ("amazon", "wireless mouse") in fake_store.docs

    # 두 번째 요청은 Redis에서 끝남
    second = await lookup.lookup("amazon", "wireless mouse")
    assert second.tier == LookupTier.CACHE
    assert extractor.calls == ["wireless mouse"]


@pytest.mark.asyncio
async def test_zero_results_are_cached(fake_cache, fake_store):
    extractor = FakeExtractor("flipkart", [])
    lookup = make_lookup(fake_cache, fake_store, extractor)

    result = await lookup.lookup("flipkart", "zzz")

    assert result.to_payload() == []
    assert fake_cache.store["products:flipkart:zzz"] == []
    assert fake_store.docs[("flipkart", "zzz")] == []


@pytest.mark.asyncio
async def test_extractor_failure_returns_error_and_writes_nothing(fake_cache, fake_store):
    error = SelectorTimeoutException("flipkart", ["div[data-id]", "div._1AtVbE"], 20000)
    lookup = make_lookup(fake_cache, fake_store, FakeExtractor("flipkart", error=error))

    result = await lookup.lookup("flipkart", "wireless mouse")

    assert result.is_error
    assert result.error == error.message
    assert fake_cache.set_calls == 0
    assert fake_store.save_calls == 0


@pytest.mark.asyncio
async def test_store_write_failure_leaves_no_cache_entry(fake_cache, fake_store):
    fake_store.save_error = RuntimeError("db write down")
    extractor = FakeExtractor("amazon", make_products(100))
    lookup = make_lookup(fake_cache, fake_store, extractor)

    result = await lookup.lookup("amazon", "wireless mouse")

    assert result.to_payload() == {"error": "db write down"}
    assert "products:amazon:wireless mouse" not in fake_cache.store

    # 다음 요청은 캐시 히트가 아니라 다시 추출
    fake_store.save_error = None
    second = await lookup.lookup("amazon", "wireless mouse")
    assert second.tier == LookupTier.SCRAPE
    assert extractor.calls == ["wireless mouse", "wireless mouse"]


@pytest.mark.asyncio
async def test_cache_write_failure_skips_store(fake_cache, fake_store):
    fake_cache.set_error = CacheConnectionException("down")
    lookup = make_lookup(fake_cache, fake_store, FakeExtractor("amazon", make_products(100)))

    result = await lookup.lookup("amazon", "wireless mouse")

    assert result.is_error
    assert fake_store.save_calls == 0


@pytest.mark.asyncio
async def test_lookup_logs_keep_term_on_one_line(fake_cache, fake_store, caplog):
    caplog.set_level(logging.INFO, logger="price_aggregator")
    lookup = make_lookup(fake_cache, fake_store, FakeExtractor("amazon", make_products(100)))

    await lookup.lookup("amazon", "wireless\nmouse")

    messages = [r.getMessage() for r in caplog.records if "[Lookup]" in r.getMessage()]
    assert messages
    assert all("\n" not in m for m in messages)


@pytest.mark.asyncio
async def test_plain_exception_message_is_kept(fake_cache, fake_store):
    lookup = make_lookup(fake_cache, fake_store, FakeExtractor("amazon", error=RuntimeError("Timeout")))
    result = await lookup.lookup("amazon", "wireless mouse")
    assert result.to_payload() == {"error": "Timeout"}


@pytest.mark.asyncio
async def test_cache_read_failure_becomes_source_error(fake_cache, fake_store):
    fake_cache.get_error = CacheConnectionException("refused")
    extractor = FakeExtractor("amazon", make_products(1))
    lookup = make_lookup(fake_cache, fake_store, extractor)

    result = await lookup.lookup("amazon", "wireless mouse")

    assert result.is_error
    assert extractor.calls == []


@pytest.mark.asyncio
async def test_store_read_failure_becomes_source_error(fake_cache, fake_store):
    fake_store.find_error = DatabaseException("db down")
    lookup = make_lookup(fake_cache, fake_store, FakeExtractor("amazon"))

    result = await lookup.lookup("amazon", "wireless mouse")

    assert result.error == "db down"


@pytest.mark.asyncio
async def test_unknown_source(fake_cache, fake_store):
    lookup = make_lookup(fake_cache, fake_store)
    result = await lookup.lookup("ebay", "wireless mouse")
    assert result.is_error
    assert "ebay" in result.error


@pytest.mark.asyncio
async def test_drain_without_pending_tasks(fake_cache, fake_store):
    await make_lookup(fake_cache, fake_store).drain()
