"""스키마 및 예외 테스트"""
import pytest
from pydantic import ValidationError

from src.core.exceptions import (
    CacheConnectionException,
    InvalidQueryException,
    PriceAggregatorException,
    SelectorTimeoutException,
    UnknownSourceException,
    error_message_of,
)
from src.crawlers.result import finalize_products
from src.schemas.product_schema import LookupTier, ProductRecord, SourceResult
from tests.conftest import make_products


class TestProductRecord:
    def test_valid(self):
        p = ProductRecord(title="Mouse", link="https://a.com/p/1", price=349)
        assert p.price == 349.0
        assert p.asin is None

    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError):
            ProductRecord(title="Mouse", price=-1)

    def test_non_finite_price_rejected(self):
        with pytest.raises(ValidationError):
            ProductRecord(title="Mouse", price=float("inf"))

    def test_extra_fields_ignored(self):
        p = ProductRecord(title="Mouse", price=1, seller="x")
        assert "seller" not in p.model_dump()


class TestSourceResult:
    def test_success_payload_is_list(self):
        result = SourceResult.success("amazon", make_products(100), LookupTier.CACHE)
        payload = result.to_payload()
        assert isinstance(payload, list)
        assert payload[0]["price"] == 100.0
        assert result.is_error is False

    def test_failure_payload_is_error_object(self):
        result = SourceResult.failure("flipkart", "Timeout")
        assert result.to_payload() == {"error": "Timeout"}
        assert result.tier == LookupTier.ERROR

    def test_failure_never_empty_message(self):
        assert SourceResult.failure("amazon", "").error == "Unknown error"

    def test_exactly_one_of_products_or_error(self):
        with pytest.raises(ValidationError):
            SourceResult(source="amazon")
        with pytest.raises(ValidationError):
            SourceResult(source="amazon", products=[], error="x")

    def test_empty_product_list_is_success(self):
        result = SourceResult.success("amazon", [], LookupTier.SCRAPE)
        assert result.to_payload() == []


class TestFinalizeProducts:
    def test_cap_then_sort(self):
        """상한은 문서 순서 기준으로 먼저 적용"""
        candidates = make_products(500, 400, 300, 200, 100, 50, 10, 5)
        result = finalize_products(candidates, 6)
        assert [p.price for p in result] == [50, 100, 200, 300, 400, 500]

    def test_stable_for_equal_prices(self):
        candidates = make_products(100, 100, 50)
        result = finalize_products(candidates, 6)
        assert [p.title for p in result] == ["Wireless Mouse 3", "Wireless Mouse 1", "Wireless Mouse 2"]

    def test_empty(self):
        assert finalize_products([], 6) == []


class TestExceptions:
    def test_str_has_code(self):
        e = PriceAggregatorException("boom", error_code="X")
        assert str(e) == "[X] boom"

    def test_invalid_query_default_message(self):
        assert InvalidQueryException().message == "Missing q parameter"

    def test_selector_timeout_details(self):
        e = SelectorTimeoutException("amazon", ["a", "b"], 15000, artifacts=["x.png"])
        assert isinstance(e, PriceAggregatorException)
        assert e.details["artifacts"] == ["x.png"]

    def test_error_message_of(self):
        assert error_message_of(UnknownSourceException("ebay")) == UnknownSourceException("ebay").message
        assert error_message_of(CacheConnectionException("down")) == "Cache operation failed: down"
        assert error_message_of(RuntimeError("plain")) == "plain"
        assert error_message_of(RuntimeError()) == "RuntimeError"


class TestPayloadShape:
    def test_missing_source_fields_are_omitted(self):
        amazon = ProductRecord(title="Mouse", link="https://www.amazon.in/dp/B0AAAAAAA1", price=349, asin="B0AAAAAAA1")
        payload = SourceResult.success("amazon", [amazon], LookupTier.SCRAPE).to_payload()
        assert payload == [{
            "title": "Mouse",
            "link": "https://www.amazon.in/dp/B0AAAAAAA1",
            "price": 349.0,
            "asin": "B0AAAAAAA1",
        }]

    def test_flipkart_record_has_no_asin(self):
        flipkart = ProductRecord(title="Mouse", price=349, id="MOUF456", rating="4.1")
        payload = SourceResult.success("flipkart", [flipkart], LookupTier.CACHE).to_payload()
        assert "asin" not in payload[0]
        assert payload[0]["rating"] == "4.1"
