"""API 엔드포인트 패키지 - export only."""

from .routes import health_router, scrape_router, get_aggregator, get_cache_service, get_database

__all__ = ["health_router", "scrape_router", "get_aggregator", "get_cache_service", "get_database"]
