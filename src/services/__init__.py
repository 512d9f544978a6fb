"""비즈니스 로직 서비스 - export only."""

from .impl import Aggregator, CacheAsideLookup, CacheService, StoreService

__all__ = ["Aggregator", "CacheAsideLookup", "CacheService", "StoreService"]
