"""Services implementation package."""

from .cache_service import CacheService
from .store_service import StoreService
from .lookup_service import CacheAsideLookup
from .aggregation_service import Aggregator

__all__ = ["CacheService", "StoreService", "CacheAsideLookup", "Aggregator"]
