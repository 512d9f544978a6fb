"""Repositories implementation package."""

from .product_cache_repository import ProductCacheRepository

__all__ = ["ProductCacheRepository"]
