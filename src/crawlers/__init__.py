"""Retailer extractors (Playwright + selectolax).

공개 API는 이 파일에서만 export합니다.
"""

from .executor import RetailerExtractor
from .base_extractor import BrowserExtractor, SiteRules
from .amazon import AmazonExtractor
from .flipkart import FlipkartExtractor
from .registry import EXTRACTOR_FACTORIES, build_extractors

__all__ = [
        "RetailerExtractor",
        "BrowserExtractor",
        "SiteRules",
        "AmazonExtractor",
        "FlipkartExtractor",
        "EXTRACTOR_FACTORIES",
        "build_extractors",
]
