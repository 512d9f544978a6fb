"""Amazon extractor package."""

from .extractor import AmazonExtractor, amazon_rules
from .parsing import parse_amazon_results

__all__ = ["AmazonExtractor", "amazon_rules", "parse_amazon_results"]
