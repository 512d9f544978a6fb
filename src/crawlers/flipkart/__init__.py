"""Flipkart extractor package."""

from .extractor import FlipkartExtractor, flipkart_rules
from .parsing import parse_flipkart_results

__all__ = ["FlipkartExtractor", "flipkart_rules", "parse_flipkart_results"]
