"""테스트 자산(데이터) 레이어

규칙:
- 로직 없음 (단순 dict/list/primitive)
- 네트워크/브라우저 의존 없음
"""

from .products import PRODUCTS
from .html_pages import AMAZON_SEARCH_HTML, AMAZON_FALLBACK_HTML, FLIPKART_SEARCH_HTML

__all__ = [
    "PRODUCTS",
    "AMAZON_SEARCH_HTML",
    "AMAZON_FALLBACK_HTML",
    "FLIPKART_SEARCH_HTML",
]
