"""Extractor result finalization

추출기 결과의 표준 형태(상한 N개, 가격 오름차순)를 한 곳에서 보장합니다.
"""

from typing import Iterable, List

from src.schemas.product_schema import ProductRecord


def finalize_products(candidates: Iterable[ProductRecord], max_products: int) -> List[ProductRecord]:
    """문서 순서대로 상한까지 자른 뒤 가격 오름차순 정렬

    Args:
        candidates: 문서 순서의 후보 상품
        max_products: 최대 개수

    Returns:
        정렬된 상품 목록 (len <= max_products)
    """
    kept: List[ProductRecord] = []
    for product in candidates:
        if len(kept) >= max_products:
            break
        kept.append(product)
    # sorted()는 안정 정렬이므로 같은 가격이면 문서 순서 유지
    return sorted(kept, key=lambda p: p.price)
