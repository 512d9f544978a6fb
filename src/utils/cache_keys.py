"""캐시 키 생성"""

PRODUCTS_KEY_PREFIX = "products"


def generate_cache_key(source: str, term: str) -> str:
    """
    소스/정규화된 검색어로 Redis 키 생성

    Args:
        source: 소스명 (amazon, flipkart)
        term: 정규화된 검색어

    Returns:
        "products:<source>:<term>"
    """
    return f"{PRODUCTS_KEY_PREFIX}:{source}:{term}"
