"""소스명 → 추출기 매핑"""

from typing import Callable, Dict, Iterable

from src.core.exceptions import UnknownSourceException
from src.core.logging import logger

from .amazon import AmazonExtractor
from .executor import RetailerExtractor
from .flipkart import FlipkartExtractor

EXTRACTOR_FACTORIES: Dict[str, Callable[[], RetailerExtractor]] = {
    "amazon": AmazonExtractor,
    "flipkart": FlipkartExtractor,
}


def build_extractors(sources: Iterable[str]) -> Dict[str, RetailerExtractor]:
    """설정된 소스 목록으로 추출기 인스턴스 생성

    Raises:
        UnknownSourceException: 등록되지 않은 소스명
    """
    extractors: Dict[str, RetailerExtractor] = {}
    for source in sources:
        factory = EXTRACTOR_FACTORIES.get(source)
        if factory is None:
            raise UnknownSourceException(source)
        extractors[source] = factory()
    logger.info(f"[Registry] Extractors ready: {list(extractors)}")
    return extractors
