"""커스텀 예외 정의 (Structured Exception Hierarchy)"""
from typing import Any, Optional


class PriceAggregatorException(Exception):
    """기본 예외 클래스 - 모든 커스텀 예외의 부모"""
    def __init__(self, message: str, error_code: str = "UNKNOWN_ERROR", details: Optional[dict[str, Any]] = None):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"


# 추출기(스크래퍼) 관련 예외
class ExtractorException(PriceAggregatorException):
    """추출기 예외의 기본 클래스"""
    def __init__(self, message: str, error_code: str = "EXTRACTOR_ERROR", details: Optional[dict[str, Any]] = None):
        super().__init__(message, error_code or "EXTRACTOR_ERROR", details)


class BrowserException(ExtractorException):
    """브라우저 실행 오류"""
    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message, "BROWSER_ERROR", details)


class NavigationException(ExtractorException):
    """검색 페이지 이동 실패 (goto 타임아웃 포함)"""
    def __init__(self, source: str, url: str, reason: str, details: Optional[dict[str, Any]] = None):
        message = f"{source} navigation failed: {reason}"
        super().__init__(message, "NAVIGATION_FAILED",
                        details or {"source": source, "url": url, "reason": reason})


class SelectorTimeoutException(ExtractorException):
    """결과 컨테이너 셀렉터가 시간 내에 나타나지 않음"""
    def __init__(
        self,
        source: str,
        selectors: list[str],
        timeout_ms: int,
        artifacts: Optional[list[str]] = None,
    ):
        message = f"{source} results did not appear within {timeout_ms}ms ({', '.join(selectors)})"
        super().__init__(message, "SELECTOR_TIMEOUT", {
            "source": source,
            "selectors": selectors,
            "timeout_ms": timeout_ms,
            "artifacts": artifacts or [],
        })


class ParsingException(ExtractorException):
    """HTML 파싱 오류"""
    def __init__(self, reason: str, details: Optional[dict[str, Any]] = None):
        message = f"Failed to parse results page: {reason}"
        super().__init__(message, "PARSING_ERROR", details or {"reason": reason})


class UnknownSourceException(ExtractorException):
    """추출기가 등록되지 않은 소스"""
    def __init__(self, source: str):
        super().__init__(f"No extractor registered for source: {source}", "UNKNOWN_SOURCE", {"source": source})


# 캐시 관련 예외
class CacheException(PriceAggregatorException):
    """캐시 관련 예외"""
    def __init__(self, message: str, error_code: str = "CACHE_ERROR", details: Optional[dict[str, Any]] = None):
        super().__init__(message, error_code or "CACHE_ERROR", details)


class CacheConnectionException(CacheException):
    """캐시 연결/입출력 실패"""
    def __init__(self, reason: str, details: Optional[dict[str, Any]] = None):
        message = f"Cache operation failed: {reason}"
        super().__init__(message, "CACHE_CONNECTION_ERROR", details)


class CacheSerializationException(CacheException):
    """캐시 직렬화/역직렬화 오류"""
    def __init__(self, operation: str, reason: str, details: Optional[dict[str, Any]] = None):
        message = f"Cache {operation} failed: {reason}"
        super().__init__(message, "CACHE_SERIALIZATION_ERROR",
                        details or {"operation": operation, "reason": reason})


# 데이터베이스 관련 예외
class DatabaseException(PriceAggregatorException):
    """데이터베이스 관련 예외"""
    def __init__(self, message: str, error_code: str = "DB_ERROR", details: Optional[dict[str, Any]] = None):
        super().__init__(message, error_code or "DB_ERROR", details)


class DatabaseConnectionException(DatabaseException):
    """DB 연결 실패"""
    def __init__(self, reason: str, details: Optional[dict[str, Any]] = None):
        message = f"Database connection failed: {reason}"
        super().__init__(message, "DB_CONNECTION_ERROR", details)


# 유효성 검증 관련 예외
class ValidationException(PriceAggregatorException):
    """유효성 검증 예외"""
    def __init__(self, field: str, reason: str, details: Optional[dict[str, Any]] = None):
        message = f"Validation failed for '{field}': {reason}"
        super().__init__(message, "VALIDATION_ERROR",
                        details or {"field": field, "reason": reason})


class InvalidQueryException(ValidationException):
    """유효하지 않은 검색어 (정규화 후 빈 문자열)"""
    def __init__(self, reason: str = "Missing q parameter", details: Optional[dict[str, Any]] = None):
        super().__init__("q", reason, details)
        self.message = reason


def error_message_of(error: BaseException) -> str:
    """소스별 {error: message}에 실을 메시지 추출"""
    if isinstance(error, PriceAggregatorException):
        return error.message
    message = str(error)
    return message or type(error).__name__
