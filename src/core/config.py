"""설정 관리 - 환경 변수 로드 및 검증"""
from pydantic_settings import BaseSettings
from pydantic import field_validator


class Settings(BaseSettings):
    """애플리케이션 설정"""

    # 영속 저장소 (2차 캐시)
    database_url: str = "sqlite:///./price_aggregator.db"
    store_ttl_days: int = 30  # updated_at 기준 rolling 만료
    store_purge_interval_minutes: int = 60

    # Redis (1차 캐시)
    redis_url: str = "redis://localhost:6379/0"
    cache_ttl: int = 3600  # 1시간

    # 집계 대상 소스
    enabled_sources: list[str] = ["amazon", "flipkart"]
    max_products_per_source: int = 6
    relevance_min_ratio: float = 0.5

    # 브라우저
    browser_executable_path: str = ""  # 비어 있으면 Playwright 번들 Chromium
    browser_headless: bool = True
    crawler_user_agent: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/114.0.0.0 Safari/537.36"
    )
    crawler_viewport_width: int = 1366
    crawler_viewport_height: int = 768

    # 소스별 타임아웃 (ms)
    amazon_goto_timeout_ms: int = 120000
    amazon_selector_timeout_ms: int = 15000
    flipkart_goto_timeout_ms: int = 60000
    flipkart_selector_timeout_ms: int = 20000
    flipkart_settle_ms: int = 2000
    popup_dismiss_timeout_ms: int = 5000

    # 실패 시 스크린샷/HTML 덤프
    debug_artifacts_enabled: bool = True
    debug_artifact_dir: str = "debug_artifacts"

    # API
    api_title: str = "가격 비교 집계 서비스"
    api_version: str = "1.0.0"
    api_description: str = "Amazon/Flipkart 검색 결과를 Redis → DB → 스크래핑 순서로 모아 반환합니다."

    # 로깅
    log_level: str = "INFO"

    @field_validator("cache_ttl", "store_ttl_days", "store_purge_interval_minutes")
    @classmethod
    def validate_ttl(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("ttl values must be positive")
        return v

    @field_validator(
        "amazon_goto_timeout_ms",
        "amazon_selector_timeout_ms",
        "flipkart_goto_timeout_ms",
        "flipkart_selector_timeout_ms",
        "popup_dismiss_timeout_ms",
    )
    @classmethod
    def validate_timeouts(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("crawler timeouts must be positive")
        return v

    @field_validator("flipkart_settle_ms")
    @classmethod
    def validate_settle(cls, v: int) -> int:
        if v < 0:
            raise ValueError("flipkart_settle_ms must be >= 0")
        return v

    @field_validator("max_products_per_source")
    @classmethod
    def validate_max_products(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("max_products_per_source must be positive")
        return v

    @field_validator("relevance_min_ratio")
    @classmethod
    def validate_relevance_ratio(cls, v: float) -> float:
        if not 0 < v <= 1:
            raise ValueError("relevance_min_ratio must be in (0, 1]")
        return v

    @field_validator("enabled_sources")
    @classmethod
    def validate_sources(cls, v: list[str]) -> list[str]:
        sources = [s.strip().lower() for s in v if s and s.strip()]
        if not sources:
            raise ValueError("enabled_sources must not be empty")
        return sources

    @field_validator("database_url", "redis_url")
    @classmethod
    def validate_required_urls(cls, v: str) -> str:
        if not v:
            raise ValueError("database_url and redis_url must not be empty")
        return v

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
