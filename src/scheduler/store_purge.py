"""만료된 영속 캐시 문서 정리 스케줄러

DB에는 TTL 인덱스가 없으므로 updated_at 기준 store_ttl_days가 지난 문서를
주기적으로 삭제합니다. (조회 시에도 만료 문서는 무시됨)
"""

from typing import Optional

from src.core.config import settings
from src.core.database import Database
from src.core.logging import logger
from src.repositories.impl.product_cache_repository import ProductCacheRepository


class StorePurgeScheduler:
    """영속 캐시 만료 정리 스케줄러"""

    @staticmethod
    def run_purge(database: Database, ttl_days: Optional[int] = None) -> dict:
        """만료 문서 삭제 실행"""
        max_age = ttl_days or settings.store_ttl_days
        try:
            with database.session() as db:
                deleted = ProductCacheRepository(db).purge_expired(max_age)
            logger.info(f"[Scheduler] Purged {deleted} expired store documents (ttl={max_age}d)")
            return {"status": "success", "deleted": deleted}
        except Exception as e:
            logger.error(f"[Scheduler] Failed to purge store: {e}", exc_info=True)
            return {"status": "error", "error": str(e)}

    @staticmethod
    def schedule_with_apscheduler(database: Database):
        """APScheduler를 사용한 스케줄링 설정"""
        from apscheduler.schedulers.background import BackgroundScheduler
        from apscheduler.triggers.interval import IntervalTrigger

        scheduler = BackgroundScheduler()

        scheduler.add_job(
            StorePurgeScheduler.run_purge,
            trigger=IntervalTrigger(minutes=settings.store_purge_interval_minutes),
            args=[database],
            id="store_purge",
            name="Expired Product Cache Purge",
            replace_existing=True,
        )

        logger.info(f"[Scheduler] Store purge job scheduled every {settings.store_purge_interval_minutes} minutes")
        return scheduler
