"""데이터베이스 연결 및 세션 관리

엔진은 모듈 전역이 아니라 Database 인스턴스가 소유합니다.
첫 사용 시 한 번만 연결(엔진 생성)하고 이후 재사용합니다.
"""
from contextlib import contextmanager
from typing import Any, Generator, Optional

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from sqlalchemy.pool import StaticPool

from src.core.config import settings
from src.core.logging import logger
from src.core.exceptions import DatabaseConnectionException

# SQLAlchemy Base
Base = declarative_base()


class Database:
    """영속 저장소 클라이언트 (connect-once / reuse)"""

    def __init__(self, url: Optional[str] = None):
        self.url = url or settings.database_url
        self._engine: Optional[Engine] = None
        self._session_factory: Optional[sessionmaker] = None

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            self._connect()
        return self._engine

    def _connect(self) -> None:
        kwargs: dict[str, Any] = {"pool_pre_ping": True}
        if self.url.startswith("sqlite"):
            kwargs["connect_args"] = {"check_same_thread": False}
            if ":memory:" in self.url or self.url in ("sqlite://", "sqlite:///"):
                # 인메모리 DB는 커넥션마다 별도 DB가 되므로 하나만 공유
                kwargs["poolclass"] = StaticPool
        else:
            kwargs.update(pool_recycle=300, pool_size=5, max_overflow=10)

        try:
            self._engine = create_engine(self.url, **kwargs)
        except Exception as e:
            logger.error(f"[Store] Failed to create engine: {type(e).__name__}: {e}")
            raise DatabaseConnectionException(str(e))

        self._session_factory = sessionmaker(autocommit=False, autoflush=False, bind=self._engine)
        logger.info("[Store] Database engine created")

    def init_schema(self) -> None:
        """테이블 생성"""
        # 모델 등록을 위해 import
        from src.repositories import models  # noqa: F401

        try:
            Base.metadata.create_all(bind=self.engine)
            logger.info("[Store] Database tables initialized successfully")
        except Exception as e:
            logger.error(f"[Store] Failed to initialize database: {e}")
            raise

    def new_session(self) -> Session:
        if self._session_factory is None:
            self._connect()
        return self._session_factory()

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """Context Manager: DB 세션 제공 (commit/rollback/close)"""
        db = self.new_session()
        try:
            yield db
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def ping(self) -> bool:
        try:
            with self.engine.connect() as connection:
                connection.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.warning(f"[Store] Ping failed: {type(e).__name__}: {e}")
            return False

    def dispose(self) -> None:
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
            self._session_factory = None
            logger.info("[Store] Database engine disposed")
