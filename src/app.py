"""FastAPI 앱 팩토리"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from src.core.config import settings
from src.core.logging import logger
from src.api import health_router, scrape_router, get_database
from src.api.routes.scrape_routes import shutdown_services
from src.scheduler.store_purge import StorePurgeScheduler


@asynccontextmanager
async def lifespan(app: FastAPI):
    """애플리케이션 생명주기"""
    logger.info("Starting application...")
    database = get_database()
    database.init_schema()

    scheduler = StorePurgeScheduler.schedule_with_apscheduler(database)
    scheduler.start()
    logger.info("Application started")
    yield
    logger.info("Shutting down application...")
    try:
        scheduler.shutdown(wait=False)
    except Exception as e:
        logger.warning(f"Scheduler shutdown failed: {e}")
    await shutdown_services()


def create_app() -> FastAPI:
    """
    FastAPI 앱 생성 (Factory Pattern)

    Returns:
        FastAPI 앱 인스턴스
    """
    app = FastAPI(
        title=settings.api_title,
        description=settings.api_description,
        version=settings.api_version,
        lifespan=lifespan
    )

    # CORS (UI는 별도 오리진에서 호출)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health_router)
    app.include_router(scrape_router)

    return app

# 앱 인스턴스 생성 (uvicorn이 로드할 수 있도록)
app = create_app()
