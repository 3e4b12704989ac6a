# newsplus/main.py
from contextlib import asynccontextmanager
import logging
from typing import Optional

import httpx
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from newsplus.config import Settings, settings as default_settings
from newsplus.db.session import Database
from newsplus.storage.stores import KeyValueStore, build_store
from newsplus.api.news.client import NewsApiClient
from newsplus.api.news.router import router as news_router
from newsplus.api.user.router import router as user_router
from newsplus.api.bookmarks.router import router as bookmarks_router, likes_router
from newsplus.api.history.router import router as history_router
from newsplus.api.alerts.router import router as alerts_router
from newsplus.api.preferences.router import router as preferences_router
from newsplus.api.dashboard.router import router as dashboard_router
from newsplus.api.health.router import router as health_router  # /api/health

logger = logging.getLogger("newsplus")


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# ---------------------------------------------------------------------
# 에러 응답: 항상 {"message": ...}
# ---------------------------------------------------------------------
async def http_exception_handler(request: Request, exc: HTTPException):
    return JSONResponse({"message": str(exc.detail)}, status_code=exc.status_code, headers=exc.headers)


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    first = errors[0] if errors else {}
    loc = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    detail = f"{loc}: {first.get('msg')}" if loc else str(first.get("msg", "Invalid request"))
    return JSONResponse({"message": f"Invalid request - {detail}"}, status_code=400)


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse({"message": "An unexpected error occurred"}, status_code=500)


def create_app(
    settings: Optional[Settings] = None,
    *,
    store: Optional[KeyValueStore] = None,
    news_transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    """
    조립 루트. DB / 뉴스 API 클라이언트 / key-value 저장소를 여기서 만들고
    lifespan에서 초기화 및 정리한다.
    """
    settings = settings or default_settings
    db = Database(settings)
    if store is None:
        store = build_store(
            settings.STORE_BACKEND,
            directory=settings.STORE_DIR,
            sessionmaker=db.sessionmaker,
        )

    # -----------------------------------------------------------------
    # Lifespan: 부팅 시 DB 스키마 생성 / 종료 시 엔진·HTTP 클라이언트 정리
    # -----------------------------------------------------------------
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if not settings.SKIP_DB_INIT:
            logger.info("Creating database and tables...")
            await db.init()
        else:
            logger.info("SKIP_DB_INIT=1, skipping DB init")

        news_client = NewsApiClient(
            settings.NEWS_API_BASE_URL,
            settings.NEWS_API_KEY,
            timeout=settings.NEWS_API_TIMEOUT,
            transport=news_transport,
        )
        app.state.news_client = news_client
        try:
            yield
        finally:
            await news_client.aclose()
            logger.info("Disposing database engine...")
            await db.dispose()

    app = FastAPI(
        title="NewsPlus Server",
        description="Personalized news reader API (FastAPI + SQLModel)",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.db = db
    app.state.store = store

    # -----------------------------------------------------------------
    # CORS: 로컬 개발 + FRONTEND_URL
    # -----------------------------------------------------------------
    allow_origins = {"http://localhost:3000", "http://127.0.0.1:3000"}
    if settings.FRONTEND_URL:
        allow_origins.add(settings.FRONTEND_URL)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(allow_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # -----------------------------------------------------------------
    # 라우터 등록
    # -----------------------------------------------------------------
    app.include_router(user_router, prefix="/api")
    app.include_router(news_router, prefix="/api")
    app.include_router(bookmarks_router, prefix="/api")
    app.include_router(likes_router, prefix="/api")
    app.include_router(history_router, prefix="/api")
    app.include_router(alerts_router, prefix="/api")
    app.include_router(preferences_router, prefix="/api")
    app.include_router(dashboard_router, prefix="/api")
    app.include_router(health_router, prefix="/api/health", tags=["health"])

    # 배포 환경 Health Check 용 심플 엔드포인트
    @app.get("/health")
    async def health():
        return {"ok": True}

    @app.get("/")
    async def root():
        return {
            "message": "NewsPlus API",
            "version": "1.0.0",
            "docs": "/docs",
            "redoc": "/redoc",
        }

    return app


setup_logging(default_settings.LOG_LEVEL)
app = create_app()


def run() -> None:
    import uvicorn

    uvicorn.run("newsplus.main:app", host="0.0.0.0", port=8000)
