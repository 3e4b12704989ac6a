# newsplus/db/session.py
import logging
from typing import AsyncGenerator, Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool, StaticPool
from sqlmodel import SQLModel

from newsplus.config import Settings

logger = logging.getLogger(__name__)


def _engine_kwargs(settings: Settings) -> dict:
    url = settings.DATABASE_URL
    kwargs = dict(echo=settings.SQL_ECHO, future=True)

    if url.startswith("sqlite"):
        # 인메모리 sqlite는 커넥션마다 DB가 새로 생기므로 하나만 공유
        if ":memory:" in url or url.rstrip("/").endswith("sqlite+aiosqlite:"):
            kwargs["poolclass"] = StaticPool
        kwargs["connect_args"] = {"check_same_thread": False}
        return kwargs

    kwargs["pool_pre_ping"] = True
    # PgBouncer(pooler) 앞단에서는 애플리케이션 풀을 끄는 게 안전
    if "pooler.supabase.com" in url or settings.DB_USE_NULLPOOL:
        kwargs["poolclass"] = NullPool
    else:
        kwargs["pool_recycle"] = settings.DB_POOL_RECYCLE
    return kwargs


class Database:
    """
    엔진/세션 팩토리 소유자.
    create_app()에서 만들고 lifespan에서 init()/dispose()를 호출한다.
    """

    def __init__(self, settings: Settings):
        self.url = settings.DATABASE_URL
        self.engine: AsyncEngine = create_async_engine(self.url, **_engine_kwargs(settings))
        self.sessionmaker = async_sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

    async def init(self) -> None:
        # 테이블 메타데이터 등록을 위해 모델 모듈 임포트
        import newsplus.db.models  # noqa: F401
        import newsplus.api.user.models  # noqa: F401
        import newsplus.api.bookmarks.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)
        logger.info("Database tables created")

    async def dispose(self) -> None:
        await self.engine.dispose()
        logger.info("Database engine disposed")

    def session(self) -> AsyncSession:
        return self.sessionmaker()


# ---------------------------------------------------------------------
# DEPENDENCY
# ---------------------------------------------------------------------
async def get_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    db: Database = request.app.state.db
    async with db.session() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


SessionDep = Annotated[AsyncSession, Depends(get_session)]
