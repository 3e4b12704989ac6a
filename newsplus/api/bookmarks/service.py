# newsplus/api/bookmarks/service.py
from __future__ import annotations

from typing import List, Optional, Tuple, Type, Union

from sqlalchemy import delete, desc, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from newsplus.api.news.schemas import Article
from .models import Bookmark, Like
from .schemas import ReactionOut

Reaction = Union[Bookmark, Like]


def to_out(row: Reaction) -> ReactionOut:
    return ReactionOut(
        id=row.id,
        user_id=row.user_id,
        article=Article.model_validate(row.article),
        created_at=row.created_at,
    )


class ReactionService:
    """
    북마크/좋아요 공통 토글 로직.
    (user_id, article.url) 당 최대 1개: 조회 후 없으면 삽입, 경쟁으로 유니크 제약에 걸리면 기존 행 반환.
    """

    def __init__(self, session: AsyncSession, model: Type[Reaction]):
        self.session = session
        self.model = model

    async def list_for_user(self, user_id: int) -> List[Reaction]:
        stmt = (
            select(self.model)
            .where(self.model.user_id == user_id)
            .order_by(desc(self.model.created_at), desc(self.model.id))
        )
        return list((await self.session.execute(stmt)).scalars().all())

    async def get(self, user_id: int, url: str) -> Optional[Reaction]:
        stmt = select(self.model).where(
            self.model.user_id == user_id,
            self.model.article_url == url,
        )
        return (await self.session.execute(stmt)).scalars().one_or_none()

    async def add(self, user_id: int, article: Article) -> Tuple[Reaction, bool]:
        """(행, 새로 만들었는지)"""
        existing = await self.get(user_id, article.url)
        if existing:
            return existing, False

        row = self.model(
            user_id=user_id,
            article_url=article.url,
            article=article.model_dump(by_alias=True, exclude_none=True),
        )
        self.session.add(row)
        try:
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            existing = await self.get(user_id, article.url)
            if existing is None:
                raise
            return existing, False
        await self.session.refresh(row)
        return row, True

    async def remove(self, user_id: int, url: str) -> bool:
        stmt = delete(self.model).where(
            self.model.user_id == user_id,
            self.model.article_url == url,
        )
        result = await self.session.execute(stmt)
        await self.session.commit()
        return (result.rowcount or 0) > 0
