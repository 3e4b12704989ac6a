# newsplus/api/bookmarks/schemas.py
from datetime import datetime
from typing import List, Optional

from newsplus.api.news.schemas import Article, CamelModel


class ArticlePayload(CamelModel):
    article: Optional[Article] = None


class ArticleUrl(CamelModel):
    url: Optional[str] = None


class ArticleRef(CamelModel):
    article: Optional[ArticleUrl] = None


class ReactionOut(CamelModel):
    id: int
    user_id: int
    article: Article
    created_at: datetime


class BookmarkResult(CamelModel):
    message: str
    bookmark: ReactionOut


class LikeResult(CamelModel):
    message: str
    like: ReactionOut


class ReactionList(CamelModel):
    items: List[ReactionOut]
    total: int
