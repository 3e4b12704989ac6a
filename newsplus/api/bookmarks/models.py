# newsplus/api/bookmarks/models.py
from typing import Any, Dict, Optional
from datetime import datetime
from sqlalchemy import UniqueConstraint
from sqlmodel import SQLModel, Field, JSON

from newsplus.db.models import timestamp_field, utcnow


class ReactionBase(SQLModel):
    user_id: int = Field(foreign_key="users.id", index=True)
    article_url: str = Field(index=True, max_length=2048)
    article: Dict[str, Any] = Field(default_factory=dict, sa_type=JSON)
    created_at: datetime = timestamp_field(default_factory=utcnow)


class Bookmark(ReactionBase, table=True):
    __tablename__ = "bookmarks"
    __table_args__ = (UniqueConstraint("user_id", "article_url", name="uq_bookmarks_user_url"),)

    id: Optional[int] = Field(default=None, primary_key=True)


class Like(ReactionBase, table=True):
    __tablename__ = "likes"
    __table_args__ = (UniqueConstraint("user_id", "article_url", name="uq_likes_user_url"),)

    id: Optional[int] = Field(default=None, primary_key=True)
