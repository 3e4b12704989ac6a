from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import SQLModel, Field

from newsplus.db.models import timestamp_field, utcnow


class User(SQLModel, table=True):
    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    username: str = Field(index=True, unique=True, max_length=64)
    email: str = Field(index=True, unique=True, max_length=254)
    password: str  # bcrypt 해시
    created_at: datetime = timestamp_field(default_factory=utcnow)


class UserSession(SQLModel, table=True):
    """로그인 세션. 토큰의 sid가 이 행을 가리키고, ended_at이 채워지면 토큰은 무효."""
    __tablename__ = "user_sessions"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True)
    started_at: datetime = timestamp_field(default_factory=utcnow)
    ended_at: Optional[datetime] = timestamp_field(default=None)
