from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import datetime, timezone


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    # sqlite는 timezone 정보 없이 돌려주므로 naive 값은 UTC로 간주
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def timestamp_field(**kwargs):
    """timestamptz 컬럼. 항상 aware UTC 값을 저장"""
    return Field(sa_type=DateTime(timezone=True), **kwargs)


class KeyValueEntry(SQLModel, table=True):
    """사용자별 네임스페이스 key-value 저장소 (SqlStore 백엔드)"""
    __tablename__ = "kv_entries"

    key: str = Field(primary_key=True, max_length=320)
    value: str
    updated_at: Optional[datetime] = timestamp_field(default_factory=utcnow)
