# newsplus/api/history/schemas.py
from typing import Dict, List, Optional

from pydantic import BaseModel

from newsplus.api.news.schemas import Article, CamelModel


class ReadEvent(Article):
    """기사 + 읽은 시각"""
    read_at: Optional[str] = None


class ReadPayload(CamelModel):
    article: Optional[Article] = None


class HistoryList(CamelModel):
    items: List[ReadEvent]
    total: int
    # 저장된 값이 깨져 빈 상태로 읽었을 때 True
    recovered: bool = False


class DayCount(BaseModel):
    date: str
    count: int


class SourceCount(BaseModel):
    name: str
    value: int


class ReadingStatsOut(CamelModel):
    total_read: int
    categories: Dict[str, int]
    sources: Dict[str, int]
    streak: int
    top_category: str
    top_source: str
    top_sources: List[SourceCount] = []
    reading_by_day: List[DayCount] = []
