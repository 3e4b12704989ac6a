# newsplus/api/history/analytics.py
"""
읽기 기록 통계.

- 카테고리/언론사별 읽은 수
- 연속 읽기 일수(streak): 보는 사람의 시간대 기준 날짜 단위, 최대 30일
- top category/source: 최다 빈도, 동률이면 먼저 등장한 키
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple

from .schemas import ReadEvent

DEFAULT_CATEGORY = "general"
DEFAULT_SOURCE = "Unknown"
NONE_YET = "None yet"
STREAK_CAP = 30


@dataclass
class ReadingStats:
    total_read: int = 0
    categories: Dict[str, int] = field(default_factory=dict)
    sources: Dict[str, int] = field(default_factory=dict)
    streak: int = 0


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """ISO 8601 문자열 → aware datetime. 시간대 없으면 UTC로 간주, 파싱 실패는 None."""
    if not value:
        return None
    s = value.strip()
    if s.endswith("Z") or s.endswith("z"):
        s = s[:-1] + "+00:00"
    try:
        dt = datetime.fromisoformat(s)
    except ValueError:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def local_date(value: Optional[str], tz: tzinfo) -> Optional[date]:
    dt = parse_timestamp(value)
    return dt.astimezone(tz).date() if dt else None


def read_dates(events: Iterable[ReadEvent], tz: tzinfo) -> Set[date]:
    dates: Set[date] = set()
    for ev in events:
        d = local_date(ev.read_at, tz)
        if d is not None:
            dates.add(d)
    return dates


def compute_streak(dates: Set[date], today: date, cap: int = STREAK_CAP) -> int:
    if today not in dates:
        return 0
    streak = 1
    check = today - timedelta(days=1)
    while check in dates and streak < cap:
        streak += 1
        check -= timedelta(days=1)
    return streak


def aggregate_reading_stats(
    events: Sequence[ReadEvent],
    now: datetime,
    tz: tzinfo,
) -> ReadingStats:
    """events는 최신순 전체 기록. now는 aware datetime."""
    categories: Dict[str, int] = {}
    sources: Dict[str, int] = {}

    for ev in events:
        category = ev.category or DEFAULT_CATEGORY
        categories[category] = categories.get(category, 0) + 1

        source = (ev.source.name if ev.source else None) or DEFAULT_SOURCE
        sources[source] = sources.get(source, 0) + 1

    today = now.astimezone(tz).date()
    return ReadingStats(
        total_read=len(events),
        categories=categories,
        sources=sources,
        streak=compute_streak(read_dates(events, tz), today),
    )


def top_key(counts: Dict[str, int]) -> str:
    """최다 빈도 키. 동률이면 처음 등장한 키가 이김."""
    best: Optional[str] = None
    best_count = 0
    for key, count in counts.items():
        if best is None or count > best_count:
            best, best_count = key, count
    return best if best is not None else NONE_YET


def top_sources(counts: Dict[str, int], n: int = 5) -> List[Tuple[str, int]]:
    # sorted는 안정 정렬이라 동률은 등장 순서 유지
    return sorted(counts.items(), key=lambda kv: -kv[1])[:n]


def reading_by_day(events: Iterable[ReadEvent], tz: tzinfo) -> List[Tuple[str, int]]:
    """날짜별 읽은 수 (readAt 없으면 publishedAt 기준), 날짜 오름차순"""
    days: Dict[date, int] = {}
    for ev in events:
        d = local_date(ev.read_at or ev.published_at, tz)
        if d is None:
            continue
        days[d] = days.get(d, 0) + 1
    return [(d.isoformat(), c) for d, c in sorted(days.items())]
