# newsplus/api/history/router.py
from typing import Annotated, Optional
from datetime import datetime, timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status

from newsplus.api.user.auth import CurrentUserDep
from newsplus.api.user.schemas import MessageResponse
from newsplus.storage.dependencies import StoreDep
from . import analytics
from .schemas import (
    DayCount,
    HistoryList,
    ReadEvent,
    ReadPayload,
    ReadingStatsOut,
    SourceCount,
)
from .service import HistoryService

router = APIRouter(prefix="/history", tags=["history"])


async def get_history_service(
    request: Request, current: CurrentUserDep, store: StoreDep
) -> HistoryService:
    settings = request.app.state.settings
    return HistoryService(store, settings.STORAGE_PREFIX, current.email, limit=settings.HISTORY_LIMIT)


HistoryServiceDep = Annotated[HistoryService, Depends(get_history_service)]


def resolve_tz(request: Request, tz: Optional[str]) -> tzinfo:
    name = tz or request.app.state.settings.DISPLAY_TZ
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError, OSError):
        # "America" 같은 디렉터리 이름은 OSError(IsADirectoryError)
        raise HTTPException(status_code=400, detail=f"Unknown time zone: {name}")


def build_stats(events, now: datetime, tz: tzinfo) -> ReadingStatsOut:
    stats = analytics.aggregate_reading_stats(events, now, tz)
    return ReadingStatsOut(
        total_read=stats.total_read,
        categories=stats.categories,
        sources=stats.sources,
        streak=stats.streak,
        top_category=analytics.top_key(stats.categories),
        top_source=analytics.top_key(stats.sources),
        top_sources=[SourceCount(name=n, value=v) for n, v in analytics.top_sources(stats.sources)],
        reading_by_day=[DayCount(date=d, count=c) for d, c in analytics.reading_by_day(events, tz)],
    )


@router.get("", response_model=HistoryList, summary="읽기 기록 (최신순)")
async def list_history(svc: HistoryServiceDep):
    events, recovered = await svc.load()
    return HistoryList(items=events, total=len(events), recovered=recovered)


@router.post("", response_model=ReadEvent, status_code=status.HTTP_201_CREATED, summary="기사 읽음 기록")
async def record_read(body: ReadPayload, svc: HistoryServiceDep):
    if body.article is None:
        raise HTTPException(status_code=400, detail="Article data is required")
    return await svc.record(body.article)


@router.delete("", response_model=MessageResponse, summary="읽기 기록 전체 삭제")
async def clear_history(svc: HistoryServiceDep):
    await svc.clear()
    return MessageResponse(message="Reading history cleared")


@router.delete("/item", response_model=MessageResponse, summary="읽기 기록에서 기사 하나 삭제")
async def remove_from_history(svc: HistoryServiceDep, url: str = Query(..., min_length=1)):
    if not await svc.remove(url):
        raise HTTPException(status_code=404, detail="Article not found in reading history")
    return MessageResponse(message="Article removed from reading history")


@router.get("/stats", response_model=ReadingStatsOut, summary="읽기 통계")
async def history_stats(
    request: Request,
    svc: HistoryServiceDep,
    tz: Optional[str] = Query(None, description="IANA 시간대 (기본: DISPLAY_TZ)"),
):
    zone = resolve_tz(request, tz)
    events, _ = await svc.load()
    return build_stats(events, datetime.now(timezone.utc), zone)
