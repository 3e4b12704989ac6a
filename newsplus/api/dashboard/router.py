# newsplus/api/dashboard/router.py
import asyncio
import logging
from datetime import datetime, timezone
from typing import List, Optional

from fastapi import APIRouter, Query, Request

from newsplus.api.history.analytics import NONE_YET
from newsplus.api.history.router import HistoryServiceDep, build_stats, resolve_tz
from newsplus.api.history.schemas import ReadEvent, ReadingStatsOut
from newsplus.api.news.dependencies import NewsClientDep
from newsplus.api.news.schemas import Article, CamelModel
from newsplus.api.preferences.router import PreferenceServiceDep

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/dashboard", tags=["dashboard"])

RECENT_COUNT = 3
TRENDING_COUNT = 3
PER_CATEGORY = 3
FALLBACK_CATEGORY = "technology"


class DashboardOut(CamelModel):
    recent: List[ReadEvent]
    stats: ReadingStatsOut
    trending: List[Article]
    recommended: List[Article]
    recommended_category: Optional[str] = None


@router.get("", response_model=DashboardOut, summary="대시보드 (최근 기록/통계/트렌딩/추천)")
async def dashboard(
    request: Request,
    history: HistoryServiceDep,
    prefs_svc: PreferenceServiceDep,
    client: NewsClientDep,
    tz: Optional[str] = Query(None),
):
    zone = resolve_tz(request, tz)
    events, _ = await history.load()
    prefs, _ = await prefs_svc.load()
    stats = build_stats(events, datetime.now(timezone.utc), zone)

    trending_res, category_news = await asyncio.gather(
        client.fetch_trending(TRENDING_COUNT),
        client.fetch_multi_category(prefs.categories, PER_CATEGORY),
    )
    if trending_res.status == "error":
        logger.warning("Error in trending news API: %s", trending_res.message)
    trending = trending_res.articles

    # 가장 많이 읽은 카테고리 → 해당 카테고리 뉴스, 없으면 트렌딩
    top = stats.top_category if stats.top_category != NONE_YET else FALLBACK_CATEGORY
    if category_news.get(top):
        recommended, recommended_category = category_news[top], top
    else:
        recommended, recommended_category = trending, None

    return DashboardOut(
        recent=events[:RECENT_COUNT],
        stats=stats,
        trending=trending,
        recommended=recommended,
        recommended_category=recommended_category,
    )
