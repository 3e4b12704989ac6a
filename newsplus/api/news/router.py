# newsplus/api/news/router.py
from typing import List, Optional

from fastapi import APIRouter, Query

from newsplus.api.user.auth import CurrentUserDep
from .category_models import DISPLAY_CATEGORIES, normalize_category
from .dependencies import NewsClientDep
from .refresh import MAX_SEED
from .schemas import Category, NewsResponse, SortBy

router = APIRouter(prefix="/news", tags=["news"])


# ------------------------------
# 목록 / 검색
#  - 외부 API 오류는 status="error" 로 그대로 내려줌 (HTTP 200)
# ------------------------------
@router.get(
    "",
    response_model=NewsResponse,
    summary="뉴스 목록 조회",
    description="카테고리 탐색 또는 검색. seed를 주면 쿼리와 결과 순서가 seed에 따라 결정적으로 바뀝니다.",
)
async def list_news(
    current: CurrentUserDep,
    client: NewsClientDep,
    category: Optional[str] = None,
    q: Optional[str] = Query(None, max_length=500),
    page: int = Query(1, ge=1),
    page_size: int = Query(12, ge=1, le=100),
    sort_by: SortBy = Query("publishedAt"),
    seed: Optional[int] = Query(None, ge=0, le=MAX_SEED),
):
    return await client.fetch_news(
        category=normalize_category(category),
        query=(q or "").strip(),
        page=page,
        page_size=page_size,
        sort_by=sort_by,
        seed=seed,
    )


@router.get("/trending", response_model=NewsResponse, summary="트렌딩 뉴스")
async def trending_news(
    current: CurrentUserDep,
    client: NewsClientDep,
    count: int = Query(5, ge=1, le=50),
):
    return await client.fetch_trending(count)


@router.get("/sources", response_model=NewsResponse, summary="언론사별 뉴스")
async def news_by_source(
    current: CurrentUserDep,
    client: NewsClientDep,
    sources: str = Query(..., min_length=1, description="쉼표로 구분한 source id"),
    count: int = Query(5, ge=1, le=50),
):
    return await client.fetch_by_source(sources, count)


@router.get("/categories", response_model=List[Category], summary="카테고리 목록")
async def list_categories():
    return [Category(name=name, slug=slug) for name, slug in DISPLAY_CATEGORIES]
