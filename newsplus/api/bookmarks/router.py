# newsplus/api/bookmarks/router.py
from typing import Optional
import logging

from fastapi import APIRouter, Body, HTTPException, Query, Response, status

from newsplus.api.user.auth import CurrentUserDep
from newsplus.api.user.schemas import MessageResponse
from .dependencies import BookmarkServiceDep, LikeServiceDep
from .schemas import (
    ArticlePayload,
    ArticleRef,
    BookmarkResult,
    LikeResult,
    ReactionList,
)
from .service import to_out

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/bookmarks", tags=["bookmarks"])
likes_router = APIRouter(prefix="/likes", tags=["likes"])


def _url_from(ref: Optional[ArticleRef], url: Optional[str]) -> str:
    target = url or (ref.article.url if ref and ref.article else None)
    if not target:
        raise HTTPException(status_code=400, detail="Article URL is required")
    return target


# ------------------------------
# 북마크
# ------------------------------
@router.get("", response_model=ReactionList, summary="내 북마크 목록")
async def list_bookmarks(current: CurrentUserDep, svc: BookmarkServiceDep):
    rows = await svc.list_for_user(current.id)
    return ReactionList(items=[to_out(r) for r in rows], total=len(rows))


@router.post(
    "",
    response_model=BookmarkResult,
    status_code=status.HTTP_201_CREATED,
    summary="북마크 추가",
    description="같은 URL을 다시 추가하면 기존 북마크를 그대로 반환합니다.",
)
async def add_bookmark(
    body: ArticlePayload,
    response: Response,
    current: CurrentUserDep,
    svc: BookmarkServiceDep,
):
    if body.article is None:
        raise HTTPException(status_code=400, detail="Article data is required")
    try:
        row, created = await svc.add(current.id, body.article)
    except Exception:
        logger.exception("Error adding bookmark")
        raise HTTPException(status_code=500, detail="Failed to bookmark article")

    if not created:
        response.status_code = status.HTTP_200_OK
        return BookmarkResult(message="Article already bookmarked", bookmark=to_out(row))
    return BookmarkResult(message="Article bookmarked successfully", bookmark=to_out(row))


@router.delete("", response_model=MessageResponse, summary="북마크 삭제")
async def remove_bookmark(
    current: CurrentUserDep,
    svc: BookmarkServiceDep,
    body: Optional[ArticleRef] = Body(None),
    url: Optional[str] = Query(None),
):
    target = _url_from(body, url)
    try:
        await svc.remove(current.id, target)
    except Exception:
        logger.exception("Error removing bookmark")
        raise HTTPException(status_code=500, detail="Failed to remove bookmark")
    return MessageResponse(message="Bookmark removed successfully")


# ------------------------------
# 좋아요
# ------------------------------
@likes_router.get("", response_model=ReactionList, summary="내 좋아요 목록")
async def list_likes(current: CurrentUserDep, svc: LikeServiceDep):
    rows = await svc.list_for_user(current.id)
    return ReactionList(items=[to_out(r) for r in rows], total=len(rows))


@likes_router.post("", response_model=LikeResult, status_code=status.HTTP_201_CREATED, summary="좋아요")
async def add_like(
    body: ArticlePayload,
    response: Response,
    current: CurrentUserDep,
    svc: LikeServiceDep,
):
    if body.article is None:
        raise HTTPException(status_code=400, detail="Article data is required")
    try:
        row, created = await svc.add(current.id, body.article)
    except Exception:
        logger.exception("Error liking article")
        raise HTTPException(status_code=500, detail="Failed to like article")

    if not created:
        response.status_code = status.HTTP_200_OK
        return LikeResult(message="Article already liked", like=to_out(row))
    return LikeResult(message="Article liked successfully", like=to_out(row))


@likes_router.delete("", response_model=MessageResponse, summary="좋아요 취소")
async def remove_like(
    current: CurrentUserDep,
    svc: LikeServiceDep,
    body: Optional[ArticleRef] = Body(None),
    url: Optional[str] = Query(None),
):
    target = _url_from(body, url)
    try:
        await svc.remove(current.id, target)
    except Exception:
        logger.exception("Error removing like")
        raise HTTPException(status_code=500, detail="Failed to remove like")
    return MessageResponse(message="Like removed successfully")
