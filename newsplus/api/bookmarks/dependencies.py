from typing import Annotated
from fastapi import Depends
from newsplus.db.session import SessionDep
from .models import Bookmark, Like
from .service import ReactionService


async def get_bookmark_service(session: SessionDep) -> ReactionService:
    return ReactionService(session, Bookmark)


async def get_like_service(session: SessionDep) -> ReactionService:
    return ReactionService(session, Like)


BookmarkServiceDep = Annotated[ReactionService, Depends(get_bookmark_service)]
LikeServiceDep = Annotated[ReactionService, Depends(get_like_service)]
