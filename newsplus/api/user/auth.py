# newsplus/api/user/auth.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Annotated, Optional

import jwt
from fastapi import Depends, Header, HTTPException, Request

from newsplus.db.session import SessionDep
from .service import UserService, decode_token

logger = logging.getLogger(__name__)


@dataclass
class CurrentUser:
    id: int
    username: str
    email: str
    session_id: int


async def get_current_user(
    request: Request,
    db: SessionDep,
    authorization: Optional[str] = Header(None),
) -> CurrentUser:
    if not authorization or not authorization.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Unauthorized")

    token = authorization.split(" ", 1)[1].strip()
    try:
        payload = decode_token(token, secret=request.app.state.settings.JWT_SECRET)
        user_id = int(payload["sub"])
        session_id = int(payload["sid"])
    except jwt.ExpiredSignatureError:
        logger.info("auth token expired")
        raise HTTPException(status_code=401, detail="Session expired")
    except (jwt.InvalidTokenError, ValueError, TypeError):
        logger.info("auth token invalid")
        raise HTTPException(status_code=401, detail="Unauthorized")

    svc = UserService(db)
    if await svc.get_active_session(session_id, user_id) is None:
        raise HTTPException(status_code=401, detail="Unauthorized")
    user = await svc.get_user(user_id)
    if user is None:
        raise HTTPException(status_code=401, detail="Unauthorized")

    return CurrentUser(id=user.id, username=user.username, email=user.email, session_id=session_id)


CurrentUserDep = Annotated[CurrentUser, Depends(get_current_user)]
