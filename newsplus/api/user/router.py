from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Request, status
from sqlalchemy.exc import IntegrityError

from newsplus.db.session import SessionDep
from .auth import CurrentUserDep
from .service import UserService, issue_token
from .schemas import (
    RegisterBody,
    LoginBody,
    MessageResponse,
    TokenResponse,
    UserResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

MIN_PASSWORD_LENGTH = 6
# bcrypt는 72바이트까지만 사용
MAX_PASSWORD_BYTES = 72

# ---------------- Register ----------------
@router.post("/register", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def register(body: RegisterBody, db: SessionDep):
    username = (body.username or "").strip()
    email = (body.email or "").strip().lower()
    password = body.password or ""

    if not username or not email or not password:
        raise HTTPException(400, detail="Missing required fields")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise HTTPException(400, detail="Password must be at least 6 characters")
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise HTTPException(400, detail="Password must be at most 72 bytes")

    svc = UserService(db)
    if await svc.find_existing(email, username):
        raise HTTPException(409, detail="User with this email or username already exists")

    try:
        await svc.create_user(username, email, password)
    except IntegrityError:
        # 동시 가입 경쟁
        await db.rollback()
        raise HTTPException(409, detail="User with this email or username already exists")
    except Exception:
        logger.exception("Registration error")
        raise HTTPException(500, detail="An error occurred during registration")

    return MessageResponse(message="User registered successfully")

# ---------------- Auth ----------------
@router.post("/login", response_model=TokenResponse)
async def login(body: LoginBody, request: Request, db: SessionDep):
    svc = UserService(db)
    user = await svc.authenticate(body.email.strip().lower(), body.password)
    if not user:
        raise HTTPException(status_code=401, detail="Invalid email or password")

    sid = await svc.start_session(user.id)
    settings = request.app.state.settings
    token = issue_token(user, sid, secret=settings.JWT_SECRET, ttl_minutes=settings.JWT_TTL_MINUTES)
    return TokenResponse(
        access_token=token,
        user=UserResponse(id=user.id, username=user.username, email=user.email, created_at=user.created_at),
    )

@router.post("/logout", response_model=MessageResponse)
async def logout(current: CurrentUserDep, db: SessionDep):
    await UserService(db).end_session(session_id=current.session_id, user_id=current.id)
    return MessageResponse(message="Logged out successfully")

@router.get("/me", response_model=UserResponse)
async def me(current: CurrentUserDep, db: SessionDep):
    user = await UserService(db).get_user(current.id)
    if not user:
        raise HTTPException(404, "User not found")
    return UserResponse(id=user.id, username=user.username, email=user.email, created_at=user.created_at)
