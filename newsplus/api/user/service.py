from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
import jwt
from sqlalchemy import select, or_
from sqlalchemy.ext.asyncio import AsyncSession

from newsplus.db.models import as_utc, utcnow
from .models import User, UserSession

BCRYPT_ROUNDS = 10
JWT_ALGORITHM = "HS256"


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # 해시 형식이 아니거나 72바이트 초과
        return False


def issue_token(user: User, session_id: int, *, secret: str, ttl_minutes: int) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user.id),
        "email": user.email,
        "sid": session_id,
        "iat": now,
        "exp": now + timedelta(minutes=ttl_minutes),
    }
    return jwt.encode(payload, secret, algorithm=JWT_ALGORITHM)


def decode_token(token: str, *, secret: str) -> dict:
    """만료/서명 오류는 jwt.InvalidTokenError 계열로 올라감"""
    return jwt.decode(token, secret, algorithms=[JWT_ALGORITHM], options={"require": ["sub", "sid", "exp"]})


class UserService:
    def __init__(self, session: AsyncSession):
        self.session = session

    # ---------- Users ----------
    async def find_existing(self, email: str, username: str) -> Optional[User]:
        stmt = select(User).where(or_(User.email == email, User.username == username)).limit(1)
        return (await self.session.execute(stmt)).scalars().first()

    async def create_user(self, username: str, email: str, password: str) -> User:
        user = User(username=username, email=email, password=hash_password(password))
        self.session.add(user)
        await self.session.commit()
        await self.session.refresh(user)
        return user

    async def get_user(self, user_id: int) -> Optional[User]:
        return await self.session.get(User, user_id)

    async def authenticate(self, email: str, password: str) -> Optional[User]:
        user = (await self.session.execute(select(User).where(User.email == email))).scalars().one_or_none()
        if not user or not verify_password(password, user.password):
            return None
        return user

    # ---------- Sessions ----------
    async def start_session(self, user_id: int) -> int:
        row = UserSession(user_id=user_id, started_at=utcnow())
        self.session.add(row)
        await self.session.flush()  # id 확보
        sid = row.id
        await self.session.commit()
        return sid

    async def get_active_session(self, session_id: int, user_id: int) -> Optional[UserSession]:
        row = (
            await self.session.execute(
                select(UserSession).where(
                    UserSession.id == session_id,
                    UserSession.user_id == user_id,
                )
            )
        ).scalars().one_or_none()
        if row is None or row.ended_at is not None:
            return None
        return row

    async def end_session(self, session_id: int, user_id: int) -> int:
        """세션 종료. 세션 길이(초)를 반환, 없으면 -1"""
        row = await self.get_active_session(session_id, user_id)
        if not row:
            return -1

        row.ended_at = utcnow()
        seconds = max(0, int((as_utc(row.ended_at) - as_utc(row.started_at)).total_seconds()))
        await self.session.commit()
        return seconds
