from __future__ import annotations
from datetime import datetime
from typing import Optional
from pydantic import BaseModel

# ---- Users ----
class RegisterBody(BaseModel):
    # 필수값 검증은 라우터에서 (400 메시지를 직접 만들기 위해)
    username: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None

class UserResponse(BaseModel):
    id: int
    username: str
    email: str
    created_at: datetime | None = None

class MessageResponse(BaseModel):
    message: str

# ---- Auth/Login ----
class LoginBody(BaseModel):
    email: str
    password: str

class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse
