# newsplus/api/preferences/schemas.py
from typing import List

from pydantic import Field

from newsplus.api.news.schemas import CamelModel


class NotificationPrefs(CamelModel):
    breaking: bool = True
    daily: bool = True
    weekly: bool = False


class Preferences(CamelModel):
    categories: List[str] = Field(default_factory=lambda: ["general", "technology", "science"])
    sources: List[str] = Field(default_factory=lambda: ["bbc-news", "the-verge", "reuters"])
    language: str = "en"
    region: str = "us"
    refresh_interval: int = Field(default=30, ge=1, le=1440)  # 분
    notifications: NotificationPrefs = Field(default_factory=NotificationPrefs)
    dark_mode: bool = False
    auto_refresh: bool = True


class PreferencesOut(Preferences):
    recovered: bool = False
