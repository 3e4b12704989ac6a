from typing import Annotated
from fastapi import Depends, Request
from .client import NewsApiClient


async def get_news_client(request: Request) -> NewsApiClient:
    """앱 lifespan에서 만든 NewsApiClient 주입"""
    return request.app.state.news_client


NewsClientDep = Annotated[NewsApiClient, Depends(get_news_client)]
