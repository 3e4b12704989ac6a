# newsplus/api/news/client.py
"""
외부 뉴스 API(newsapi.org v2 호환) 클라이언트.

- AsyncClient 하나를 앱 수명 동안 재사용 (lifespan에서 열고 닫음)
- 요청당 고정 타임아웃, 재시도 없음
- 실패해도 예외를 밖으로 던지지 않고 status="error" 응답으로 폴백
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List, Optional

import httpx
from pydantic import ValidationError

from .refresh import modulate_query, seeded_shuffle
from .schemas import Article, NewsResponse

logger = logging.getLogger(__name__)

RATE_LIMIT_MESSAGE = "API rate limit reached. Please try again later."


def error_response(message: str) -> NewsResponse:
    return NewsResponse(status="error", total_results=0, articles=[], message=message)


def _normalize(article: Article, category: Optional[str] = None) -> Article:
    update: Dict[str, Any] = {
        "description": article.description or "No description available",
        "content": article.content or "No content available",
        "author": article.author or "Unknown",
    }
    if category:
        update["category"] = category
    return article.model_copy(update=update)


class NewsApiClient:
    def __init__(
        self,
        base_url: str,
        api_key: str,
        *,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        headers = {"X-Api-Key": api_key} if api_key else {}
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    # ------------------------------
    # 내부: GET + 응답 정규화 (절대 예외를 밖으로 던지지 않음)
    # ------------------------------
    async def _get(self, path: str, params: Dict[str, Any], label: str) -> NewsResponse:
        try:
            r = await self._client.get(path, params=params)
        except httpx.HTTPError as e:
            # 타임아웃/네트워크 오류
            logger.error("Error fetching %s: %r", label, e)
            return error_response(str(e) or "Unknown error fetching news")

        if not r.is_success:
            if r.status_code == 429:
                logger.warning("News API rate limit exceeded")
                return error_response(RATE_LIMIT_MESSAGE)
            logger.error("News API responded with status: %s", r.status_code)
            return error_response(f"API Error: {r.status_code}")

        try:
            data = r.json()
        except ValueError as e:
            logger.error("Error parsing API response: %s", e)
            return error_response("Error parsing API response")
        if not isinstance(data, dict):
            logger.error("Error parsing API response: body is %s", type(data).__name__)
            return error_response("Error parsing API response")

        if data.get("status") == "error":
            return error_response(data.get("message") or "API Error")

        articles: List[Article] = []
        for raw in data.get("articles") or []:
            try:
                articles.append(Article.model_validate(raw))
            except ValidationError:
                # 제목/URL 없는 기사는 버림
                logger.debug("Skipping malformed article from %s", label)

        total = data.get("totalResults")
        return NewsResponse(
            status=str(data.get("status") or "ok"),
            total_results=int(total) if isinstance(total, int) else len(articles),
            articles=articles,
        )

    # ------------------------------
    # 카테고리 / 검색
    # ------------------------------
    async def fetch_news(
        self,
        category: str = "general",
        query: str = "",
        page: int = 1,
        page_size: int = 12,
        sort_by: str = "publishedAt",
        seed: Optional[int] = None,
    ) -> NewsResponse:
        page = max(1, page)
        mq = modulate_query(query, page_size, sort_by, seed)

        if mq.query:
            path = "/everything"
            params: Dict[str, Any] = {
                "q": mq.query,
                "page": page,
                "pageSize": mq.page_size,
                "sortBy": mq.sort_by,
            }
        else:
            path = "/top-headlines"
            params = {
                "category": category,
                "page": page,
                "pageSize": mq.page_size,
                "sortBy": mq.sort_by,
            }

        res = await self._get(path, params, label="news")
        if res.status == "error":
            return res

        tag = category if (category and category != "general" and not query) else None
        articles = [_normalize(a, tag) for a in res.articles]
        if seed is not None:
            articles = seeded_shuffle(articles, seed)
        return res.model_copy(update={"articles": articles})

    async def fetch_trending(self, count: int = 5) -> NewsResponse:
        params = {
            "q": "trending OR popular OR important",
            "sortBy": "popularity",
            "pageSize": count,
        }
        res = await self._get("/everything", params, label="trending news")
        if res.status == "error":
            return res
        return res.model_copy(update={"articles": [_normalize(a, "trending") for a in res.articles]})

    async def fetch_by_source(self, sources: str, count: int = 5) -> NewsResponse:
        params = {"sources": sources, "pageSize": count}
        res = await self._get("/top-headlines", params, label="news by source")
        if res.status == "error":
            return res
        return res.model_copy(update={"articles": [_normalize(a) for a in res.articles]})

    async def fetch_multi_category(
        self, categories: List[str], per_category: int = 4
    ) -> Dict[str, List[Article]]:
        """카테고리별 요청을 동시에 보내고 {category: articles}로 모음. 실패한 카테고리는 빈 리스트."""
        responses = await asyncio.gather(
            *(self.fetch_news(category=c, page_size=per_category) for c in categories)
        )
        results: Dict[str, List[Article]] = {}
        for category, res in zip(categories, responses):
            if res.status == "error":
                logger.warning("Error fetching %s news: %s", category, res.message)
            results[category] = [
                a.model_copy(update={"category": category}) for a in res.articles
            ]
        return results
